"""Gemini SDK adapter for stateful free-text chat."""

from __future__ import annotations

import importlib
import logging

LOGGER = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-1.5-flash-latest"

HARM_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)

_TEXTS = {
    "vi": {
        "empty": "Không có phản hồi từ Gemini.",
        "failed": "Đã xảy ra lỗi: {detail}",
        "not_ready": "Lỗi: Chưa khởi tạo được Gemini API.",
    },
    "en": {
        "empty": "No response from Gemini.",
        "failed": "An error occurred: {detail}",
        "not_ready": "Error: Gemini API is not initialized.",
    },
}


def gemini_text(key: str, lang: str = "vi", **kwargs: str) -> str:
    table = _TEXTS["en"] if (lang or "vi").lower() == "en" else _TEXTS["vi"]
    return table[key].format(**kwargs)


class GeminiChatClientError(RuntimeError):
    """Gemini chat session could not be created."""


class GeminiChatClient:
    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        disable_safety_filters: bool = True,
        lang: str = "vi",
    ) -> None:
        if not api_key:
            raise GeminiChatClientError("gemini_api_key is required")
        try:
            genai = importlib.import_module("google.generativeai")
        except Exception as exc:
            raise GeminiChatClientError("google-generativeai package is required") from exc

        safety_settings = None
        if disable_safety_filters:
            safety_settings = [{"category": c, "threshold": "BLOCK_NONE"} for c in HARM_CATEGORIES]

        try:
            genai.configure(api_key=api_key)
            self._model = genai.GenerativeModel(model_name=model, safety_settings=safety_settings)
            self._chat = self._model.start_chat(history=[])
        except Exception as exc:
            raise GeminiChatClientError(f"failed to start Gemini chat: {exc}") from exc
        self._model_name = model
        self._lang = lang

    def send(self, turn_text: str) -> str:
        prompt = (turn_text or "").strip()
        if not prompt:
            return gemini_text("empty", self._lang)

        try:
            resp = self._chat.send_message(prompt)
        except Exception as exc:
            LOGGER.warning("gemini send failed model=%s error=%s", self._model_name, type(exc).__name__)
            return gemini_text("failed", self._lang, detail=str(exc))

        # .text raises ValueError when the candidate was blocked or has no parts.
        try:
            text = (getattr(resp, "text", "") or "").strip()
        except ValueError:
            text = ""
        if not text:
            return gemini_text("empty", self._lang)
        return text
