"""Factory for chat session and QA resolver construction."""

from __future__ import annotations

import logging
from typing import Optional

from qachat.adapters.chat_client import ChatSessionClient, UnavailableChatClient
from qachat.adapters.gemini_chat_client import GeminiChatClient, GeminiChatClientError, gemini_text
from qachat.config.settings import AppConfig
from qachat.core.resolver import RemoteQAResolver

LOGGER = logging.getLogger(__name__)


class ChatFactoryError(RuntimeError):
    """Chat engine initialization error."""


def create_session_client(
    config: AppConfig,
    gemini_api_key: Optional[str],
    strict: bool = False,
) -> ChatSessionClient:
    lang = config.ui.language
    if not gemini_api_key:
        if strict:
            raise ChatFactoryError("gemini mode requires gemini_api_key in OS credential store")
        LOGGER.warning("gemini_api_key is missing; gemini mode will answer with an error")
        return UnavailableChatClient(gemini_text("not_ready", lang))

    try:
        return GeminiChatClient(
            api_key=gemini_api_key,
            model=config.gemini.model,
            disable_safety_filters=config.gemini.disable_safety_filters,
            lang=lang,
        )
    except GeminiChatClientError as exc:
        if strict:
            raise ChatFactoryError(str(exc)) from exc
        LOGGER.warning("gemini session unavailable: %s", exc)
        return UnavailableChatClient(gemini_text("not_ready", lang))


def create_resolver(config: AppConfig) -> RemoteQAResolver:
    return RemoteQAResolver(
        endpoint=config.qa.endpoint,
        timeout_seconds=config.qa.timeout_seconds,
    )
