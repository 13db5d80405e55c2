"""Telegram in-chat persistent menu definitions (i18n)."""

from __future__ import annotations

from typing import Optional

from telegram import ReplyKeyboardMarkup

LANGS = ("vi", "en")

MENU_TEXTS = {
    "vi": {
        "mode_qa": "QA Supabase",
        "mode_gemini": "Gemini AI",
        "new_chat": "Cuộc trò chuyện mới",
        "status": "Trạng thái",
        "help": "Hướng dẫn",
    },
    "en": {
        "mode_qa": "QA Supabase",
        "mode_gemini": "Gemini AI",
        "new_chat": "New chat",
        "status": "Status",
        "help": "Help",
    },
}

MODE_ALIASES = {
    "gemini": "gemini",
    "ai": "gemini",
    "qa": "qa",
    "supabase": "qa",
    "gradio": "qa",
}

MENU_LAYOUT = (
    ("mode_qa", "mode_gemini"),
    ("new_chat", "status"),
    ("help",),
)


def resolve_lang(raw: str) -> str:
    lang = (raw or "").strip().lower()
    if lang in LANGS:
        return lang
    return "vi"


def menu_labels(lang: str) -> dict[str, str]:
    resolved = resolve_lang(lang)
    return dict(MENU_TEXTS[resolved])


def menu_action_from_text(text: str) -> Optional[str]:
    raw = (text or "").strip()
    if not raw:
        return None
    for lang in LANGS:
        table = MENU_TEXTS[lang]
        for action, label in table.items():
            if raw == label:
                return action
    return None


def mode_from_arg(raw: str) -> Optional[str]:
    return MODE_ALIASES.get((raw or "").strip().lower())


def main_menu_markup(lang: str, mode: str = "qa") -> ReplyKeyboardMarkup:
    labels = menu_labels(lang)
    keyboard = [[labels[action] for action in row] for row in MENU_LAYOUT]
    vi = resolve_lang(lang) == "vi"
    if mode == "gemini":
        placeholder = "Nhập tin nhắn với Gemini..." if vi else "Message Gemini..."
    else:
        placeholder = "Nhập câu hỏi tìm kiếm trên Supabase..." if vi else "Ask a question about Supabase data..."
    return ReplyKeyboardMarkup(
        keyboard=keyboard,
        resize_keyboard=True,
        is_persistent=True,
        one_time_keyboard=False,
        input_field_placeholder=placeholder,
    )
