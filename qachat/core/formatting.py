"""Reply formatting for resolved answers and failures (vi/en)."""

from __future__ import annotations

from qachat.models.chat import Attachment, ResolvedAnswer

_ATTACHMENTS_HEADER = {
    "vi": "📎 **File liên quan:**",
    "en": "📎 **Related files:**",
}

_ERROR_PREFIX = {
    "vi": "Lỗi",
    "en": "Error",
}


def _lang(lang: str) -> str:
    return "en" if (lang or "vi").lower() == "en" else "vi"


def attachments_header(lang: str = "vi") -> str:
    return _ATTACHMENTS_HEADER[_lang(lang)]


def attachment_link(attachment: Attachment) -> str:
    return f"- [{attachment.display_name}]({attachment.resource_url})"


def render_answer(answer: ResolvedAnswer, lang: str = "vi") -> str:
    if not answer.attachments:
        return answer.answer_text
    links = "\n".join(attachment_link(a) for a in answer.attachments)
    return f"{answer.answer_text}\n\n{attachments_header(lang)}\n{links}"


def error_text(exc: Exception, lang: str = "vi") -> str:
    return f"{_ERROR_PREFIX[_lang(lang)]}: {exc}"
