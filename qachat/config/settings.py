"""App config loader for qachat."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import re
from typing import Any, Optional

import yaml

MODES = {"gemini", "qa"}
LANGUAGES = {"vi", "en"}


@dataclass(frozen=True)
class QaConfig:
    endpoint: str
    timeout_seconds: Optional[int]


@dataclass(frozen=True)
class GeminiConfig:
    model: str
    disable_safety_filters: bool


@dataclass(frozen=True)
class ChatConfig:
    default_mode: str
    max_reply_chars: int


@dataclass(frozen=True)
class UiConfig:
    language: str


@dataclass(frozen=True)
class InstanceConfig:
    id: str


@dataclass(frozen=True)
class AppConfig:
    version: str
    qa: QaConfig
    gemini: GeminiConfig
    chat: ChatConfig
    ui: UiConfig
    instance: InstanceConfig


class ConfigLoadError(RuntimeError):
    """Raised when app config cannot be loaded."""


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ConfigLoadError(f"missing required config key: {key}")
    return data[key]


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigLoadError(f"{key} must be an object")
    return value


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigLoadError(f"config file not found: {path}")

    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ConfigLoadError("config root must be an object")

    qa_raw = _section(raw, "qa")
    gemini_raw = _section(raw, "gemini")
    chat_raw = _section(raw, "chat")
    ui_raw = _section(raw, "ui")
    instance_raw = _section(raw, "instance")

    endpoint = str(_require(qa_raw, "endpoint") or "").strip()
    if not re.match(r"^https?://", endpoint):
        raise ConfigLoadError(f"qa.endpoint must be an http(s) URL: {endpoint!r}")

    # No timeout unless configured: the transport then waits for the backend.
    timeout_raw = qa_raw.get("timeout_seconds")
    timeout_seconds: Optional[int] = None
    if timeout_raw is not None:
        timeout_seconds = int(timeout_raw)
        if timeout_seconds <= 0:
            raise ConfigLoadError("qa.timeout_seconds must be > 0")

    model = str(gemini_raw.get("model", "gemini-1.5-flash-latest")).strip()
    if not model:
        raise ConfigLoadError("gemini.model must not be empty")

    disable_safety_filters = gemini_raw.get("disable_safety_filters", True)
    if not isinstance(disable_safety_filters, bool):
        raise ConfigLoadError("gemini.disable_safety_filters must be true or false")

    default_mode = str(chat_raw.get("default_mode", "qa")).strip().lower()
    if default_mode not in MODES:
        raise ConfigLoadError(f"invalid chat.default_mode: {default_mode}")

    max_reply_chars = int(chat_raw.get("max_reply_chars", 3500))
    if max_reply_chars <= 0:
        raise ConfigLoadError("chat.max_reply_chars must be > 0")

    ui_language = str(ui_raw.get("language", "vi")).strip().lower()
    if ui_language not in LANGUAGES:
        raise ConfigLoadError(f"invalid ui.language: {ui_language}")

    instance_id = str(instance_raw.get("id", "default")).strip()
    if not instance_id:
        raise ConfigLoadError("instance.id must not be empty")
    if not re.fullmatch(r"[A-Za-z0-9_-]{1,40}", instance_id):
        raise ConfigLoadError(f"invalid instance.id: {instance_id}")

    return AppConfig(
        version=str(_require(raw, "version")),
        qa=QaConfig(endpoint=endpoint, timeout_seconds=timeout_seconds),
        gemini=GeminiConfig(
            model=model,
            disable_safety_filters=disable_safety_filters,
        ),
        chat=ChatConfig(default_mode=default_mode, max_reply_chars=max_reply_chars),
        ui=UiConfig(language=ui_language),
        instance=InstanceConfig(id=instance_id),
    )
