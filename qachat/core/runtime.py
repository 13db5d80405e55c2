"""Application runtime wiring."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from qachat.adapters.chat_factory import create_resolver, create_session_client
from qachat.config.secrets import load_runtime_secrets
from qachat.config.settings import AppConfig, load_config
from qachat.core.resolver import RemoteQAResolver
from qachat.core.shell import ChatShell
from qachat.models.chat import ChatMode, DisplayMessage

LOGGER = logging.getLogger(__name__)


class AppRuntime:
    def __init__(
        self,
        config_path: Path,
        secret_service_name: str = "qachat",
    ) -> None:
        self.config: AppConfig = load_config(config_path)
        self.instance_id = self.config.instance.id
        self.secret_service_name = secret_service_name

        secrets = load_runtime_secrets(service_name=secret_service_name)
        self.telegram_bot_token = secrets.telegram_bot_token
        self._gemini_api_key = secrets.gemini_api_key

        self.resolver: RemoteQAResolver = create_resolver(self.config)
        self._shells: dict[int, ChatShell] = {}
        self._shells_lock = threading.Lock()

    @property
    def gemini_configured(self) -> bool:
        return bool(self._gemini_api_key)

    def _new_shell(self) -> ChatShell:
        session = create_session_client(self.config, self._gemini_api_key)
        return ChatShell(
            session=session,
            resolver=self.resolver,
            mode=ChatMode(self.config.chat.default_mode),
            lang=self.config.ui.language,
        )

    def shell_for(self, chat_id: int) -> ChatShell:
        with self._shells_lock:
            shell = self._shells.get(chat_id)
            if shell is None:
                shell = self._new_shell()
                self._shells[chat_id] = shell
                LOGGER.info("chat session opened chat_id=%s mode=%s", chat_id, shell.mode.value)
            return shell

    def has_chat(self, chat_id: int) -> bool:
        with self._shells_lock:
            return chat_id in self._shells

    def reset_chat(self, chat_id: int) -> ChatShell:
        with self._shells_lock:
            previous = self._shells.get(chat_id)
            shell = self._new_shell()
            if previous is not None:
                shell.select_mode(previous.mode)
            self._shells[chat_id] = shell
        LOGGER.info("chat session reset chat_id=%s", chat_id)
        return shell

    def select_mode(self, chat_id: int, mode: ChatMode) -> bool:
        return self.shell_for(chat_id).select_mode(mode)

    def answer_chat(self, chat_id: int, user_text: str) -> str:
        message: DisplayMessage = self.shell_for(chat_id).submit(user_text)
        text = (message.text or "").strip()
        if not text:
            raise RuntimeError("chat answer is empty")
        # Telegram single-message practical upper bound handling.
        return text[: self.config.chat.max_reply_chars]

    def get_runtime_status(self, chat_id: int) -> dict[str, str]:
        shell = self.shell_for(chat_id)
        return {
            "instance_id": self.instance_id,
            "mode": shell.mode.value,
            "qa_endpoint": self.resolver.endpoint,
            "gemini_model": self.config.gemini.model,
            "gemini_ready": "yes" if self.gemini_configured else "no",
            "messages": str(len(shell.transcript)),
        }
