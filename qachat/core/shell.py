"""Per-conversation chat state: transcript, selected mode and busy guard.

The shell is the only owner of the transcript. Backends receive the user
text and hand back a display string; they never see shell state.
"""

from __future__ import annotations

import logging
import threading

from qachat.adapters.chat_client import ChatSessionClient
from qachat.core.formatting import error_text, render_answer
from qachat.core.resolver import RemoteQAResolver, ResolverError
from qachat.models.chat import ChatMode, DisplayMessage, Origin

LOGGER = logging.getLogger(__name__)


class ShellBusyError(RuntimeError):
    """Raised when a submission arrives while another one is in flight."""


class ChatShell:
    def __init__(
        self,
        session: ChatSessionClient,
        resolver: RemoteQAResolver,
        mode: ChatMode = ChatMode.QA,
        lang: str = "vi",
    ) -> None:
        self._session = session
        self._resolver = resolver
        self._mode = mode
        self._lang = lang
        self._transcript: list[DisplayMessage] = []
        self._lock = threading.Lock()

    @property
    def mode(self) -> ChatMode:
        return self._mode

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @property
    def transcript(self) -> tuple[DisplayMessage, ...]:
        return tuple(self._transcript)

    def _append(self, text: str, origin: Origin) -> DisplayMessage:
        message = DisplayMessage(text=text, origin=origin)
        self._transcript.append(message)
        return message

    def greet(self, text: str) -> DisplayMessage:
        return self._append(text, Origin.ASSISTANT)

    def select_mode(self, mode: ChatMode) -> bool:
        if self.busy:
            return False
        self._mode = mode
        return True

    def _ask_resolver(self, query: str) -> str:
        try:
            answer = self._resolver.resolve(query)
        except ResolverError as exc:
            LOGGER.warning("qa resolve failed error=%s", type(exc).__name__)
            return error_text(exc, self._lang)
        return render_answer(answer, self._lang)

    def _dispatch(self, query: str) -> str:
        if self._mode == ChatMode.GEMINI:
            return self._session.send(query)
        return self._ask_resolver(query)

    def submit(self, text: str) -> DisplayMessage:
        query = (text or "").strip()
        if not query:
            raise ValueError("message must not be empty")
        if not self._lock.acquire(blocking=False):
            raise ShellBusyError("a reply is still in progress")
        try:
            self._append(query, Origin.USER)
            reply = self._dispatch(query)
            return self._append(reply, Origin.ASSISTANT)
        finally:
            self._lock.release()
