import json
from dataclasses import replace
from pathlib import Path
from typing import Any

import pytest

from qachat.adapters.qa_http import HttpResult
from qachat.config.secrets import RuntimeSecrets
from qachat.core.resolver import RemoteQAResolver
from qachat.core.runtime import AppRuntime
from qachat.models.chat import ChatMode


class _ScriptedTransport:
    def post_json(self, url: str, payload: Any) -> HttpResult:
        return HttpResult(status=200, body=json.dumps({"event_id": "evt1"}))

    def get_text(self, url: str) -> HttpResult:
        return HttpResult(status=200, body='data: {"data": ["' + "x" * 50 + '"]}\n')


@pytest.fixture
def runtime(monkeypatch: pytest.MonkeyPatch) -> AppRuntime:
    monkeypatch.setattr(
        "qachat.core.runtime.load_runtime_secrets",
        lambda service_name: RuntimeSecrets(telegram_bot_token="tg_token", gemini_api_key=None),
    )
    rt = AppRuntime(config_path=Path("config/app.yaml"))
    rt.resolver = RemoteQAResolver("http://qa.local/call/fn", transport=_ScriptedTransport())
    return rt


def test_runtime_loads_token_and_defaults(runtime: AppRuntime) -> None:
    assert runtime.telegram_bot_token == "tg_token"
    assert runtime.gemini_configured is False
    assert runtime.shell_for(1).mode == ChatMode.QA


def test_runtime_answers_qa(runtime: AppRuntime) -> None:
    answer = runtime.answer_chat(chat_id=7, user_text="question")
    assert answer == "x" * 50
    assert len(runtime.shell_for(7).transcript) == 2


def test_runtime_clips_long_reply(runtime: AppRuntime) -> None:
    runtime.config = replace(runtime.config, chat=replace(runtime.config.chat, max_reply_chars=10))
    assert runtime.answer_chat(chat_id=8, user_text="question") == "x" * 10


def test_runtime_gemini_without_key_answers_with_error(runtime: AppRuntime) -> None:
    assert runtime.select_mode(3, ChatMode.GEMINI) is True
    answer = runtime.answer_chat(chat_id=3, user_text="hello")
    assert "Gemini" in answer


def test_runtime_keeps_chats_separate_and_reset_keeps_mode(runtime: AppRuntime) -> None:
    runtime.select_mode(1, ChatMode.GEMINI)
    runtime.answer_chat(chat_id=1, user_text="hello")
    assert runtime.shell_for(2).mode == ChatMode.QA
    assert runtime.shell_for(2).transcript == ()

    shell = runtime.reset_chat(1)
    assert shell.mode == ChatMode.GEMINI
    assert shell.transcript == ()
    assert runtime.shell_for(1) is shell


def test_runtime_status_reports_mode_and_endpoint(runtime: AppRuntime) -> None:
    status = runtime.get_runtime_status(5)
    assert status["mode"] == "qa"
    assert status["qa_endpoint"] == "http://qa.local/call/fn"
    assert status["gemini_ready"] == "no"
