import http.client
import io
import json
from typing import Any
from urllib.error import HTTPError, URLError

import pytest

from qachat.adapters.qa_http import QaHttpError, UrllibTransport


class _FakeResponse:
    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self._body = body.encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "_FakeResponse":
        return self

    def __exit__(self, *exc: Any) -> None:
        return None


def test_post_json_sends_json_body_and_header(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}

    def _fake_urlopen(req, **kwargs):  # type: ignore[no-untyped-def]
        captured["req"] = req
        captured["kwargs"] = kwargs
        return _FakeResponse(200, '{"event_id": "abc"}')

    monkeypatch.setattr("qachat.adapters.qa_http.urlopen", _fake_urlopen)

    result = UrllibTransport(timeout_seconds=30).post_json("http://h/call/fn", {"data": ["câu hỏi"]})

    req = captured["req"]
    assert result.status == 200
    assert result.body == '{"event_id": "abc"}'
    assert req.get_method() == "POST"
    assert req.get_header("Content-type") == "application/json"
    assert json.loads(req.data.decode("utf-8")) == {"data": ["câu hỏi"]}
    assert captured["kwargs"] == {"timeout": 30}


def test_get_text_without_timeout_passes_none(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}

    def _fake_urlopen(req, **kwargs):  # type: ignore[no-untyped-def]
        captured["kwargs"] = kwargs
        return _FakeResponse(200, "event: complete\ndata: []\n")

    monkeypatch.setattr("qachat.adapters.qa_http.urlopen", _fake_urlopen)

    result = UrllibTransport().get_text("http://h/call/fn/abc")
    assert result.body.startswith("event: complete")
    assert captured["kwargs"] == {}


def test_http_error_status_is_returned_not_raised(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_urlopen(req, **kwargs):  # type: ignore[no-untyped-def]
        raise HTTPError(req.full_url, 500, "Server Error", {}, io.BytesIO(b"boom"))  # type: ignore[arg-type]

    monkeypatch.setattr("qachat.adapters.qa_http.urlopen", _fake_urlopen)

    result = UrllibTransport().post_json("http://h/call/fn", {"data": ["q"]})
    assert result.status == 500
    assert result.body == "boom"


def test_connection_error_raises_qa_http_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_urlopen(req, **kwargs):  # type: ignore[no-untyped-def]
        raise URLError("connection refused")

    monkeypatch.setattr("qachat.adapters.qa_http.urlopen", _fake_urlopen)

    with pytest.raises(QaHttpError):
        UrllibTransport().get_text("http://h/call/fn/abc")


def test_truncated_body_raises_qa_http_error(monkeypatch: pytest.MonkeyPatch) -> None:
    class _TruncatedResponse(_FakeResponse):
        def read(self) -> bytes:
            raise http.client.IncompleteRead(b"partial")

    monkeypatch.setattr("qachat.adapters.qa_http.urlopen", lambda req, **kwargs: _TruncatedResponse(200, ""))

    with pytest.raises(QaHttpError, match="IncompleteRead"):
        UrllibTransport().get_text("http://h/call/fn/abc")


def test_bad_status_line_raises_qa_http_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_urlopen(req, **kwargs):  # type: ignore[no-untyped-def]
        raise http.client.BadStatusLine("garbage")

    monkeypatch.setattr("qachat.adapters.qa_http.urlopen", _fake_urlopen)

    with pytest.raises(QaHttpError):
        UrllibTransport().post_json("http://h/call/fn", {"data": ["q"]})
