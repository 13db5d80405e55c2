"""Minimal HTTP transport for the QA backend (no external HTTP dependency)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from http.client import HTTPException
from typing import Any, Optional, Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen


class QaHttpError(RuntimeError):
    """Raised when the QA backend cannot be reached."""


@dataclass(frozen=True)
class HttpResult:
    status: int
    body: str


class QaTransport(Protocol):
    def post_json(self, url: str, payload: Any) -> HttpResult:
        """POST a JSON body and return status and text body."""

    def get_text(self, url: str) -> HttpResult:
        """GET a URL and return status and text body."""


class UrllibTransport:
    def __init__(self, timeout_seconds: Optional[float] = None) -> None:
        self._timeout_seconds = timeout_seconds

    def post_json(self, url: str, payload: Any) -> HttpResult:
        data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        req = Request(
            url=url,
            data=data,
            method="POST",
            headers={"Content-Type": "application/json"},
        )
        return self._send(req)

    def get_text(self, url: str) -> HttpResult:
        return self._send(Request(url=url, method="GET"))

    def _send(self, req: Request) -> HttpResult:
        kwargs: dict[str, Any] = {}
        if self._timeout_seconds is not None:
            kwargs["timeout"] = self._timeout_seconds
        try:
            with urlopen(req, **kwargs) as resp:
                status = int(resp.status)
                raw = resp.read().decode("utf-8", errors="replace")
        except HTTPError as exc:
            detail = ""
            try:
                detail = exc.read().decode("utf-8", errors="replace")
            except Exception:
                detail = ""
            return HttpResult(status=int(exc.code), body=detail)
        except URLError as exc:
            reason = exc.reason if getattr(exc, "reason", None) else str(exc)
            raise QaHttpError(f"QA backend connection error: {reason}") from exc
        except (HTTPException, OSError) as exc:
            # HTTPException covers truncated bodies and malformed status lines.
            raise QaHttpError(f"QA backend request failed: {type(exc).__name__}: {exc}") from exc
        return HttpResult(status=status, body=raw)
