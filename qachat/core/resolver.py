"""Remote QA resolver: submit a query, then fetch its result by event id.

The backend answers the submit call with a correlation id and serves the
result as a pseudo event stream (``event: ...`` / ``data: {...}`` lines).
Transport failures raise ``ResolverError``; an unexpected but well-formed
payload degrades to a placeholder answer instead.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union
from urllib.parse import quote

from qachat.adapters.qa_http import QaHttpError, QaTransport, UrllibTransport
from qachat.models.chat import Attachment, ResolvedAnswer

LOGGER = logging.getLogger(__name__)

EVENT_ID_FIELD = "event_id"
DATA_FIELD = "data"
SSE_DATA_PREFIX = "data: "
NAME_FIELDS = ("orig_name", "file_name")
URL_FIELD = "url"
DEFAULT_FILE_NAME = "file"

# Same set a full-URI encoder leaves untouched (besides alphanumerics and "_.-~").
_URI_SAFE_CHARS = ";,/?:@&=+$!*'()#"


class ResolverError(RuntimeError):
    """Base error for a failed resolve call."""


class SubmissionFailed(ResolverError):
    def __init__(self, status: Optional[int], body: str) -> None:
        self.status = status
        self.body = body
        if status is None:
            super().__init__(f"QA submit failed: {body}")
        else:
            super().__init__(f"QA submit failed (HTTP {status}): {body}")


class MissingCorrelationId(ResolverError):
    """Submit response did not carry a usable event id."""


class PollFailed(ResolverError):
    def __init__(self, status: Optional[int], body: str) -> None:
        self.status = status
        self.body = body
        if status is None:
            super().__init__(f"QA result fetch failed: {body}")
        else:
            super().__init__(f"QA result fetch failed (HTTP {status}): {body}")


class MalformedPayload(ResolverError):
    """Result payload is not valid JSON."""


@dataclass(frozen=True)
class DataEnvelope:
    items: list[Any]


@dataclass(frozen=True)
class BareList:
    items: list[Any]


@dataclass(frozen=True)
class Unrecognized:
    raw: Any


PayloadShape = Union[DataEnvelope, BareList, Unrecognized]


def encode_uri(url: str) -> str:
    return quote(url, safe=_URI_SAFE_CHARS)


def _last_segment(url: str) -> str:
    return url.split("/")[-1]


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def extract_correlation_id(body: Any) -> str:
    raw: Any = None
    if isinstance(body, dict) and EVENT_ID_FIELD in body:
        raw = body[EVENT_ID_FIELD]
    elif isinstance(body, list) and body:
        raw = body[0]

    if raw is None or isinstance(raw, (dict, list)):
        raise MissingCorrelationId("QA submit response has no event_id")
    value = str(raw).strip()
    if not value:
        raise MissingCorrelationId("QA submit response has an empty event_id")
    return value


def extract_event_payload(body: str) -> str:
    for line in body.split("\n"):
        if line.startswith(SSE_DATA_PREFIX):
            return line[len(SSE_DATA_PREFIX):]
    return body.strip()


def classify_payload(payload: Any) -> PayloadShape:
    if isinstance(payload, dict) and isinstance(payload.get(DATA_FIELD), list):
        return DataEnvelope(items=payload[DATA_FIELD])
    if isinstance(payload, list) and payload:
        return BareList(items=payload)
    return Unrecognized(raw=payload)


def _attachment_items(items: list[Any]) -> list[Any]:
    if len(items) < 2:
        return []
    raw = items[1]
    if isinstance(raw, list):
        return raw
    if isinstance(raw, (dict, str)):
        return [raw]
    return []


def normalize_attachment(item: Any) -> Optional[Attachment]:
    if isinstance(item, dict) and URL_FIELD in item:
        url = item[URL_FIELD]
        if url is None:
            return None
        url_text = str(url).strip()
        if not url_text:
            return None
        candidates = [item.get(field) for field in NAME_FIELDS]
        candidates.append(_last_segment(url_text))
        name = DEFAULT_FILE_NAME
        for candidate in candidates:
            if candidate is None:
                continue
            text = str(candidate).strip()
            if text:
                name = text
                break
        return Attachment(display_name=name, resource_url=encode_uri(url_text))

    if isinstance(item, str) and (item.startswith("http") or "/" in item):
        name = _last_segment(item).strip() or DEFAULT_FILE_NAME
        return Attachment(display_name=name, resource_url=encode_uri(item))

    return None


def normalize_payload(payload: Any) -> ResolvedAnswer:
    shape = classify_payload(payload)
    if isinstance(shape, Unrecognized):
        LOGGER.warning("qa payload has unrecognized shape type=%s", type(shape.raw).__name__)
        return ResolvedAnswer(answer_text=f"Invalid response data: {json.dumps(shape.raw, ensure_ascii=False)}")

    answer = _stringify(shape.items[0]) if shape.items else ""
    attachments: list[Attachment] = []
    for raw in _attachment_items(shape.items):
        attachment = normalize_attachment(raw)
        if attachment is None:
            LOGGER.debug("dropping unrecognized attachment descriptor type=%s", type(raw).__name__)
            continue
        attachments.append(attachment)
    return ResolvedAnswer(answer_text=answer, attachments=attachments)


class RemoteQAResolver:
    def __init__(
        self,
        endpoint: str,
        transport: Optional[QaTransport] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._transport = transport if transport is not None else UrllibTransport(timeout_seconds)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def poll_url(self, correlation_id: str) -> str:
        return f"{self._endpoint}/{quote(correlation_id, safe='')}"

    def submit(self, query: str) -> str:
        try:
            resp = self._transport.post_json(self._endpoint, {DATA_FIELD: [query]})
        except QaHttpError as exc:
            raise SubmissionFailed(status=None, body=str(exc)) from exc
        if resp.status != 200:
            raise SubmissionFailed(status=resp.status, body=resp.body)

        try:
            body = json.loads(resp.body)
        except json.JSONDecodeError as exc:
            raise MissingCorrelationId("QA submit response is not JSON") from exc
        return extract_correlation_id(body)

    def fetch(self, correlation_id: str) -> Any:
        try:
            resp = self._transport.get_text(self.poll_url(correlation_id))
        except QaHttpError as exc:
            raise PollFailed(status=None, body=str(exc)) from exc
        if resp.status != 200:
            raise PollFailed(status=resp.status, body=resp.body)

        raw = extract_event_payload(resp.body)
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MalformedPayload(f"QA result payload is not valid JSON: {raw[:200]}") from exc

    def resolve(self, query: str) -> ResolvedAnswer:
        correlation_id = self.submit(query)
        LOGGER.info("qa submitted event_id=%s query_len=%s", correlation_id, len(query))
        payload = self.fetch(correlation_id)
        answer = normalize_payload(payload)
        LOGGER.info(
            "qa resolved event_id=%s answer_len=%s attachments=%s",
            correlation_id,
            len(answer.answer_text),
            len(answer.attachments),
        )
        return answer
