from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional, Sequence

import httpx

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import day_key
from ..core.constants import DEFAULT_REMOTE_TIMEOUT_SECONDS
from ..core.enums import EventType
from ..core.exceptions import RemoteRejected, RemoteUnavailable, ValidationError
from .base import PersistenceGateway

logger = logging.getLogger(__name__)

# Client errors worth retrying: request timeout and rate limiting.
_RETRYABLE_4XX = {408, 429}


class HttpPersistenceGateway(PersistenceGateway):
    """Talks to the attendance REST API (``{success, data, message}`` envelope)."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_REMOTE_TIMEOUT_SECONDS,
        token: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpPersistenceGateway":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            resp = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise RemoteUnavailable(f"{method} {url} timed out") from exc
        except httpx.HTTPError as exc:
            raise RemoteUnavailable(f"{method} {url} failed: {exc}") from exc

        if resp.status_code >= 500 or resp.status_code in _RETRYABLE_4XX:
            raise RemoteUnavailable(f"{method} {url} returned HTTP {resp.status_code}")
        if resp.status_code >= 400:
            raise RemoteRejected(f"{method} {url} returned HTTP {resp.status_code}: {_message(resp)}")

        try:
            body = resp.json()
        except ValueError as exc:
            raise RemoteUnavailable(f"{method} {url} returned a non-JSON body") from exc

        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            raise RemoteRejected(f"{method} {url} rejected: {message or 'no success flag'}")
        return body.get("data")

    def list_records(
        self,
        *,
        employee_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        params = {}
        if employee_id:
            params["employee_id"] = employee_id
        if date_from:
            params["date_from"] = day_key(date_from)
        if date_to:
            params["date_to"] = day_key(date_to)

        data = self._request("GET", "/attendance", params=params)
        if not isinstance(data, list):
            raise RemoteUnavailable("GET /attendance returned no record list")
        return [self._decode(item) for item in data]

    def mark(self, *, employee_id: str, event_type: EventType, timestamp: datetime) -> AttendanceRecord:
        payload = {
            "employee_id": employee_id,
            "type": EventType(event_type).value,
            "timestamp": timestamp.isoformat(timespec="minutes"),
        }
        data = self._request("POST", "/attendance/mark", json=payload)

        # The server answers with a MarkResult; bare records are accepted too.
        record = data.get("record") if isinstance(data, dict) and "outcome" in data else data
        if not record:
            raise RemoteRejected(f"POST /attendance/mark stored no record for {employee_id}")
        logger.debug("Remote mark %s %s accepted", employee_id, payload["type"])
        return self._decode(record)

    @staticmethod
    def _decode(item: Any) -> AttendanceRecord:
        try:
            return AttendanceRecord.from_dict(item)
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise RemoteUnavailable(f"Unusable attendance record from remote: {item!r}") from exc


def _message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.reason_phrase
