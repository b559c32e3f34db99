"""HTTP client for the CrossChex Cloud API.

Every call is a POST of the same envelope to the API root; `header.nameSpace` and
`header.nameAction` select the operation.
"""

from __future__ import annotations

import logging
import math
import uuid
from datetime import datetime
from typing import Any, Optional

import requests

from ..common.datetime_utils import now_utc, to_api_timestamp
from ..core.constants import DEFAULT_API_URL, DEFAULT_PAGE_SIZE, DEFAULT_TIMEOUT_SECONDS
from ..core.exceptions import ProviderError, ValidationError
from ..events.ingest import parse_checktime

logger = logging.getLogger(__name__)


class CrossChexClient:
    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        api_key: str = "",
        api_secret: str = "",
        *,
        session: Optional[requests.Session] = None,
        per_page: int = DEFAULT_PAGE_SIZE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.api_url = api_url
        self._api_key = api_key
        self._api_secret = api_secret
        self._session = session or requests.Session()
        self.per_page = int(per_page)
        self.timeout = timeout
        self.headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    @staticmethod
    def _header(name_space: str, name_action: str) -> dict[str, str]:
        return {
            "nameSpace": name_space,
            "nameAction": name_action,
            "version": "1.0",
            "requestId": uuid.uuid4().hex,
            "timestamp": to_api_timestamp(now_utc()),
        }

    def _post(self, body: dict[str, Any]) -> dict[str, Any]:
        action = f"{body['header']['nameSpace']}/{body['header']['nameAction']}"
        try:
            response = self._session.post(self.api_url, headers=self.headers, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise ProviderError(f"{action} request failed: {e}") from e

        if response.status_code != 200:
            raise ProviderError(f"{action} failed with HTTP {response.status_code}: {response.text[:200]}")

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(f"{action} returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise ProviderError(f"{action} returned an unexpected body")
        return data

    def request_token(self) -> tuple[str, datetime]:
        body = {
            "header": self._header("authorize.token", "token"),
            "payload": {"api_key": self._api_key, "api_secret": self._api_secret},
        }
        data = self._post(body)
        payload = data.get("payload") or {}
        token = payload.get("token")
        if not token:
            raise ProviderError("authorize.token/token returned no token")

        try:
            expires_at = parse_checktime(payload.get("expires"))
        except ValidationError as e:
            raise ProviderError(f"authorize.token/token returned a bad expiry: {e}") from e
        return token, expires_at

    def fetch_page(self, *, token: str, begin: datetime, end: datetime, page: int) -> dict[str, Any]:
        body = {
            "header": self._header("attendance.record", "getrecord"),
            "authorize": {"type": "token", "token": token},
            "payload": {
                "begin_time": to_api_timestamp(begin),
                "end_time": to_api_timestamp(end),
                "order": "desc",
                "page": page,
                "per_page": self.per_page,
            },
        }
        data = self._post(body)
        payload = data.get("payload")
        if not isinstance(payload, dict):
            raise ProviderError("attendance.record/getrecord returned no payload")
        return payload

    def fetch_records(self, *, token: str, begin: datetime, end: datetime) -> list[dict[str, Any]]:
        """Walk every page of the window and return the merged record list."""
        records: list[dict[str, Any]] = []
        page = 1
        while True:
            payload = self.fetch_page(token=token, begin=begin, end=end, page=page)
            batch = payload.get("list") or []
            if not isinstance(batch, list):
                raise ProviderError("attendance.record/getrecord list is not an array")
            records.extend(batch)

            total_pages = math.ceil(_record_count(payload) / self.per_page)
            logger.debug("getrecord page %d/%d: %d records", page, total_pages, len(batch))
            if page >= total_pages or not batch:
                break
            page += 1

        return records


def _record_count(payload: dict[str, Any]) -> int:
    count = payload.get("count") or 0
    if isinstance(count, bool):
        raise ProviderError(f"attendance.record/getrecord count is not an integer: {count!r}")
    try:
        return int(count)
    except (TypeError, ValueError) as e:
        raise ProviderError(f"attendance.record/getrecord count is not an integer: {count!r}") from e
