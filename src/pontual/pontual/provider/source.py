from __future__ import annotations

from datetime import datetime
from typing import Any

from ..attendance.repository import EventSource
from .client import CrossChexClient
from .tokens import TokenProvider


class CrossChexEventSource(EventSource):
    def __init__(self, client: CrossChexClient, tokens: TokenProvider | None = None):
        self._client = client
        self._tokens = tokens or TokenProvider(client.request_token)

    def fetch_records(self, begin: datetime, end: datetime) -> list[dict[str, Any]]:
        return self._client.fetch_records(token=self._tokens.get_token(), begin=begin, end=end)
