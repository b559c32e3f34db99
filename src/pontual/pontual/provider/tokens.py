from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_utc

logger = logging.getLogger(__name__)

TokenFetcher = Callable[[], tuple[str, datetime]]


class TokenProvider:
    """Caches one provider token until it expires.

    The owner decides the lifetime of the cache by owning the instance; there is
    no module-level token.
    """

    def __init__(self, fetch: TokenFetcher, *, leeway: timedelta = timedelta(seconds=30)):
        self._fetch = fetch
        self._leeway = leeway
        self._token: Optional[str] = None
        self._expires_at: Optional[datetime] = None

    @property
    def expires_at(self) -> Optional[datetime]:
        return self._expires_at

    def is_valid(self, now: datetime) -> bool:
        return bool(self._token) and self._expires_at is not None and now + self._leeway < self._expires_at

    def get_token(self, *, now: Optional[datetime] = None) -> str:
        now = now or now_utc()
        if not self.is_valid(now):
            self._token, self._expires_at = self._fetch()
            logger.debug("Provider token refreshed, expires at %s", self._expires_at.isoformat())
        return self._token

    def invalidate(self) -> None:
        self._token = None
        self._expires_at = None
