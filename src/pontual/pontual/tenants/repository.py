from __future__ import annotations

from typing import Optional, Protocol

from .model import Tenant


class TenantRepository(Protocol):
    """Repository interface for Tenant.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_username(self, username: str) -> Optional[Tenant]:
        raise NotImplementedError

    def update_credentials(self, *, username: str, api_key: str, api_secret: str, api_url: str) -> bool:
        raise NotImplementedError
