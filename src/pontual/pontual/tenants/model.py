from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Tenant:
    """Domain entity: a company account and its CrossChex API credentials."""

    tenant_id: int
    username: str
    name: str
    api_key: str
    api_secret: str
    api_url: str
    is_active: bool = True


@dataclass(frozen=True)
class ProviderCredentials:
    api_url: str
    api_key: str
    api_secret: str

    def __repr__(self) -> str:
        return f"ProviderCredentials(api_url={self.api_url!r}, api_key={self.api_key[:8]!r}...)"
