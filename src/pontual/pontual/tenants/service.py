from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_API_URL
from ..core.exceptions import ConfigurationError, ValidationError
from .model import ProviderCredentials
from .repository import TenantRepository

logger = logging.getLogger(__name__)


class TenantService:
    """Use case: find the provider credentials a deployment should use."""

    def __init__(self, tenants: Optional[TenantRepository] = None):
        self._tenants = tenants

    def credentials_for(self, username: str) -> ProviderCredentials:
        if self._tenants is None:
            raise ConfigurationError("Tenant storage is not configured")

        tenant = self._tenants.get_by_username(username)
        if not tenant or not tenant.is_active:
            raise ConfigurationError(f"Tenant {username!r} does not exist or is inactive")
        if not tenant.api_key or not tenant.api_secret:
            raise ConfigurationError(f"Tenant {username!r} has no API credentials")

        return ProviderCredentials(
            api_url=tenant.api_url or DEFAULT_API_URL,
            api_key=tenant.api_key,
            api_secret=tenant.api_secret,
        )

    def resolve(
        self,
        *,
        tenant_username: Optional[str],
        api_url: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
    ) -> ProviderCredentials:
        """Stored tenant credentials when a tenant is configured, environment otherwise."""
        if tenant_username:
            return self.credentials_for(tenant_username)

        if not api_key or not api_secret:
            raise ConfigurationError("CROSSCHEX_API_KEY and CROSSCHEX_API_SECRET must be set")
        logger.debug("Using provider credentials from the environment")
        return ProviderCredentials(api_url=api_url or DEFAULT_API_URL, api_key=api_key, api_secret=api_secret)

    def update_credentials(self, *, username: str, api_key: str, api_secret: str, api_url: str = DEFAULT_API_URL) -> None:
        if self._tenants is None:
            raise ConfigurationError("Tenant storage is not configured")

        username = require_non_empty(username, "Username")
        api_key = require_non_empty(api_key, "API key")
        api_secret = require_non_empty(api_secret, "API secret")

        if not self._tenants.update_credentials(
            username=username, api_key=api_key, api_secret=api_secret, api_url=api_url.strip() or DEFAULT_API_URL
        ):
            raise ValidationError(f"Tenant {username!r} not found")
