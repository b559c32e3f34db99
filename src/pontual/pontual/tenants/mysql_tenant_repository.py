from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Tenant
from .repository import TenantRepository


class MySQLTenantRepository(TenantRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_username(self, username: str) -> Optional[Tenant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT tenant_id, username, name, api_key, api_secret, api_url, is_active
                FROM tenants
                WHERE username=%s
                """,
                (username,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Tenant(
                tenant_id=int(row["tenant_id"]),
                username=row["username"],
                name=row.get("name") or row["username"],
                api_key=row.get("api_key") or "",
                api_secret=row.get("api_secret") or "",
                api_url=row.get("api_url") or "",
                is_active=bool(row.get("is_active", True)),
            )

    def update_credentials(self, *, username: str, api_key: str, api_secret: str, api_url: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tenants
                SET api_key=%s, api_secret=%s, api_url=%s
                WHERE username=%s
                """,
                (api_key, api_secret, api_url, username),
            )
            return cur.rowcount > 0
