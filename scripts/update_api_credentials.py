"""Store CrossChex Cloud credentials for a tenant.

Usage: python scripts/update_api_credentials.py <username> <api_key> <api_secret> [api_url]
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.pontual.pontual.core.constants import DEFAULT_API_URL
from src.pontual.pontual.core.exceptions import DomainError
from src.pontual.pontual.database.connection import DBConfig, DatabaseConnection
from src.pontual.pontual.tenants.mysql_tenant_repository import MySQLTenantRepository
from src.pontual.pontual.tenants.service import TenantService


def main(argv: list[str]) -> int:
    if len(argv) not in (3, 4):
        print(__doc__.strip().splitlines()[-1])
        return 2

    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())

    conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG))
    service = TenantService(MySQLTenantRepository(conn))

    username, api_key, api_secret = argv[:3]
    api_url = argv[3] if len(argv) == 4 else DEFAULT_API_URL
    try:
        service.update_credentials(username=username, api_key=api_key, api_secret=api_secret, api_url=api_url)
    except DomainError as e:
        print(f"ERROR: {e}")
        return 1

    print(f"OK: Updated credentials for {username}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
