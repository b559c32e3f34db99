from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .attendance.repository import EventSource
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_API_URL, DEFAULT_PAGE_SIZE, DEFAULT_SCHEDULE_ID, DEFAULT_TIMEOUT_SECONDS, DEFAULT_TIMEZONE
from .core.exceptions import ConfigurationError
from .database.connection import DBConfig, DatabaseConnection
from .provider.client import CrossChexClient
from .provider.source import CrossChexEventSource
from .reports.service import ReportService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.registry import ScheduleRegistry, build_builtin_registry
from .tenants.mysql_tenant_repository import MySQLTenantRepository
from .tenants.service import TenantService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    tenants_repo: MySQLTenantRepository
    schedules_repo: MySQLScheduleRepository

    registry: ScheduleRegistry
    event_source: EventSource

    tenant_service: TenantService
    attendance_service: AttendanceService
    report_service: ReportService
    timezone: str


def build_registry(settings: Any, schedules_repo: MySQLScheduleRepository) -> ScheduleRegistry:
    source = str(getattr(settings, "SCHEDULE_SOURCE", "static")).lower()
    default_id = getattr(settings, "DEFAULT_SCHEDULE_ID", DEFAULT_SCHEDULE_ID)
    timezone = getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)

    if source == "mysql":
        return schedules_repo.load_registry(default_schedule_id=default_id, timezone=timezone)
    if source == "static":
        return build_builtin_registry(timezone=timezone, default_schedule_id=default_id)
    raise ConfigurationError(f"Unknown SCHEDULE_SOURCE: {source!r}")


def build_event_source(settings: Any, tenant_service: TenantService) -> EventSource:
    credentials = tenant_service.resolve(
        tenant_username=getattr(settings, "TENANT_USERNAME", "") or None,
        api_url=getattr(settings, "CROSSCHEX_API_URL", DEFAULT_API_URL),
        api_key=getattr(settings, "CROSSCHEX_API_KEY", ""),
        api_secret=getattr(settings, "CROSSCHEX_API_SECRET", ""),
    )
    client = CrossChexClient(
        credentials.api_url,
        credentials.api_key,
        credentials.api_secret,
        per_page=int(getattr(settings, "PROVIDER_PAGE_SIZE", DEFAULT_PAGE_SIZE)),
        timeout=float(getattr(settings, "PROVIDER_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)),
    )
    logger.info("CrossChex client ready: %s", credentials.api_url)
    return CrossChexEventSource(client)


def build_container(settings: Any, *, event_source: Optional[EventSource] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG", {})))
    timezone = getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)

    tenants_repo = MySQLTenantRepository(conn)
    schedules_repo = MySQLScheduleRepository(conn)

    tenant_service = TenantService(tenants_repo)
    registry = build_registry(settings, schedules_repo)
    source = event_source or build_event_source(settings, tenant_service)

    attendance_service = AttendanceService(source, registry)
    report_service = ReportService(attendance_service, timezone=timezone)

    return Container(
        conn=conn,
        tenants_repo=tenants_repo,
        schedules_repo=schedules_repo,
        registry=registry,
        event_source=source,
        tenant_service=tenant_service,
        attendance_service=attendance_service,
        report_service=report_service,
        timezone=timezone,
    )
