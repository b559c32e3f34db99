from __future__ import annotations

import io
from datetime import datetime
from zoneinfo import ZoneInfo

import pandas as pd
import pytest

from src.pontual.pontual.attendance.service import AttendanceService
from src.pontual.pontual.container import Container
from src.pontual.pontual.core.exceptions import ProviderError
from src.pontual.pontual.database.connection import DBConfig, DatabaseConnection
from src.pontual.pontual.main import create_app
from src.pontual.pontual.reports.service import ReportService
from src.pontual.pontual.schedules.registry import build_builtin_registry
from src.pontual.pontual.tenants.service import TenantService

LIS = ZoneInfo("Europe/Lisbon")
NOW = datetime(2025, 2, 3, 12, 30, tzinfo=LIS)


def rec(workno: str, hh: int, mm: int, code: int, name: str) -> dict:
    return {
        "uuid": f"{workno}-{hh}{mm}",
        "checktype": code,
        "checktime": f"2025-02-03T{hh:02d}:{mm:02d}:00+00:00",
        "device": {"name": "Porta"},
        "employee": {"workno": workno, "first_name": name},
    }


class FakeSource:
    def __init__(self, records=None, error=None):
        self._records = records or []
        self._error = error

    def fetch_records(self, begin, end):
        if self._error:
            raise self._error
        return self._records


def _client(monkeypatch, source):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr("src.pontual.pontual.attendance.controller.now_utc", lambda: NOW)
    monkeypatch.setattr("src.pontual.pontual.reports.controller.now_utc", lambda: NOW)

    registry = build_builtin_registry()
    attendance = AttendanceService(source, registry)
    container = Container(
        conn=DatabaseConnection(DBConfig.from_dict({})),
        tenants_repo=None,
        schedules_repo=None,
        registry=registry,
        event_source=source,
        tenant_service=TenantService(),
        attendance_service=attendance,
        report_service=ReportService(attendance, timezone="Europe/Lisbon"),
        timezone="Europe/Lisbon",
    )
    return create_app(container).test_client()


@pytest.fixture
def client(monkeypatch):
    records = [
        rec("1", 8, 30, 0, "Ana"),
        rec("2", 9, 5, 0, "Bruno"),
        rec("2", 12, 0, 1, "Bruno"),
    ]
    return _client(monkeypatch, FakeSource(records))


def test_dashboard(client):
    res = client.get("/api/dashboard")

    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert body["data"]["kpis"]["total"] == 2
    assert body["data"]["kpis"]["left"] == 1
    assert [e["status"] for e in body["data"]["employees"]] == ["present", "left"]
    assert body["data"]["employees"][0]["schedule"]["start_time"] == "08:30"


def test_employees(client):
    body = client.get("/api/employees").get_json()
    assert body["data"] == [{"employee_id": "1", "name": "Ana"}, {"employee_id": "2", "name": "Bruno"}]


def test_reports(client):
    body = client.get("/api/reports?start=2025-02-03&end=2025-02-03").get_json()

    assert body["success"] is True
    assert body["stats"]["employee_days"] == 2
    assert {r["employee_id"]: r["status"] for r in body["rows"]} == {"1": "normal", "2": "late"}
    assert body["per_employee"]["2"]["late_days"] == 1


def test_report_records(client):
    body = client.get("/api/reports/records?start=2025-02-03&end=2025-02-03").get_json()
    assert body["total"] == 3
    assert body["rows"][0]["type_label"] == "Check-Out"


def test_bad_date_is_400(client):
    res = client.get("/api/reports?start=03-02-2025")

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_inverted_range_is_400(client):
    res = client.get("/api/reports?start=2025-02-04&end=2025-02-03")
    assert res.status_code == 400


def test_timesheet_requires_employee(client):
    assert client.get("/api/timesheet?month=2025-02").status_code == 400
    assert client.get("/api/timesheet?month=feb&employee_id=1").status_code == 400


def test_timesheet(client):
    body = client.get("/api/timesheet?month=2025-02&employee_id=1").get_json()

    assert body["success"] is True
    assert len(body["data"]["days"]) == 28
    assert body["data"]["summary"]["work_days"] == 1
    assert body["data"]["summary"]["present_days"] == 1


def test_csv_export(client):
    res = client.get("/reports.csv?start=2025-02-03&end=2025-02-03")

    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert "attendance_20250203_20250203.csv" in res.headers["Content-Disposition"]
    assert "Bruno" in res.data.decode("utf-8-sig")


def test_timesheet_xlsx(client):
    res = client.get("/timesheet.xlsx?month=2025-02&employee_id=2")

    assert res.status_code == 200
    sheets = pd.read_excel(io.BytesIO(res.data), sheet_name=None, engine="openpyxl")
    assert list(sheets) == ["2025-02", "Summary"]
    assert len(sheets["2025-02"]) == 28


def test_report_pdf(client):
    res = client.get("/reports.pdf?start=2025-02-03&end=2025-02-03")

    assert res.status_code == 200
    assert res.mimetype == "application/pdf"
    assert "attendance_20250203_20250203.pdf" in res.headers["Content-Disposition"]
    assert res.data.startswith(b"%PDF")


def test_timesheet_pdf(client):
    res = client.get("/timesheet.pdf?month=2025-02&employee_id=2")

    assert res.status_code == 200
    assert "timesheet_2_202502.pdf" in res.headers["Content-Disposition"]
    assert res.data.startswith(b"%PDF")


def test_provider_failure_is_502(monkeypatch):
    client = _client(monkeypatch, FakeSource(error=ProviderError("CrossChex down")))

    res = client.get("/api/dashboard")

    assert res.status_code == 502
    assert res.get_json() == {"success": False, "message": "CrossChex down"}
