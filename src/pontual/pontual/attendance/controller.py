from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import now_utc
from ..common.serializers import to_jsonable
from ..common.validators import parse_month_param, require_non_empty
from ..container import Container
from ..core.constants import XLSX_MIMETYPE
from ..reports.export import export_excel, export_pdf, timesheet_rows


def register(app: Flask, container: Container) -> None:
    reports = container.report_service
    attendance = container.attendance_service

    def _timesheet_args(now):
        today = reports.today(now)
        employee_id = require_non_empty(request.args.get("employee_id", ""), "employee_id")
        year, month = parse_month_param(request.args.get("month"), default=(today.year, today.month))
        return employee_id, year, month

    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    def api_dashboard():
        board = reports.build_live_board(now=now_utc())
        return jsonify({"success": True, "data": to_jsonable(board)})

    @app.route("/api/employees", methods=["GET"], endpoint="api_employees")
    def api_employees():
        employees = reports.list_recent_employees(now=now_utc())
        return jsonify(
            {
                "success": True,
                "data": [{"employee_id": emp_id, "name": name} for emp_id, name in employees],
            }
        )

    @app.route("/api/timesheet", methods=["GET"], endpoint="api_timesheet")
    def api_timesheet():
        now = now_utc()
        employee_id, year, month = _timesheet_args(now)
        timesheet, diagnostics = reports.build_timesheet_report(
            employee_id=employee_id, year=year, month=month, now=now
        )
        return jsonify({"success": True, "data": to_jsonable(timesheet), "diagnostics": diagnostics})

    @app.route("/timesheet.xlsx", methods=["GET"], endpoint="timesheet_xlsx")
    def timesheet_xlsx():
        now = now_utc()
        employee_id, year, month = _timesheet_args(now)
        timesheet, _ = reports.build_timesheet_report(employee_id=employee_id, year=year, month=month, now=now)

        content = export_excel(
            timesheet_rows(timesheet, localize=attendance.localize),
            sheet_name=f"{year:04d}-{month:02d}",
            summary=timesheet.summary,
        )
        filename = f"timesheet_{employee_id}_{year:04d}{month:02d}.xlsx"
        return send_file(io.BytesIO(content), mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)

    @app.route("/timesheet.pdf", methods=["GET"], endpoint="timesheet_pdf")
    def timesheet_pdf():
        now = now_utc()
        employee_id, year, month = _timesheet_args(now)
        timesheet, _ = reports.build_timesheet_report(employee_id=employee_id, year=year, month=month, now=now)

        name = timesheet.employee_name or employee_id
        content = export_pdf(
            timesheet_rows(timesheet, localize=attendance.localize),
            title=f"Timesheet {name} {year:04d}-{month:02d}",
            summary=timesheet.summary,
        )
        filename = f"timesheet_{employee_id}_{year:04d}{month:02d}.pdf"
        return send_file(io.BytesIO(content), mimetype="application/pdf", as_attachment=True, download_name=filename)
