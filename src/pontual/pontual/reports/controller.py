from __future__ import annotations

import io
from datetime import timedelta

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import now_utc
from ..common.serializers import to_jsonable
from ..common.validators import parse_date_param
from ..container import Container
from ..core.constants import DEFAULT_REPORT_DAYS, XLSX_MIMETYPE
from .export import day_rows, export_csv, export_excel, export_pdf


def register(app: Flask, container: Container) -> None:
    reports = container.report_service
    attendance = container.attendance_service

    def _range_args(now):
        """start/end query args; defaults to the last 30 days."""
        today = reports.today(now)
        end = parse_date_param(request.args.get("end"), "end", default=today)
        start = parse_date_param(request.args.get("start"), "start", default=end - timedelta(days=DEFAULT_REPORT_DAYS))
        return start, end

    def _report(now):
        start, end = _range_args(now)
        return reports.build_attendance_report(start=start, end=end, now=now, search=request.args.get("q"))

    def _rows(data):
        return day_rows(data.days, names=data.names, localize=attendance.localize)

    @app.route("/api/reports", methods=["GET"], endpoint="api_reports")
    def api_reports():
        data = _report(now_utc())
        return jsonify(
            {
                "success": True,
                "start": data.start.isoformat(),
                "end": data.end.isoformat(),
                "rows": _rows(data),
                "per_employee": to_jsonable(data.per_employee),
                "stats": to_jsonable(data.stats),
                "diagnostics": data.diagnostics,
            }
        )

    @app.route("/api/reports/records", methods=["GET"], endpoint="api_report_records")
    def api_report_records():
        start, end = _range_args(now_utc())
        rows, diagnostics = reports.build_raw_listing(start=start, end=end)
        return jsonify({"success": True, "rows": rows, "total": len(rows), "diagnostics": diagnostics})

    @app.route("/reports.csv", methods=["GET"], endpoint="reports_csv")
    def reports_csv():
        data = _report(now_utc())
        filename = f"attendance_{data.start.strftime('%Y%m%d')}_{data.end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            export_csv(_rows(data)),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/reports.xlsx", methods=["GET"], endpoint="reports_xlsx")
    def reports_xlsx():
        data = _report(now_utc())
        filename = f"attendance_{data.start.strftime('%Y%m%d')}_{data.end.strftime('%Y%m%d')}.xlsx"
        return send_file(
            io.BytesIO(export_excel(_rows(data), sheet_name="Attendance")),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=filename,
        )

    @app.route("/reports.pdf", methods=["GET"], endpoint="reports_pdf")
    def reports_pdf():
        data = _report(now_utc())
        filename = f"attendance_{data.start.strftime('%Y%m%d')}_{data.end.strftime('%Y%m%d')}.pdf"
        content = export_pdf(_rows(data), title=f"Attendance {data.start.isoformat()} to {data.end.isoformat()}")
        return send_file(io.BytesIO(content), mimetype="application/pdf", as_attachment=True, download_name=filename)
