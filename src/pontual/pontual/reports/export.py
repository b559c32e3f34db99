"""Flatten summaries into plain rows and dump them to CSV / Excel / PDF.

Rows keep raw values (ISO timestamps, integer minutes, status codes); any
human formatting belongs to whoever renders them.
"""

from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import Callable, Iterable, Optional
from xml.sax.saxutils import escape

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..attendance.model import DaySummary, PeriodSummary, Timesheet

Localizer = Callable[[str, datetime], datetime]

DAY_COLUMNS = [
    "date",
    "weekday",
    "employee_id",
    "employee_name",
    "first_in",
    "last_out",
    "worked_minutes",
    "overtime_minutes",
    "status",
    "still_open",
]


def _iso(employee_id: str, value: Optional[datetime], localize: Optional[Localizer]) -> Optional[str]:
    if value is None:
        return None
    if localize is not None:
        value = localize(employee_id, value)
    return value.isoformat()


def day_rows(
    days: Iterable[DaySummary],
    *,
    names: Optional[dict[str, str]] = None,
    localize: Optional[Localizer] = None,
) -> list[dict]:
    names = names or {}
    return [
        {
            "date": d.work_date.isoformat(),
            "weekday": d.work_date.isoweekday(),
            "employee_id": d.employee_id,
            "employee_name": names.get(d.employee_id, d.employee_id),
            "first_in": _iso(d.employee_id, d.first_in, localize),
            "last_out": _iso(d.employee_id, d.last_out, localize),
            "worked_minutes": d.worked_minutes,
            "overtime_minutes": d.overtime_minutes,
            "status": d.status.value,
            "still_open": d.is_open,
        }
        for d in days
    ]


def timesheet_rows(timesheet: Timesheet, *, localize: Optional[Localizer] = None) -> list[dict]:
    names = {timesheet.employee_id: timesheet.employee_name or timesheet.employee_id}
    return day_rows(timesheet.days, names=names, localize=localize)


def summary_row(summary: PeriodSummary) -> dict:
    return {
        "work_days": summary.work_days,
        "present_days": summary.present_days,
        "absent_days": summary.absent_days,
        "late_days": summary.late_days,
        "total_worked_minutes": summary.total_worked_minutes,
        "average_worked_minutes": summary.average_worked_minutes,
        "total_overtime_minutes": summary.total_overtime_minutes,
        "punctuality_rate": summary.punctuality_rate,
        "attendance_rate": summary.attendance_rate,
    }


def to_dataframe(rows: list[dict], columns: Optional[list[str]] = None) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=columns or DAY_COLUMNS)


def export_csv(rows: list[dict], columns: Optional[list[str]] = None) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=columns or DAY_COLUMNS, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    # BOM so Excel opens accented names correctly.
    return out.getvalue().encode("utf-8-sig")


def export_excel(
    rows: list[dict],
    *,
    sheet_name: str = "Report",
    columns: Optional[list[str]] = None,
    summary: Optional[PeriodSummary] = None,
) -> bytes:
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        to_dataframe(rows, columns).to_excel(writer, index=False, sheet_name=sheet_name)
        if summary is not None:
            pd.DataFrame([summary_row(summary)]).to_excel(writer, index=False, sheet_name="Summary")
    return out.getvalue()


def _cell(value) -> str:
    return "" if value is None else str(value)


def _grid(data: list[list[str]]) -> Table:
    table = Table(data, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 7),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
        )
    )
    return table


def export_pdf(
    rows: list[dict],
    *,
    title: str,
    columns: Optional[list[str]] = None,
    summary: Optional[PeriodSummary] = None,
) -> bytes:
    """Plain A4 landscape table of the rows, with the period summary underneath."""
    columns = columns or DAY_COLUMNS
    out = io.BytesIO()
    doc = SimpleDocTemplate(out, pagesize=landscape(A4), leftMargin=0.4 * inch, rightMargin=0.4 * inch, title=title)
    styles = getSampleStyleSheet()

    story = [Paragraph(escape(title), styles["Heading2"]), Spacer(1, 0.15 * inch)]
    story.append(_grid([columns] + [[_cell(row.get(c)) for c in columns] for row in rows]))
    if summary is not None:
        story.append(Spacer(1, 0.25 * inch))
        story.append(_grid([["metric", "value"]] + [[k, _cell(v)] for k, v in summary_row(summary).items()]))

    doc.build(story)
    return out.getvalue()
