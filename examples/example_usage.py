"""Example: build a month timesheet through the service layer (no Flask).

Controllers are a thin layer; the accounting lives in the services.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.pontual.pontual.common.datetime_utils import format_minutes, now_utc
from src.pontual.pontual.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)

    now = now_utc()
    timesheet, diagnostics = container.report_service.build_timesheet_report(
        employee_id="1", year=now.year, month=now.month, now=now
    )
    for day in timesheet.days:
        print(day.work_date, day.status.value, format_minutes(day.worked_minutes))
    print(timesheet.summary)
    print(diagnostics)


if __name__ == "__main__":
    main()
