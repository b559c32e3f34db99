"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_API_URL = "https://api.eu.crosschexcloud.com/"
DEFAULT_PAGE_SIZE = 100
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_TIMEZONE = "Europe/Lisbon"
DEFAULT_SCHEDULE_ID = "VE"
DEFAULT_REPORT_DAYS = 30
DEFAULT_WEEKEND_DAYS = (5, 6)
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
