import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "pontual"),
}

# CrossChex Cloud. Credentials come from the tenants table when TENANT_USERNAME is set.
CROSSCHEX_API_URL = os.getenv("CROSSCHEX_API_URL", "https://api.eu.crosschexcloud.com/")
CROSSCHEX_API_KEY = os.getenv("CROSSCHEX_API_KEY", "")
CROSSCHEX_API_SECRET = os.getenv("CROSSCHEX_API_SECRET", "")
TENANT_USERNAME = os.getenv("TENANT_USERNAME", "")
PROVIDER_PAGE_SIZE = int(os.getenv("PROVIDER_PAGE_SIZE", "100"))
PROVIDER_TIMEOUT = float(os.getenv("PROVIDER_TIMEOUT", "30"))

# "static" uses the built-in VE/VE2 schedules, "mysql" reads work_schedules/employee_schedules
SCHEDULE_SOURCE = os.getenv("SCHEDULE_SOURCE", "static")
DEFAULT_SCHEDULE_ID = os.getenv("DEFAULT_SCHEDULE_ID", "VE")
TIMEZONE = os.getenv("TIMEZONE", "Europe/Lisbon")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
# Optional: also seed the built-in schedules on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
