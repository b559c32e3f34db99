import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "pontual"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "pontual"),
}

CROSSCHEX_API_URL = os.getenv("CROSSCHEX_API_URL", "https://api.eu.crosschexcloud.com/")
CROSSCHEX_API_KEY = os.getenv("CROSSCHEX_API_KEY", "")
CROSSCHEX_API_SECRET = os.getenv("CROSSCHEX_API_SECRET", "")
TENANT_USERNAME = os.getenv("TENANT_USERNAME", "")
PROVIDER_PAGE_SIZE = int(os.getenv("PROVIDER_PAGE_SIZE", "100"))
PROVIDER_TIMEOUT = float(os.getenv("PROVIDER_TIMEOUT", "30"))

SCHEDULE_SOURCE = os.getenv("SCHEDULE_SOURCE", "mysql")
DEFAULT_SCHEDULE_ID = os.getenv("DEFAULT_SCHEDULE_ID", "VE")
TIMEZONE = os.getenv("TIMEZONE", "Europe/Lisbon")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
