import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "pontual_test"),
}

CROSSCHEX_API_URL = "https://api.eu.crosschexcloud.com/"
CROSSCHEX_API_KEY = "test-key"
CROSSCHEX_API_SECRET = "test-secret"
TENANT_USERNAME = ""
PROVIDER_PAGE_SIZE = 100
PROVIDER_TIMEOUT = 5

SCHEDULE_SOURCE = "static"
DEFAULT_SCHEDULE_ID = "VE"
TIMEZONE = "Europe/Lisbon"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
