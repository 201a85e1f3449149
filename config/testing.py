import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "membership_test_db"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False

EXPIRY_WARNING_DAYS = 3
# Tests want storage failures to surface
STATS_ERROR_POLICY = "raise"
DEFAULT_TIMEZONE = "UTC"
RECENT_CLIENTS_LIMIT = 5
RECENT_CHECKINS_LIMIT = 10
