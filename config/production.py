import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "membership_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

EXPIRY_WARNING_DAYS = int(os.getenv("EXPIRY_WARNING_DAYS", "3"))
STATS_ERROR_POLICY = os.getenv("STATS_ERROR_POLICY", "zero")
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "UTC")
RECENT_CLIENTS_LIMIT = int(os.getenv("RECENT_CLIENTS_LIMIT", "5"))
RECENT_CHECKINS_LIMIT = int(os.getenv("RECENT_CHECKINS_LIMIT", "10"))
