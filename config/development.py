import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "membership_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Days before end_date at which a package counts as expiring soon
EXPIRY_WARNING_DAYS = int(os.getenv("EXPIRY_WARNING_DAYS", "3"))
# "zero": dashboard shows zeros when the database fails; "raise": surface the error
STATS_ERROR_POLICY = os.getenv("STATS_ERROR_POLICY", "zero")
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "UTC")
RECENT_CLIENTS_LIMIT = int(os.getenv("RECENT_CLIENTS_LIMIT", "5"))
RECENT_CHECKINS_LIMIT = int(os.getenv("RECENT_CHECKINS_LIMIT", "10"))
