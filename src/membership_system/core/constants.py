"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_EXPIRY_WARNING_DAYS = 3
DEFAULT_TIMEZONE = "UTC"
DEFAULT_RECENT_CLIENTS_LIMIT = 5
DEFAULT_RECENT_CHECKINS_LIMIT = 10
DEFAULT_STATS_WORKERS = 4
