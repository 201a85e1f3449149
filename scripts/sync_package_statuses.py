"""Recompute stored package statuses for every organization.

Meant for cron, e.g. shortly after midnight::

    5 0 * * * cd /srv/membership && python scripts/sync_package_statuses.py

Exits non-zero when the database fails; rows written before the failure stay
written and the next run finishes the job.
"""

from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module
from membership_system.app_logging import init_logging
from membership_system.container import build_container
from membership_system.core.exceptions import StorageError

logger = logging.getLogger("membership_system.scripts.sync_package_statuses")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    init_logging(getattr(settings, "LOG_LEVEL", None))

    container = build_container(db_config=dict(settings.DB_CONFIG), settings=settings)
    try:
        results = container.lifecycle_synchronizer.synchronize_all()
    except StorageError as e:
        raise SystemExit(f"FAILED: package status sync aborted: {e}")

    total = sum(results.values())
    logger.info("Synchronized %d organizations, %d rows updated", len(results), total)
    print(f"OK: {total} package statuses updated across {len(results)} organizations")


if __name__ == "__main__":
    main()
