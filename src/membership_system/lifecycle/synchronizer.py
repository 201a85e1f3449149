from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import local_today, now_utc
from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import StorageError
from ..organizations.repository import OrganizationRepository
from ..organizations.service import organization_timezone
from ..packages.repository import ClientPackageRepository
from .resolver import StatusResolver

logger = logging.getLogger(__name__)


class LifecycleSynchronizer:
    """Recompute stored package statuses from their dates.

    The stored status is a cache; this pass is its only invalidation. Each row
    is written with its own conditional update, so a failure mid-batch leaves
    every written row correct and the next run picks up the rest.
    """

    def __init__(
        self,
        client_packages: ClientPackageRepository,
        organizations: OrganizationRepository,
        *,
        resolver: Optional[StatusResolver] = None,
        default_timezone: str = DEFAULT_TIMEZONE,
    ):
        self._client_packages = client_packages
        self._organizations = organizations
        self._resolver = resolver or StatusResolver()
        self._default_timezone = default_timezone

    def synchronize(self, org_id: str, *, now: Optional[datetime] = None) -> int:
        """Persist fresh statuses for one organization; returns rows changed.

        Raises:
            StorageError: if the store fails. Rows written before the failure stay written.
        """
        now = now or now_utc()
        today = local_today(now, organization_timezone(self._organizations, org_id, self._default_timezone))

        updated = 0
        try:
            for cp in self._client_packages.list_for_org(org_id):
                status = self._resolver.resolve(cp.start_date, cp.end_date, today)
                if status == cp.status:
                    continue
                if self._client_packages.update_status(cp.client_package_id, status):
                    updated += 1
        except StorageError:
            logger.error("Package status sync for org %s failed after %d updates", org_id, updated)
            raise

        if updated:
            logger.info("Package status sync for org %s updated %d rows", org_id, updated)
        return updated

    def synchronize_all(self, *, now: Optional[datetime] = None) -> dict[str, int]:
        """Run synchronize() for every organization with one shared clock reading."""
        now = now or now_utc()
        return {org.organization_id: self.synchronize(org.organization_id, now=now) for org in self._organizations.list_all()}
