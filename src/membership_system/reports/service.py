"""Dashboard and report figures for one organization.

Every read goes through ``StatsService._read``, the single place where the
error policy applies. Under ``StatsErrorPolicy.ZERO`` a ``StorageError`` is
logged and the read returns its empty value (all-zero struct, empty list);
under ``StatsErrorPolicy.RAISE`` it propagates. Only ``StorageError`` is
covered; anything else is a bug and always propagates.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from decimal import Decimal
from itertools import islice
from typing import Callable, Iterator, Optional, TypeVar

from ..clients.model import Client
from ..clients.repository import ClientRepository
from ..common.datetime_utils import as_utc, get_zone, local_today, month_bounds, now_utc
from ..core.constants import DEFAULT_RECENT_CLIENTS_LIMIT, DEFAULT_STATS_WORKERS, DEFAULT_TIMEZONE
from ..core.enums import ClientStatus, PackageStatus, StatsErrorPolicy
from ..core.exceptions import StorageError
from ..lifecycle.resolver import days_until_expiry
from ..organizations.repository import OrganizationRepository
from ..organizations.service import organization_timezone
from ..packages.catalog_repository import PackageCatalogRepository
from ..packages.repository import ClientPackageRepository
from .model import ClientReportStats, DashboardStats, DateRange, ExpiringPackage, RevenueStats

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecentClients:
    """Most recently created clients, newest first, at most ``limit``.

    Nothing is read until iteration starts and every iteration reads again,
    so the same object can be looped over more than once.
    """

    def __init__(self, load: Callable[[], list[Client]], limit: int):
        self._load = load
        self.limit = max(int(limit), 0)

    def __iter__(self) -> Iterator[Client]:
        rows = sorted(self._load(), key=lambda c: as_utc(c.created_at), reverse=True)
        return islice(rows, self.limit)


class StatsService:
    def __init__(
        self,
        clients: ClientRepository,
        client_packages: ClientPackageRepository,
        catalog: PackageCatalogRepository,
        organizations: OrganizationRepository,
        *,
        error_policy: StatsErrorPolicy = StatsErrorPolicy.ZERO,
        default_timezone: str = DEFAULT_TIMEZONE,
        recent_limit: int = DEFAULT_RECENT_CLIENTS_LIMIT,
        max_workers: int = DEFAULT_STATS_WORKERS,
    ):
        self._clients = clients
        self._client_packages = client_packages
        self._catalog = catalog
        self._organizations = organizations
        self._policy = StatsErrorPolicy(error_policy)
        self._default_timezone = default_timezone
        self._recent_limit = int(recent_limit)
        self._max_workers = int(max_workers)

    def _read(self, what: str, org_id: str, empty: T, load: Callable[[], T]) -> T:
        try:
            return load()
        except StorageError:
            if self._policy is StatsErrorPolicy.RAISE:
                raise
            logger.exception("%s for org %s failed, reporting empty figures", what, org_id)
            return empty

    def _timezone(self, org_id: str) -> str:
        return organization_timezone(self._organizations, org_id, self._default_timezone)

    def compute_dashboard_stats(self, org_id: str, *, now: Optional[datetime] = None) -> DashboardStats:
        """Headline counts. Package counts trust the stored status."""
        now = now or now_utc()

        def count_status(status: PackageStatus) -> int:
            return len(self._client_packages.list_for_org(org_id, status=status))

        def count_new_this_month() -> int:
            start, end = month_bounds(now, self._timezone(org_id))
            return sum(1 for c in self._clients.list_for_org(org_id) if start <= as_utc(c.created_at) < end)

        def load() -> DashboardStats:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                total = pool.submit(lambda: len(self._clients.list_for_org(org_id)))
                active = pool.submit(count_status, PackageStatus.ACTIVE)
                expiring = pool.submit(count_status, PackageStatus.EXPIRING_SOON)
                expired = pool.submit(count_status, PackageStatus.EXPIRED)
                new_this_month = pool.submit(count_new_this_month)
                return DashboardStats(
                    total_clients=total.result(),
                    active_packages=active.result(),
                    expiring_packages=expiring.result(),
                    expired_packages=expired.result(),
                    new_clients_this_month=new_this_month.result(),
                )

        return self._read("Dashboard stats", org_id, DashboardStats(), load)

    def compute_revenue_stats(self, org_id: str, date_range: DateRange) -> RevenueStats:
        """Catalog price summed over packages of clients created inside ``date_range``.

        A deleted catalog entry or a missing price counts as zero.
        """

        def load() -> RevenueStats:
            zone = get_zone(self._timezone(org_id))
            in_range = {
                c.client_id
                for c in self._clients.list_for_org(org_id)
                if as_utc(c.created_at).astimezone(zone).date() in date_range
            }
            prices = {p.package_id: p.price for p in self._catalog.list_for_org(org_id)}

            total = Decimal("0")
            active = Decimal("0")
            for cp in self._client_packages.list_for_org(org_id):
                if cp.client_id not in in_range:
                    continue
                price = prices.get(cp.package_id) or Decimal("0")
                total += price
                if cp.status == PackageStatus.ACTIVE:
                    active += price
            return RevenueStats(total_revenue=total, active_revenue=active)

        return self._read("Revenue stats", org_id, RevenueStats(), load)

    def recent_clients(self, org_id: str, limit: Optional[int] = None) -> RecentClients:
        def load() -> list[Client]:
            return self._read("Recent clients", org_id, [], lambda: list(self._clients.list_for_org(org_id)))

        return RecentClients(load, self._recent_limit if limit is None else limit)

    def list_expiring_packages(self, org_id: str, *, now: Optional[datetime] = None) -> list[ExpiringPackage]:
        """Stored expiring_soon rows, soonest end date first."""
        now = now or now_utc()

        def load() -> list[ExpiringPackage]:
            today = local_today(now, self._timezone(org_id))
            rows = self._client_packages.list_for_org(org_id, status=PackageStatus.EXPIRING_SOON)
            if not rows:
                return []
            names = {c.client_id: c.full_name for c in self._clients.list_for_org(org_id)}
            packages = {p.package_id: p.name for p in self._catalog.list_for_org(org_id)}
            out = [
                ExpiringPackage(
                    client_package_id=cp.client_package_id,
                    client_id=cp.client_id,
                    full_name=names.get(cp.client_id, ""),
                    package_name=packages.get(cp.package_id, "-"),
                    end_date=cp.end_date,
                    days_left=days_until_expiry(cp.end_date, today),
                )
                for cp in rows
            ]
            out.sort(key=lambda e: e.end_date)
            return out

        return self._read("Expiring packages", org_id, [], load)

    def compute_client_report_stats(self, org_id: str, date_range: DateRange) -> ClientReportStats:
        """Clients created inside ``date_range`` and the stored status of their packages."""

        def load() -> ClientReportStats:
            zone = get_zone(self._timezone(org_id))
            created: list[Client] = [
                c for c in self._clients.list_for_org(org_id) if as_utc(c.created_at).astimezone(zone).date() in date_range
            ]
            ids = {c.client_id for c in created}

            by_status: dict[str, int] = {s.value: 0 for s in PackageStatus}
            holders: set[str] = set()
            for cp in self._client_packages.list_for_org(org_id):
                if cp.client_id in ids:
                    by_status[cp.status.value] += 1
                    holders.add(cp.client_id)

            return ClientReportStats(
                new_clients=len(created),
                active_clients=sum(1 for c in created if c.status == ClientStatus.ACTIVE),
                inactive_clients=sum(1 for c in created if c.status == ClientStatus.INACTIVE),
                clients_with_packages=len(holders),
                packages_by_status=by_status,
            )

        return self._read("Client report stats", org_id, ClientReportStats(), load)


def month_to_date(now: datetime, tz_name: str) -> DateRange:
    """First of the current local month up to today."""
    today = local_today(now, tz_name)
    return DateRange(start=date(today.year, today.month, 1), end=today)
