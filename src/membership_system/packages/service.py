from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Optional

from ..clients.repository import ClientRepository
from ..common.datetime_utils import local_today, now_utc
from ..common.validators import optional_price, require_non_empty, require_positive_days
from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ClientNotFoundError, PackageNotFoundError, ValidationError
from ..lifecycle.resolver import StatusResolver
from ..organizations.repository import OrganizationRepository
from ..organizations.service import organization_timezone
from .catalog_model import PackageCatalogEntry
from .catalog_repository import PackageCatalogRepository
from .model import ClientPackage
from .repository import ClientPackageRepository


class PackageService:
    """Use case: package catalog and assigning packages to clients."""

    def __init__(
        self,
        catalog: PackageCatalogRepository,
        client_packages: ClientPackageRepository,
        clients: ClientRepository,
        *,
        resolver: Optional[StatusResolver] = None,
        organizations: Optional[OrganizationRepository] = None,
        default_timezone: str = DEFAULT_TIMEZONE,
    ):
        self._catalog = catalog
        self._client_packages = client_packages
        self._clients = clients
        self._resolver = resolver or StatusResolver()
        self._organizations = organizations
        self._default_timezone = default_timezone

    def create_package(
        self,
        *,
        org_id: str,
        name: str,
        duration_days: Any,
        price: Any = None,
        description: Optional[str] = None,
    ) -> PackageCatalogEntry:
        return self._catalog.create_package(
            org_id=require_non_empty(org_id, "Organization"),
            name=require_non_empty(name, "Package name"),
            duration_days=require_positive_days(duration_days, "Duration"),
            price=optional_price(price),
            description=(description or "").strip() or None,
        )

    def update_package(self, package_id: str, **changes: Any) -> PackageCatalogEntry:
        clean: dict[str, Any] = {}
        if "name" in changes:
            clean["name"] = require_non_empty(changes["name"], "Package name")
        if "duration_days" in changes:
            clean["duration_days"] = require_positive_days(changes["duration_days"], "Duration")
        if "price" in changes:
            clean["price"] = optional_price(changes["price"])
        if "description" in changes:
            clean["description"] = (changes["description"] or "").strip() or None

        updated = self._catalog.update_package(package_id, clean)
        if not updated:
            raise PackageNotFoundError("Package not found")
        return updated

    def delete_package(self, package_id: str) -> None:
        # Existing assignments keep their dates; their package_id becomes NULL.
        if not self._catalog.delete_package(package_id):
            raise PackageNotFoundError("Package not found")

    def list_packages(self, org_id: str) -> list[PackageCatalogEntry]:
        return list(self._catalog.list_for_org(org_id))

    def assign_package(
        self,
        *,
        client_id: str,
        package_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> ClientPackage:
        """Assign a catalog package to a client.

        ``end_date`` defaults to ``start_date + duration_days``; the initial
        status comes from the resolver so a fresh row is never stale.
        """
        now = now or now_utc()
        client = self._clients.get_by_id(client_id)
        if not client:
            raise ClientNotFoundError("Client not found")

        package = self._catalog.get_by_id(package_id)
        if not package:
            raise PackageNotFoundError("Package not found")
        if package.org_id != client.org_id:
            raise ValidationError("Package belongs to another organization")

        today = self._today_for(client.org_id, now)
        start = start_date or today
        end = end_date or start + timedelta(days=package.duration_days)
        if start > end:
            raise ValidationError("Start date must not be after end date")

        return self._client_packages.create_assignment(
            client_id=client.client_id,
            package_id=package.package_id,
            start_date=start,
            end_date=end,
            status=self._resolver.resolve(start, end, today),
        )

    def list_client_packages(self, client_id: str) -> list[ClientPackage]:
        return list(self._client_packages.list_for_client(client_id))

    def _today_for(self, org_id: str, now: datetime) -> date:
        if self._organizations is None:
            return now.date()
        tz_name = organization_timezone(self._organizations, org_id, self._default_timezone)
        return local_today(now, tz_name)
