from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Mapping, Optional

import pytest

from membership_system.attendance.model import AttendanceLogEntry, RecentCheckIn
from membership_system.clients.model import Client
from membership_system.core.enums import CheckInMethod, ClientStatus, PackageStatus
from membership_system.core.exceptions import StorageError
from membership_system.organizations.model import Organization
from membership_system.packages.catalog_model import PackageCatalogEntry
from membership_system.packages.model import ClientPackage

FIXED_NOW = datetime(2025, 3, 15, 10, 0, tzinfo=timezone.utc)


class _Failing:
    """Mixin: methods named in ``failing`` raise StorageError like a dead database."""

    def __init__(self):
        self.failing: set[str] = set()

    def _check(self, name: str) -> None:
        if name in self.failing:
            raise StorageError("Database operation failed")


class InMemoryOrganizations(_Failing):
    def __init__(self):
        super().__init__()
        self.orgs: dict[str, Organization] = {}

    def add(self, organization_id: str, *, timezone_name: str = "UTC", owner_user_id: Optional[str] = None) -> Organization:
        org = Organization(
            organization_id=organization_id,
            owner_user_id=owner_user_id or f"owner-{organization_id}",
            name=f"Org {organization_id}",
            timezone=timezone_name,
        )
        self.orgs[organization_id] = org
        return org

    def get_by_owner(self, user_id: str) -> Optional[Organization]:
        self._check("get_by_owner")
        return next((o for o in self.orgs.values() if o.owner_user_id == user_id), None)

    def get_by_id(self, organization_id: str) -> Optional[Organization]:
        self._check("get_by_id")
        return self.orgs.get(organization_id)

    def list_all(self):
        self._check("list_all")
        return list(self.orgs.values())

    def create_organization(self, *, owner_user_id, name, timezone, contact_email=None, contact_phone=None, address=None):
        self._check("create_organization")
        org = Organization(
            organization_id=str(uuid.uuid4()),
            owner_user_id=owner_user_id,
            name=name,
            timezone=timezone,
            contact_email=contact_email,
            contact_phone=contact_phone,
            address=address,
        )
        self.orgs[org.organization_id] = org
        return org


class InMemoryClients(_Failing):
    """Directory order is newest ``created_at`` first, like the MySQL repository."""

    def __init__(self):
        super().__init__()
        self.clients: dict[str, Client] = {}
        self.history: set[str] = set()
        self.reads = 0
        self._clock = FIXED_NOW - timedelta(days=30)

    def add(
        self,
        org_id: str,
        full_name: str,
        *,
        client_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        status: ClientStatus = ClientStatus.ACTIVE,
    ) -> Client:
        self._clock += timedelta(minutes=1)
        client = Client(
            client_id=client_id or str(uuid.uuid4()),
            org_id=org_id,
            full_name=full_name,
            join_date=(created_at or self._clock).date(),
            created_at=created_at or self._clock,
            phone=phone,
            email=email,
            status=status,
        )
        self.clients[client.client_id] = client
        return client

    def list_for_org(self, org_id: str):
        self._check("list_for_org")
        self.reads += 1
        rows = [c for c in self.clients.values() if c.org_id == org_id]
        return sorted(rows, key=lambda c: c.created_at, reverse=True)

    def get_by_id(self, client_id: str) -> Optional[Client]:
        self._check("get_by_id")
        return self.clients.get(client_id)

    def create_client(self, *, org_id, full_name, join_date, age=None, phone=None, email=None, address=None, status=ClientStatus.ACTIVE):
        self._check("create_client")
        client = self.add(org_id, full_name, phone=phone, email=email, status=status)
        client = replace(client, join_date=join_date, age=age, address=address)
        self.clients[client.client_id] = client
        return client

    def update_client(self, client_id: str, changes: Mapping[str, Any]) -> Optional[Client]:
        self._check("update_client")
        current = self.clients.get(client_id)
        if not current:
            return None
        updated = replace(current, **dict(changes))
        self.clients[client_id] = updated
        return updated

    def delete_client(self, client_id: str) -> bool:
        self._check("delete_client")
        return self.clients.pop(client_id, None) is not None

    def has_history(self, client_id: str) -> bool:
        self._check("has_history")
        return client_id in self.history


class InMemoryCatalog(_Failing):
    def __init__(self):
        super().__init__()
        self.packages: dict[str, PackageCatalogEntry] = {}

    def add(self, org_id: str, name: str, *, duration_days: int = 30, price: Any = "100", package_id: Optional[str] = None):
        entry = PackageCatalogEntry(
            package_id=package_id or str(uuid.uuid4()),
            org_id=org_id,
            name=name,
            duration_days=duration_days,
            price=Decimal(price) if price is not None else None,
        )
        self.packages[entry.package_id] = entry
        return entry

    def list_for_org(self, org_id: str):
        self._check("list_for_org")
        return [p for p in self.packages.values() if p.org_id == org_id]

    def get_by_id(self, package_id: str):
        self._check("get_by_id")
        return self.packages.get(package_id)

    def create_package(self, *, org_id, name, duration_days, price=None, description=None):
        self._check("create_package")
        entry = PackageCatalogEntry(
            package_id=str(uuid.uuid4()),
            org_id=org_id,
            name=name,
            duration_days=duration_days,
            price=price,
            description=description,
        )
        self.packages[entry.package_id] = entry
        return entry

    def update_package(self, package_id: str, changes: Mapping[str, Any]):
        self._check("update_package")
        current = self.packages.get(package_id)
        if not current:
            return None
        updated = replace(current, **dict(changes))
        self.packages[package_id] = updated
        return updated

    def delete_package(self, package_id: str) -> bool:
        self._check("delete_package")
        return self.packages.pop(package_id, None) is not None


class InMemoryClientPackages(_Failing):
    """Org scope comes from the client directory, as the SQL join does."""

    def __init__(self, clients: InMemoryClients):
        super().__init__()
        self._clients = clients
        self.rows: dict[str, ClientPackage] = {}
        self.writes = 0
        self.fail_after_writes: Optional[int] = None

    def add(self, client_id: str, start_date: date, end_date: date, status: PackageStatus, *, package_id: Optional[str] = None):
        row = ClientPackage(
            client_package_id=str(uuid.uuid4()),
            client_id=client_id,
            package_id=package_id,
            start_date=start_date,
            end_date=end_date,
            status=status,
        )
        self.rows[row.client_package_id] = row
        self._clients.history.add(client_id)
        return row

    def list_for_org(self, org_id: str, *, status: Optional[PackageStatus] = None):
        self._check("list_for_org")
        members = {c.client_id for c in self._clients.clients.values() if c.org_id == org_id}
        rows = [r for r in self.rows.values() if r.client_id in members and (status is None or r.status == status)]
        return sorted(rows, key=lambda r: r.end_date)

    def list_for_client(self, client_id: str):
        self._check("list_for_client")
        return [r for r in self.rows.values() if r.client_id == client_id]

    def create_assignment(self, *, client_id, package_id, start_date, end_date, status):
        self._check("create_assignment")
        return self.add(client_id, start_date, end_date, status, package_id=package_id)

    def update_status(self, client_package_id: str, status: PackageStatus) -> bool:
        self._check("update_status")
        if self.fail_after_writes is not None and self.writes >= self.fail_after_writes:
            raise StorageError("Database operation failed")
        row = self.rows.get(client_package_id)
        if not row or row.status == status:
            return False
        self.rows[client_package_id] = replace(row, status=status)
        self.writes += 1
        return True


class InMemoryAttendance(_Failing):
    def __init__(self, clients: InMemoryClients):
        super().__init__()
        self._clients = clients
        self.entries: list[AttendanceLogEntry] = []

    def append(self, *, client_id: str, method: CheckInMethod, checkin_at: datetime) -> AttendanceLogEntry:
        self._check("append")
        entry = AttendanceLogEntry(
            attendance_id=len(self.entries) + 1,
            client_id=client_id,
            method=method,
            checkin_at=checkin_at,
        )
        self.entries.append(entry)
        self._clients.history.add(client_id)
        return entry

    def list_recent_for_org(self, org_id: str, limit: int):
        self._check("list_recent_for_org")
        out = []
        for e in sorted(self.entries, key=lambda e: (e.checkin_at, e.attendance_id), reverse=True):
            client = self._clients.clients.get(e.client_id)
            if client and client.org_id == org_id:
                out.append(RecentCheckIn(e.attendance_id, e.client_id, client.full_name, e.method, e.checkin_at))
        return out[:limit]


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def organizations() -> InMemoryOrganizations:
    orgs = InMemoryOrganizations()
    orgs.add("org-1")
    return orgs


@pytest.fixture
def clients() -> InMemoryClients:
    return InMemoryClients()


@pytest.fixture
def catalog() -> InMemoryCatalog:
    return InMemoryCatalog()


@pytest.fixture
def client_packages(clients: InMemoryClients) -> InMemoryClientPackages:
    return InMemoryClientPackages(clients)


@pytest.fixture
def attendance(clients: InMemoryClients) -> InMemoryAttendance:
    return InMemoryAttendance(clients)
