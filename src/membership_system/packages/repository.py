from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PackageStatus
from .model import ClientPackage


class ClientPackageRepository(Protocol):
    def list_for_org(self, org_id: str, *, status: Optional[PackageStatus] = None) -> Sequence[ClientPackage]:
        """All assignments of the organization's clients, optionally filtered by stored status."""

        raise NotImplementedError

    def list_for_client(self, client_id: str) -> Sequence[ClientPackage]:
        raise NotImplementedError

    def create_assignment(
        self,
        *,
        client_id: str,
        package_id: Optional[str],
        start_date: date,
        end_date: date,
        status: PackageStatus,
    ) -> ClientPackage:
        raise NotImplementedError

    def update_status(self, client_package_id: str, status: PackageStatus) -> bool:
        """Write ``status`` only if it differs; True when the row actually changed.

        Single conditional write, never read-modify-write, so concurrent
        synchronizers converge.
        """

        raise NotImplementedError
