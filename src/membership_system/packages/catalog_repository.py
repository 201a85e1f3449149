from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional, Protocol, Sequence

from .catalog_model import PackageCatalogEntry


class PackageCatalogRepository(Protocol):
    def list_for_org(self, org_id: str) -> Sequence[PackageCatalogEntry]:
        raise NotImplementedError

    def get_by_id(self, package_id: str) -> Optional[PackageCatalogEntry]:
        raise NotImplementedError

    def create_package(
        self,
        *,
        org_id: str,
        name: str,
        duration_days: int,
        price: Optional[Decimal] = None,
        description: Optional[str] = None,
    ) -> PackageCatalogEntry:
        raise NotImplementedError

    def update_package(self, package_id: str, changes: Mapping[str, Any]) -> Optional[PackageCatalogEntry]:
        raise NotImplementedError

    def delete_package(self, package_id: str) -> bool:
        raise NotImplementedError
