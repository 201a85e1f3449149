from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .catalog_model import PackageCatalogEntry
from .catalog_repository import PackageCatalogRepository

_COLUMNS = "package_id, org_id, name, duration_days, price, description, created_at"
_UPDATABLE = ("name", "duration_days", "price", "description")


def _row_to_entry(r: Dict[str, Any]) -> PackageCatalogEntry:
    return PackageCatalogEntry(
        package_id=str(r["package_id"]),
        org_id=str(r["org_id"]),
        name=r["name"],
        duration_days=int(r["duration_days"]),
        price=to_decimal(r.get("price")),
        description=r.get("description"),
        created_at=r.get("created_at"),
    )


class MySQLPackageCatalogRepository(PackageCatalogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_org(self, org_id: str) -> Sequence[PackageCatalogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM packages_catalog WHERE org_id=%s ORDER BY name", (org_id,))
            return [_row_to_entry(r) for r in fetchall(cur)]

    def get_by_id(self, package_id: str) -> Optional[PackageCatalogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM packages_catalog WHERE package_id=%s", (package_id,))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def create_package(
        self,
        *,
        org_id: str,
        name: str,
        duration_days: int,
        price: Optional[Decimal] = None,
        description: Optional[str] = None,
    ) -> PackageCatalogEntry:
        package_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO packages_catalog(package_id, org_id, name, duration_days, price, description)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (package_id, org_id, name, int(duration_days), price, description),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM packages_catalog WHERE package_id=%s", (package_id,))
            return _row_to_entry(fetchone(cur))

    def update_package(self, package_id: str, changes: Mapping[str, Any]) -> Optional[PackageCatalogEntry]:
        fields = [k for k in _UPDATABLE if k in changes]
        with db_cursor(self._conn_factory) as (_, cur):
            if fields:
                assignments = ", ".join(f"{k}=%s" for k in fields)
                cur.execute(
                    f"UPDATE packages_catalog SET {assignments} WHERE package_id=%s",
                    (*[changes[k] for k in fields], package_id),
                )
            cur.execute(f"SELECT {_COLUMNS} FROM packages_catalog WHERE package_id=%s", (package_id,))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def delete_package(self, package_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM packages_catalog WHERE package_id=%s", (package_id,))
            return cur.rowcount > 0
