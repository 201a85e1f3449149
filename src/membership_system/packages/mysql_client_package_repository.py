from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import PackageStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClientPackage
from .repository import ClientPackageRepository

_COLUMNS = "cp.client_package_id, cp.client_id, cp.package_id, cp.start_date, cp.end_date, cp.status, cp.created_at"


def _row_to_client_package(r: Dict[str, Any]) -> ClientPackage:
    return ClientPackage(
        client_package_id=str(r["client_package_id"]),
        client_id=str(r["client_id"]),
        package_id=str(r["package_id"]) if r.get("package_id") else None,
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=PackageStatus(r["status"]),
        created_at=r.get("created_at"),
    )


class MySQLClientPackageRepository(ClientPackageRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_org(self, org_id: str, *, status: Optional[PackageStatus] = None) -> Sequence[ClientPackage]:
        clauses = ["c.org_id=%s"]
        params: list[object] = [org_id]
        if status is not None:
            clauses.append("cp.status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM client_packages cp
                JOIN clients c ON c.client_id = cp.client_id
                WHERE {where}
                ORDER BY cp.end_date ASC, cp.client_package_id ASC
                """,
                tuple(params),
            )
            return [_row_to_client_package(r) for r in fetchall(cur)]

    def list_for_client(self, client_id: str) -> Sequence[ClientPackage]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM client_packages cp
                WHERE cp.client_id=%s
                ORDER BY cp.start_date DESC
                """,
                (client_id,),
            )
            return [_row_to_client_package(r) for r in fetchall(cur)]

    def create_assignment(
        self,
        *,
        client_id: str,
        package_id: Optional[str],
        start_date: date,
        end_date: date,
        status: PackageStatus,
    ) -> ClientPackage:
        client_package_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO client_packages(client_package_id, client_id, package_id, start_date, end_date, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (client_package_id, client_id, package_id, start_date, end_date, status.value),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM client_packages cp WHERE cp.client_package_id=%s", (client_package_id,))
            return _row_to_client_package(fetchone(cur))

    def update_status(self, client_package_id: str, status: PackageStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE client_packages SET status=%s WHERE client_package_id=%s AND status<>%s",
                (status.value, client_package_id, status.value),
            )
            return cur.rowcount > 0
