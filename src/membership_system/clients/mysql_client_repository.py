from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.enums import ClientStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Client
from .repository import ClientRepository

_COLUMNS = "client_id, org_id, full_name, age, phone, email, address, join_date, status, created_at, updated_at"
_UPDATABLE = ("full_name", "age", "phone", "email", "address", "join_date", "status")


def _row_to_client(r: Dict[str, Any]) -> Client:
    return Client(
        client_id=str(r["client_id"]),
        org_id=str(r["org_id"]),
        full_name=r["full_name"],
        age=int(r["age"]) if r.get("age") is not None else None,
        phone=r.get("phone"),
        email=r.get("email"),
        address=r.get("address"),
        join_date=r["join_date"],
        status=ClientStatus(r.get("status") or ClientStatus.ACTIVE.value),
        created_at=r["created_at"],
        updated_at=r.get("updated_at"),
    )


class MySQLClientRepository(ClientRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_org(self, org_id: str) -> Sequence[Client]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM clients
                WHERE org_id=%s
                ORDER BY created_at DESC, client_id ASC
                """,
                (org_id,),
            )
            return [_row_to_client(r) for r in fetchall(cur)]

    def get_by_id(self, client_id: str) -> Optional[Client]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM clients WHERE client_id=%s", (client_id,))
            r = fetchone(cur)
            return _row_to_client(r) if r else None

    def create_client(
        self,
        *,
        org_id: str,
        full_name: str,
        join_date: date,
        age: Optional[int] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
        status: ClientStatus = ClientStatus.ACTIVE,
    ) -> Client:
        client_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO clients(client_id, org_id, full_name, age, phone, email, address, join_date, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (client_id, org_id, full_name, age, phone, email, address, join_date, status.value),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM clients WHERE client_id=%s", (client_id,))
            return _row_to_client(fetchone(cur))

    def update_client(self, client_id: str, changes: Mapping[str, Any]) -> Optional[Client]:
        fields = [k for k in _UPDATABLE if k in changes]
        with db_cursor(self._conn_factory) as (_, cur):
            if fields:
                assignments = ", ".join(f"{k}=%s" for k in fields)
                params = [changes[k].value if isinstance(changes[k], ClientStatus) else changes[k] for k in fields]
                cur.execute(f"UPDATE clients SET {assignments} WHERE client_id=%s", (*params, client_id))
            cur.execute(f"SELECT {_COLUMNS} FROM clients WHERE client_id=%s", (client_id,))
            r = fetchone(cur)
            return _row_to_client(r) if r else None

    def delete_client(self, client_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM clients WHERE client_id=%s", (client_id,))
            return cur.rowcount > 0

    def has_history(self, client_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    EXISTS(SELECT 1 FROM client_packages WHERE client_id=%s) AS has_packages,
                    EXISTS(SELECT 1 FROM attendance_logs WHERE client_id=%s) AS has_checkins
                """,
                (client_id, client_id),
            )
            r = fetchone(cur)
            return bool(r and (r["has_packages"] or r["has_checkins"]))
