from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Organization
from .repository import OrganizationRepository

_COLUMNS = "organization_id, owner_user_id, name, timezone, contact_email, contact_phone, address, created_at"


def _row_to_organization(r: Dict[str, Any]) -> Organization:
    return Organization(
        organization_id=str(r["organization_id"]),
        owner_user_id=str(r["owner_user_id"]),
        name=r["name"],
        timezone=r["timezone"],
        contact_email=r.get("contact_email"),
        contact_phone=r.get("contact_phone"),
        address=r.get("address"),
        created_at=r.get("created_at"),
    )


class MySQLOrganizationRepository(OrganizationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_owner(self, user_id: str) -> Optional[Organization]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM organizations WHERE owner_user_id=%s LIMIT 1", (user_id,))
            r = fetchone(cur)
            return _row_to_organization(r) if r else None

    def get_by_id(self, organization_id: str) -> Optional[Organization]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM organizations WHERE organization_id=%s", (organization_id,))
            r = fetchone(cur)
            return _row_to_organization(r) if r else None

    def list_all(self) -> Sequence[Organization]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM organizations ORDER BY created_at")
            return [_row_to_organization(r) for r in fetchall(cur)]

    def create_organization(
        self,
        *,
        owner_user_id: str,
        name: str,
        timezone: str,
        contact_email: Optional[str] = None,
        contact_phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Organization:
        organization_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO organizations(organization_id, owner_user_id, name, timezone, contact_email, contact_phone, address)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (organization_id, owner_user_id, name, timezone, contact_email, contact_phone, address),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM organizations WHERE organization_id=%s", (organization_id,))
            return _row_to_organization(fetchone(cur))
