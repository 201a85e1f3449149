from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import optional_age, optional_email, optional_phone, require_non_empty
from ..core.enums import ClientStatus
from ..core.exceptions import ClientNotFoundError, ValidationError
from .model import Client
from .repository import ClientRepository


def _coerce_status(value: Any) -> ClientStatus:
    try:
        return ClientStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown client status: {value!r}")


class ClientService:
    """Use case: manage an organization's client list."""

    def __init__(self, clients: ClientRepository):
        self._clients = clients

    def create_client(
        self,
        *,
        org_id: str,
        full_name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        age: Any = None,
        join_date: Optional[date] = None,
        status: Any = ClientStatus.ACTIVE,
        now: Optional[datetime] = None,
    ) -> Client:
        now = now or now_utc()
        return self._clients.create_client(
            org_id=require_non_empty(org_id, "Organization"),
            full_name=require_non_empty(full_name, "Full name"),
            join_date=join_date or now.date(),
            age=optional_age(age),
            phone=optional_phone(phone),
            email=optional_email(email),
            address=(address or "").strip() or None,
            status=_coerce_status(status),
        )

    def update_client(self, client_id: str, **changes: Any) -> Client:
        if "org_id" in changes:
            raise ValidationError("A client cannot move to another organization")

        clean: dict[str, Any] = {}
        if "full_name" in changes:
            clean["full_name"] = require_non_empty(changes["full_name"], "Full name")
        if "email" in changes:
            clean["email"] = optional_email(changes["email"])
        if "phone" in changes:
            clean["phone"] = optional_phone(changes["phone"])
        if "age" in changes:
            clean["age"] = optional_age(changes["age"])
        if "address" in changes:
            clean["address"] = (changes["address"] or "").strip() or None
        if "join_date" in changes and changes["join_date"]:
            clean["join_date"] = changes["join_date"]
        if "status" in changes:
            clean["status"] = _coerce_status(changes["status"])

        updated = self._clients.update_client(client_id, clean)
        if not updated:
            raise ClientNotFoundError("Client not found")
        return updated

    def delete_client(self, client_id: str) -> None:
        """Hard-delete a client that has no package or check-in history.

        Package assignments and attendance entries are kept for good, so a
        client with either must be set to Inactive instead.
        """
        if not self._clients.get_by_id(client_id):
            raise ClientNotFoundError("Client not found")
        if self._clients.has_history(client_id):
            raise ValidationError("Client has package or check-in history; set status to Inactive instead")
        if not self._clients.delete_client(client_id):
            raise ClientNotFoundError("Client not found")

    def get_client(self, client_id: str) -> Client:
        client = self._clients.get_by_id(client_id)
        if not client:
            raise ClientNotFoundError("Client not found")
        return client

    def list_clients(self, org_id: str) -> list[Client]:
        return list(self._clients.list_for_org(org_id))

    def search_clients(self, org_id: str, term: str = "", *, status: Optional[Any] = None) -> list[Client]:
        """Substring search over name, email, phone and id; optional status filter."""
        needle = (term or "").strip().lower()
        wanted = _coerce_status(status) if status else None

        out: list[Client] = []
        for c in self._clients.list_for_org(org_id):
            if wanted and c.status != wanted:
                continue
            if needle and not (
                needle in c.full_name.lower()
                or needle in (c.email or "").lower()
                or needle in (c.phone or "")
                or needle in c.client_id.lower()
            ):
                continue
            out.append(c)
        return out
