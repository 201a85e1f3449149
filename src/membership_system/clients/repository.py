from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import ClientStatus
from .model import Client


class ClientRepository(Protocol):
    """Client directory.

    Note: ``list_for_org`` order is the directory order the check-in matcher
    relies on (newest first).
    """

    def list_for_org(self, org_id: str) -> Sequence[Client]:
        raise NotImplementedError

    def get_by_id(self, client_id: str) -> Optional[Client]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_client(self, client_id: str, changes: Mapping[str, Any]) -> Optional[Client]:
        raise NotImplementedError

    def delete_client(self, client_id: str) -> bool:
        raise NotImplementedError

    def has_history(self, client_id: str) -> bool:
        """True when the client has package assignments or check-ins."""

        raise NotImplementedError
