from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Organization


class OrganizationRepository(Protocol):
    def get_by_owner(self, user_id: str) -> Optional[Organization]:
        raise NotImplementedError

    def get_by_id(self, organization_id: str) -> Optional[Organization]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Organization]:
        raise NotImplementedError

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
        raise NotImplementedError
