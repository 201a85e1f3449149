from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import get_zone
from ..common.validators import optional_email, optional_phone, require_non_empty
from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import OrganizationNotFoundError, ValidationError
from .model import Organization
from .repository import OrganizationRepository


class OrganizationService:
    """Use case: organization onboarding and lookup (one organization per owner)."""

    def __init__(self, organizations: OrganizationRepository, *, default_timezone: str = DEFAULT_TIMEZONE):
        self._organizations = organizations
        self._default_timezone = default_timezone

    @property
    def default_timezone(self) -> str:
        return self._default_timezone

    def create_organization(
        self,
        *,
        owner_user_id: str,
        name: str,
        timezone: Optional[str] = None,
        contact_email: Optional[str] = None,
        contact_phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Organization:
        owner_user_id = require_non_empty(owner_user_id, "Owner")
        name = require_non_empty(name, "Organization name")
        tz_name = (timezone or "").strip() or self._default_timezone
        get_zone(tz_name)

        if self._organizations.get_by_owner(owner_user_id):
            raise ValidationError("This user already owns an organization")

        return self._organizations.create_organization(
            owner_user_id=owner_user_id,
            name=name,
            timezone=tz_name,
            contact_email=optional_email(contact_email),
            contact_phone=optional_phone(contact_phone),
            address=(address or "").strip() or None,
        )

    def get_for_owner(self, user_id: str) -> Organization:
        org = self._organizations.get_by_owner(user_id)
        if not org:
            raise OrganizationNotFoundError("No organization for this user")
        return org

    def get(self, organization_id: str) -> Organization:
        org = self._organizations.get_by_id(organization_id)
        if not org:
            raise OrganizationNotFoundError("Organization not found")
        return org


def organization_timezone(organizations: OrganizationRepository, organization_id: str, default: str) -> str:
    """Organization timezone, or ``default`` when the organization is unknown."""
    org = organizations.get_by_id(organization_id)
    return org.timezone if org and org.timezone else default
