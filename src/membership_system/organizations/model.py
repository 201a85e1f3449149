from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Organization:
    """Tenant: owns all clients and catalog packages."""

    organization_id: str
    owner_user_id: str
    name: str
    timezone: str
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None
