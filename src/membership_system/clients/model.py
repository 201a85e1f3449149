from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ClientStatus


@dataclass(frozen=True)
class Client:
    """Domain entity: a member of one organization.

    ``status`` is an administrative flag and does not follow package status.
    """

    client_id: str
    org_id: str
    full_name: str
    join_date: date
    created_at: datetime
    age: Optional[int] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    status: ClientStatus = ClientStatus.ACTIVE
    updated_at: Optional[datetime] = None
