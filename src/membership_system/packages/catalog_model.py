from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class PackageCatalogEntry:
    """A sellable service definition. Edits mutate in place (no price history)."""

    package_id: str
    org_id: str
    name: str
    duration_days: int
    price: Optional[Decimal] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
