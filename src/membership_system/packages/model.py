from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import PackageStatus


@dataclass(frozen=True)
class ClientPackage:
    """Domain entity: one client holding one package over a date range.

    ``status`` is a stored cache of resolve_status(start_date, end_date, today);
    only the lifecycle synchronizer rewrites it.
    """

    client_package_id: str
    client_id: str
    package_id: Optional[str]
    start_date: date
    end_date: date
    status: PackageStatus
    created_at: Optional[datetime] = None
