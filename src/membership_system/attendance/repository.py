from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from ..core.enums import CheckInMethod
from .model import AttendanceLogEntry, RecentCheckIn


class AttendanceRepository(Protocol):
    def append(self, *, client_id: str, method: CheckInMethod, checkin_at: datetime) -> AttendanceLogEntry:
        raise NotImplementedError

    def list_recent_for_org(self, org_id: str, limit: int) -> Sequence[RecentCheckIn]:
        """Newest first."""

        raise NotImplementedError
