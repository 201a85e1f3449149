from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..clients.model import Client
from ..core.enums import CheckInMethod


@dataclass(frozen=True)
class AttendanceLogEntry:
    """Append-only check-in event."""

    attendance_id: int
    client_id: str
    method: CheckInMethod
    checkin_at: datetime


@dataclass(frozen=True)
class CheckInResult:
    """What the check-in screen shows after a successful check-in."""

    client: Client
    timestamp: datetime
    method: CheckInMethod


@dataclass(frozen=True)
class RecentCheckIn:
    """Read-model for the recent check-ins list."""

    attendance_id: int
    client_id: str
    full_name: str
    method: CheckInMethod
    checkin_at: datetime
