"""Package status from calendar dates.

Rules, first match wins, compared on whole days:

1. today before start_date        -> upcoming
2. today after end_date           -> expired
3. 0 <= days left <= warning_days -> expiring_soon
4. otherwise                      -> active

The start day is not upcoming and the end day is not expired. Callers pass
``now`` explicitly; nothing here reads the clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

from ..core.constants import DEFAULT_EXPIRY_WARNING_DAYS
from ..core.enums import PackageStatus

DateLike = Union[date, datetime]


def _as_day(value: DateLike) -> date:
    # datetime is a subclass of date, so check it first.
    if isinstance(value, datetime):
        return value.date()
    return value


def days_until_expiry(end_date: DateLike, now: DateLike) -> int:
    """Whole days from ``now`` to ``end_date``; negative once expired."""
    return (_as_day(end_date) - _as_day(now)).days


def resolve_status(
    start_date: DateLike,
    end_date: DateLike,
    now: DateLike,
    warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS,
) -> PackageStatus:
    today = _as_day(now)
    if today < _as_day(start_date):
        return PackageStatus.UPCOMING
    if today > _as_day(end_date):
        return PackageStatus.EXPIRED

    remaining = days_until_expiry(end_date, today)
    if 0 <= remaining <= warning_days:
        return PackageStatus.EXPIRING_SOON
    return PackageStatus.ACTIVE


@dataclass(frozen=True)
class StatusResolver:
    """resolve_status bound to one configured warning window."""

    warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS

    def resolve(self, start_date: DateLike, end_date: DateLike, now: DateLike) -> PackageStatus:
        return resolve_status(start_date, end_date, now, self.warning_days)
