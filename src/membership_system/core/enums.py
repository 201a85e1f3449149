from __future__ import annotations

from enum import Enum


class PackageStatus(str, Enum):
    """Lifecycle status of a client package, derived from its dates."""

    UPCOMING = "upcoming"
    ACTIVE = "active"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"


class ClientStatus(str, Enum):
    """Administrative client flag, independent of package status."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"


class CheckInMethod(str, Enum):
    MANUAL = "manual"
    QR = "qr"


class StatsErrorPolicy(str, Enum):
    """What the stats service does when the store fails.

    ZERO: log and return zero/empty defaults (dashboard widgets degrade).
    RAISE: propagate the StorageError to the caller.
    """

    ZERO = "zero"
    RAISE = "raise"
