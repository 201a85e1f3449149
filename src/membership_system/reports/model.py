from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar range."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValidationError("Start date must not be after end date")

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class DashboardStats:
    total_clients: int = 0
    active_packages: int = 0
    expiring_packages: int = 0
    expired_packages: int = 0
    new_clients_this_month: int = 0


@dataclass(frozen=True)
class RevenueStats:
    total_revenue: Decimal = Decimal("0")
    active_revenue: Decimal = Decimal("0")


@dataclass(frozen=True)
class ClientReportStats:
    new_clients: int = 0
    active_clients: int = 0
    inactive_clients: int = 0
    clients_with_packages: int = 0
    packages_by_status: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ExpiringPackage:
    client_package_id: str
    client_id: str
    full_name: str
    package_name: str
    end_date: date
    days_left: int
