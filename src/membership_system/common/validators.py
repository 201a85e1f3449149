from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^\+?[1-9][\d\-]{0,15}$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_email(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    if not v:
        return None
    if not _EMAIL_RE.match(v):
        raise ValidationError("Invalid email address")
    return v


def optional_phone(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    if not v:
        return None
    if not _PHONE_RE.match(v.replace(" ", "")):
        raise ValidationError("Invalid phone number")
    return v


def optional_age(value) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        age = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Age must be a whole number")
    if age < 0:
        raise ValidationError("Age cannot be negative")
    return age


def require_positive_days(value, field_name: str) -> int:
    # int() would truncate 1.5 and accept True.
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} must be a whole number of days")
    try:
        days = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number of days")
    if days <= 0:
        raise ValidationError(f"{field_name} must be a positive number")
    return days


def optional_price(value) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError("Price must be a number")
    if not price.is_finite():
        raise ValidationError("Price must be a number")
    if price < 0:
        raise ValidationError("Price cannot be negative")
    return price
