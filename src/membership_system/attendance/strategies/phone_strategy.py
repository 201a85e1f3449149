from __future__ import annotations

from typing import Sequence

from ...clients.model import Client
from .base import ClientMatchStrategy


class PhoneStrategy(ClientMatchStrategy):
    """Exact phone number."""

    name = "phone"

    def matches(self, token: str, directory: Sequence[Client]) -> list[Client]:
        return [c for c in directory if c.phone and c.phone.strip() == token]
