from __future__ import annotations

from typing import Sequence

from ...clients.model import Client
from .base import ClientMatchStrategy


class EmailStrategy(ClientMatchStrategy):
    """Case-insensitive exact email."""

    name = "email"

    def matches(self, token: str, directory: Sequence[Client]) -> list[Client]:
        needle = token.casefold()
        return [c for c in directory if c.email and c.email.strip().casefold() == needle]
