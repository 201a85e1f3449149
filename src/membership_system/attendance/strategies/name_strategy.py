from __future__ import annotations

from typing import Sequence

from ...clients.model import Client
from .base import ClientMatchStrategy


class NameFragmentStrategy(ClientMatchStrategy):
    """Case-insensitive substring of the full name."""

    name = "name"

    def matches(self, token: str, directory: Sequence[Client]) -> list[Client]:
        needle = token.casefold()
        return [c for c in directory if needle in (c.full_name or "").casefold()]
