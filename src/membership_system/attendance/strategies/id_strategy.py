from __future__ import annotations

from typing import Sequence

from ...clients.model import Client
from .base import ClientMatchStrategy


class ClientIdStrategy(ClientMatchStrategy):
    """Exact client id (what a QR code carries)."""

    name = "id"

    def matches(self, token: str, directory: Sequence[Client]) -> list[Client]:
        return [c for c in directory if c.client_id == token]
