from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...clients.model import Client


class ClientMatchStrategy(ABC):
    """Strategy Pattern: one rule for matching a check-in token to clients."""

    name: str = "base"

    @abstractmethod
    def matches(self, token: str, directory: Sequence[Client]) -> list[Client]:
        """All clients this rule accepts, in directory order."""
        raise NotImplementedError
