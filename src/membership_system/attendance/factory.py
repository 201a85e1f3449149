from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..clients.model import Client
from .strategies.base import ClientMatchStrategy
from .strategies.email_strategy import EmailStrategy
from .strategies.id_strategy import ClientIdStrategy
from .strategies.name_strategy import NameFragmentStrategy
from .strategies.phone_strategy import PhoneStrategy


@dataclass(frozen=True)
class MatchOutcome:
    client: Client
    strategy: str
    candidates: int


def default_strategies() -> list[ClientMatchStrategy]:
    return [ClientIdStrategy(), NameFragmentStrategy(), PhoneStrategy(), EmailStrategy()]


@dataclass
class ClientMatcherFactory:
    """Factory Pattern: chain match strategies in precedence order.

    The first strategy with any match wins; inside it the first client in
    directory order is taken. That tie-break is positional, not a ranking.
    """

    strategies: list[ClientMatchStrategy] = field(default_factory=default_strategies)

    def match(self, token: str, directory: Sequence[Client]) -> Optional[MatchOutcome]:
        for strategy in self.strategies:
            found = strategy.matches(token, directory)
            if found:
                return MatchOutcome(client=found[0], strategy=strategy.name, candidates=len(found))
        return None
