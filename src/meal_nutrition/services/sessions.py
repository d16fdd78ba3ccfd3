"""Per-session resolvers for callers sharing one process."""

import logging
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import uuid4

from meal_nutrition.services.resolution import NutritionResolver

_logger = logging.getLogger(__name__)


@dataclass
class ResolverSessions:
    """Bounded map of session ids to resolvers, evicting the least recently used."""

    factory: Callable[[], NutritionResolver]
    max_sessions: int = 1000
    _resolvers: "OrderedDict[str, NutritionResolver]" = field(
        default_factory=OrderedDict, init=False
    )

    def get(self, session_id: str | None) -> tuple[str, NutritionResolver]:
        """Return the session's resolver, opening a session when it is unknown."""
        if not session_id:
            session_id = uuid4().hex
        resolver = self._resolvers.get(session_id)
        if resolver is not None:
            self._resolvers.move_to_end(session_id)
            return session_id, resolver

        resolver = self.factory()
        self._resolvers[session_id] = resolver
        while len(self._resolvers) > self.max_sessions:
            evicted, _ = self._resolvers.popitem(last=False)
            _logger.debug("Evicted resolver session %s", evicted)
        return session_id, resolver

    def __len__(self) -> int:
        return len(self._resolvers)
