# resolver.py
# Simulated asynchronous tracking lookup.
# Waits a fixed artificial latency, then resolves an id against the registry.

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Mapping, Optional

from .models import Route, RouteTemplate
from .route_registry import ROUTES, lookup, normalize_tracking_id
from .track_config import TrackConfig

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    """Raised when a tracking id has no registry entry."""

    def __init__(self, tracking_id: str) -> None:
        super().__init__(f"Tracking ID not found: {tracking_id or '<empty>'}")
        self.tracking_id = tracking_id


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TrackingResolver:
    """
    Resolves tracking ids to Route objects after a simulated network delay.

    The delay is an asyncio sleep, so other coroutines (including running
    progress timers) keep going while a lookup is in flight. Failed lookups
    are not retried here; that is up to the caller.

    Args:
        config:   TrackConfig instance (lookup_delay_s).
        registry: Mapping of upper-case id -> RouteTemplate.
        clock:    Returns the timestamp stamped onto each resolved Route.
    """

    def __init__(
        self,
        config: Optional[TrackConfig] = None,
        registry: Mapping[str, RouteTemplate] = ROUTES,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.config = config or TrackConfig()
        self._registry = registry
        self._clock = clock

    async def resolve(self, tracking_id: str) -> Route:
        """
        Look up a tracking id.

        Args:
            tracking_id: Raw user input; trimmed and upper-cased before matching.

        Returns:
            Route stamped with the time of resolution.

        Raises:
            NotFoundError: if the normalized id is not in the registry.
        """
        normalized = normalize_tracking_id(tracking_id)
        logger.debug(f"Looking up {normalized!r} ({self.config.lookup_delay_s}s simulated latency)")
        await asyncio.sleep(self.config.lookup_delay_s)

        template = lookup(normalized, self._registry)
        if template is None:
            logger.warning(f"Unknown tracking id {normalized!r}")
            raise NotFoundError(normalized)

        route = Route.from_template(template, self._clock())
        logger.info(
            f"Resolved {route.tracking_id}: {route.origin} → {route.destination} "
            f"({len(route.path)} waypoints)"
        )
        return route
