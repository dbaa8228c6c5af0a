# tracker.py
# Public entry point for parcel tracking.
# Owns no business logic; delegates everything to specialist modules.

import asyncio
import logging
from typing import Optional

from .eta_estimator import estimate_minutes, format_eta
from .geo_utils import distance_snapshot
from .models import DistanceSnapshot, ProgressState, Route, TrackerState
from .progress_simulator import ProgressSimulator
from .render import LogRenderer, Renderer, build_frame
from .resolver import NotFoundError, TrackingResolver
from .route_registry import normalize_tracking_id
from .track_config import TrackConfig

logger = logging.getLogger(__name__)


class ParcelTracker:
    """
    High-level tracking facade.

    Typical lifecycle:
        tracker = ParcelTracker()
        route = await tracker.track("blr555")

        # every tick the marker moves; read derived values at any time:
        tracker.eta_text()
        tracker.distances()

        tracker.clear()

    Args:
        config:   Optional TrackConfig; defaults to TrackConfig().
        resolver: Optional TrackingResolver; built from config if omitted.
        renderer: Receives a RenderFrame on every state change.
    """

    def __init__(
        self,
        config: Optional[TrackConfig] = None,
        resolver: Optional[TrackingResolver] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.config = config or TrackConfig()

        # Specialist modules
        self._resolver  = resolver or TrackingResolver(self.config)
        self._simulator = ProgressSimulator(self.config)
        self._renderer  = renderer or LogRenderer()

        self._follow: bool = self.config.follow
        self._lookup: Optional[asyncio.Future] = None
        self.last_error: Optional[str] = None

        self._simulator.subscribe(self._on_progress)

    # ------------------------------------------------------------------
    # Tracking control
    # ------------------------------------------------------------------

    async def track(self, raw_id: str) -> Route:
        """
        Resolve a tracking id and start moving its marker.

        Any current tracking is stopped first. A newer track() call or a
        clear() cancels a lookup still in flight.

        Raises:
            ValueError:    if raw_id is blank.
            NotFoundError: if the id is unknown; tracking stays idle.
        """
        tracking_id = normalize_tracking_id(raw_id)
        if not tracking_id:
            raise ValueError("Tracking ID is required")

        self._cancel_lookup()
        self._simulator.reset()
        self.last_error = None

        lookup = asyncio.ensure_future(self._resolver.resolve(tracking_id))
        self._lookup = lookup
        try:
            route = await lookup
            # A newer search may have started after the lookup finished
            # but before this coroutine resumed
            superseded = self._lookup is not lookup
        except NotFoundError as e:
            if self._lookup is lookup:
                self.last_error = str(e)
                logger.warning(f"Tracking failed: {e}")
            raise
        finally:
            if self._lookup is lookup:
                self._lookup = None

        if superseded:
            logger.debug(f"Dropping superseded lookup of {route.tracking_id}")
            raise asyncio.CancelledError()

        self._simulator.start(route)
        return route

    def clear(self) -> None:
        """Stop tracking, remove everything from the map and reset preferences."""
        self._cancel_lookup()
        self._simulator.reset()
        self._renderer.clear()
        self._follow = True
        self.last_error = None

    def _cancel_lookup(self) -> None:
        if self._lookup is not None and not self._lookup.done():
            logger.debug("Cancelling in-flight lookup")
            self._lookup.cancel()
        self._lookup = None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _on_progress(self, progress: Optional[ProgressState]) -> None:
        if progress is None:
            self._renderer.clear()
        else:
            self._renderer.draw(build_frame(progress, self._follow))

    @property
    def follow(self) -> bool:
        return self._follow

    @follow.setter
    def follow(self, value: bool) -> None:
        if value == self._follow:
            return
        self._follow = value
        progress = self._simulator.progress
        if progress is not None:
            self._renderer.draw(build_frame(progress, self._follow))

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def distances(self) -> Optional[DistanceSnapshot]:
        progress = self._simulator.progress
        if progress is None:
            return None
        return distance_snapshot(progress.route.path, progress.current_index)

    def eta_minutes(self) -> Optional[float]:
        snapshot = self.distances()
        if snapshot is None:
            return None
        return estimate_minutes(snapshot.remaining, self.config.average_speed_kmh)

    def eta_text(self) -> str:
        return format_eta(self.eta_minutes(), self.config.eta_placeholder)

    def progress_pct(self) -> float:
        snapshot = self.distances()
        return snapshot.progress_pct if snapshot else 0.0

    def summary(self) -> Optional[dict]:
        """Values shown in the tracking panel, or None when idle."""
        route = self._simulator.route
        if route is None:
            return None
        snapshot = self.distances()
        data = route.to_dict()
        del data["path"]
        data.update(
            route=f"{route.origin} → {route.destination}",
            waypoint=f"{self._simulator.current_index}/{route.last_index}",
            covered_km=round(snapshot.covered / 1000, 2),
            remaining_km=round(snapshot.remaining / 1000, 2),
            progress_pct=round(snapshot.progress_pct),
            eta=self.eta_text(),
        )
        return data

    # ------------------------------------------------------------------
    # Convenience read-only properties
    # ------------------------------------------------------------------

    @property
    def simulator(self) -> ProgressSimulator:
        return self._simulator

    @property
    def state(self) -> TrackerState:
        return self._simulator.state

    @property
    def route(self) -> Optional[Route]:
        return self._simulator.route

    @property
    def current_index(self) -> Optional[int]:
        return self._simulator.current_index

    @property
    def loading(self) -> bool:
        return self._lookup is not None and not self._lookup.done()
