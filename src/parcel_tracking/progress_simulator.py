# progress_simulator.py
# State machine that moves a parcel along its route, one waypoint per tick.
# Call start() once per resolved route; the asyncio timer calls advance().

import asyncio
import logging
from typing import Callable, List, Optional

from .models import ProgressState, Route, TrackerState
from .track_config import TrackConfig

logger = logging.getLogger(__name__)

Observer = Callable[[Optional[ProgressState]], None]


class ProgressSimulator:
    """
    Stateful progress simulator for a single parcel.

    Usage:
        sim = ProgressSimulator(config)
        unsubscribe = sim.subscribe(on_change)
        sim.start(route)          # inside a running event loop

        # ... every tick_interval_s the index moves one waypoint ...
        sim.reset()

    Only one timer task is alive at a time. start() and reset() cancel the
    previous one before touching state, and a tick only mutates the
    ProgressState it was scheduled for.
    """

    def __init__(self, config: Optional[TrackConfig] = None) -> None:
        self.config = config or TrackConfig()
        self._progress: Optional[ProgressState] = None
        self._timer: Optional[asyncio.Task] = None
        self._observers: List[Observer] = []

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, route: Route, run_timer: bool = True) -> ProgressState:
        """
        Begin tracking a route at its first waypoint.

        Args:
            route:     Freshly resolved route.
            run_timer: Schedule the periodic tick on the running event loop.
                       With False the caller drives advance() itself.

        Returns:
            The new ProgressState.
        """
        loop = asyncio.get_running_loop() if run_timer else None

        self._cancel_timer()
        progress = ProgressState(route=route, current_index=0)
        self._progress = progress
        if loop is not None:
            self._timer = loop.create_task(self._run_ticks(progress))

        logger.info(
            f"Tracking {route.tracking_id} started "
            f"({len(route.path)} waypoints, tick {self.config.tick_interval_s}s)"
        )
        self._notify()
        return progress

    def advance(self) -> bool:
        """
        Move one waypoint forward, stopping at the last one.

        Returns:
            True if the index changed.
        """
        progress = self._progress
        if progress is None or progress.at_destination:
            return False

        progress.current_index = min(progress.current_index + 1, progress.route.last_index)
        logger.debug(
            f"{progress.route.tracking_id}: waypoint "
            f"{progress.current_index}/{progress.route.last_index}"
        )
        self._notify()
        return True

    def reset(self) -> None:
        """Stop the timer and drop the active route."""
        self._cancel_timer()
        if self._progress is None:
            return
        logger.info(f"Tracking {self._progress.route.tracking_id} cleared")
        self._progress = None
        self._notify()

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """
        Register a callback for every state change.

        The callback receives the live ProgressState, or None after reset().
        It must treat the state as read-only.

        Returns:
            A function that removes the callback.
        """
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._observers):
            try:
                callback(self._progress)
            except Exception:
                logger.exception(f"Progress observer {callback!r} failed")

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    async def _run_ticks(self, progress: ProgressState) -> None:
        # Deadlines are measured from the start, not from the previous tick
        loop = asyncio.get_running_loop()
        started = loop.time()
        tick = 0
        try:
            while self._progress is progress and not progress.at_destination:
                tick += 1
                deadline = started + tick * self.config.tick_interval_s
                await asyncio.sleep(max(0.0, deadline - loop.time()))
                if self._progress is not progress:
                    return
                self.advance()
            logger.debug(f"{progress.route.tracking_id}: final waypoint reached, timer stopped")
        finally:
            if self._timer is asyncio.current_task():
                self._timer = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> TrackerState:
        return TrackerState.IDLE if self._progress is None else TrackerState.TRACKING

    @property
    def is_active(self) -> bool:
        return self._progress is not None

    @property
    def progress(self) -> Optional[ProgressState]:
        return self._progress

    @property
    def route(self) -> Optional[Route]:
        return self._progress.route if self._progress else None

    @property
    def current_index(self) -> Optional[int]:
        return self._progress.current_index if self._progress else None

    @property
    def at_destination(self) -> bool:
        return self._progress is not None and self._progress.at_destination

    @property
    def timer_running(self) -> bool:
        return self._timer is not None and not self._timer.done()
