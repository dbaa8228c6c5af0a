# models.py
# Shared data structures and enums used across all modules.

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Tuple


# ---------------------------------------------------------------------------
# Coordinate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coord:
    """Immutable geographic coordinate in decimal degrees."""
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and -90.0 <= self.lat <= 90.0):
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not (math.isfinite(self.lon) and -180.0 <= self.lon <= 180.0):
            raise ValueError(f"Longitude out of range: {self.lon}")


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RouteTemplate:
    """Static route data shipped with the registry."""
    tracking_id: str
    status: str                  # "In Transit" | "Out for Delivery" | ...
    carrier: str
    origin: str
    destination: str
    path: Tuple[Coord, ...]

    def __post_init__(self) -> None:
        # Accept any sequence but always store a tuple
        object.__setattr__(self, "path", tuple(self.path))
        if len(self.path) < 2:
            raise ValueError(
                f"Route {self.tracking_id} needs at least 2 waypoints, got {len(self.path)}"
            )


@dataclass(frozen=True)
class Route:
    """A resolved route: registry data stamped with the time of the lookup."""
    tracking_id: str
    status: str
    carrier: str
    origin: str
    destination: str
    path: Tuple[Coord, ...]
    last_updated: datetime

    @property
    def last_index(self) -> int:
        return len(self.path) - 1

    @staticmethod
    def from_template(template: RouteTemplate, last_updated: datetime) -> "Route":
        return Route(
            tracking_id=template.tracking_id,
            status=template.status,
            carrier=template.carrier,
            origin=template.origin,
            destination=template.destination,
            path=template.path,
            last_updated=last_updated,
        )

    def to_dict(self) -> dict:
        return {
            "tracking_id": self.tracking_id,
            "status": self.status,
            "carrier": self.carrier,
            "origin": self.origin,
            "destination": self.destination,
            "path": [[c.lat, c.lon] for c in self.path],
            "last_updated": self.last_updated.isoformat(),
        }


# ---------------------------------------------------------------------------
# Tracking status
# ---------------------------------------------------------------------------

class TrackerState(Enum):
    IDLE     = "idle"
    TRACKING = "tracking"


@dataclass
class ProgressState:
    """Position of the parcel along its route. Mutated only by ProgressSimulator."""
    route: Route
    current_index: int = 0

    @property
    def current_coord(self) -> Coord:
        return self.route.path[self.current_index]

    @property
    def at_destination(self) -> bool:
        return self.current_index >= self.route.last_index


@dataclass(frozen=True)
class DistanceSnapshot:
    """Distances along a route in metres, derived from a ProgressState."""
    total: float
    covered: float
    remaining: float

    @property
    def progress_pct(self) -> float:
        if self.total <= 0:
            return 0.0
        return min(100.0, max(0.0, self.covered / self.total * 100))
