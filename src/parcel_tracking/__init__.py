# Parcel tracking simulator: route lookup, timed progress along the route,
# great-circle distances and ETA.

from .eta_estimator import estimate_minutes, format_eta
from .geo_utils import distance, distance_snapshot, haversine_distance, path_distance
from .models import Coord, DistanceSnapshot, ProgressState, Route, RouteTemplate, TrackerState
from .progress_simulator import ProgressSimulator
from .render import LogRenderer, RenderFrame, build_frame
from .resolver import NotFoundError, TrackingResolver
from .track_config import TrackConfig
from .tracker import ParcelTracker

__all__ = [
    "Coord",
    "DistanceSnapshot",
    "LogRenderer",
    "NotFoundError",
    "ParcelTracker",
    "ProgressSimulator",
    "ProgressState",
    "RenderFrame",
    "Route",
    "RouteTemplate",
    "TrackConfig",
    "TrackerState",
    "TrackingResolver",
    "build_frame",
    "distance",
    "distance_snapshot",
    "estimate_minutes",
    "format_eta",
    "haversine_distance",
    "path_distance",
]
