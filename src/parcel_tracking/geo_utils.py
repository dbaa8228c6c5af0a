# geo_utils.py
# Pure mathematical / geographic helper functions.
# No side effects, no project imports besides the shared models.

import math
from typing import Sequence, Tuple

import numpy as np

from .models import Coord, DistanceSnapshot


EARTH_RADIUS_M = 6_371_000.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points in metres.

    Args:
        lat1, lon1: Origin in decimal degrees.
        lat2, lon2: Destination in decimal degrees.

    Returns:
        Distance in metres.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    half_d_phi = (phi2 - phi1) / 2
    half_d_lambda = math.radians(lon2 - lon1) / 2
    a = math.sin(half_d_phi) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(half_d_lambda) ** 2
    # Rounding can push a a hair outside [0, 1] for near-antipodal points
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance(a: Coord, b: Coord) -> float:
    """Great-circle distance between two coordinates in metres."""
    return haversine_distance(a.lat, a.lon, b.lat, b.lon)


def segment_distances(path: Sequence[Coord]) -> np.ndarray:
    """
    Haversine length of every consecutive pair of waypoints.

    Returns:
        Array of length max(0, len(path) - 1), metres.
    """
    if len(path) < 2:
        return np.zeros(0)
    coords = np.radians(np.array([(c.lat, c.lon) for c in path], dtype=float))
    lat1, lon1 = coords[:-1, 0], coords[:-1, 1]
    lat2, lon2 = coords[1:, 0], coords[1:, 1]
    a = (
        np.sin((lat2 - lat1) / 2) ** 2
        + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2
    )
    # Rounding can push a a hair outside [0, 1] for near-antipodal points
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_M * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def cumulative_distances(path: Sequence[Coord]) -> np.ndarray:
    """
    Distance along the path from the first waypoint to each waypoint.

    Element 0 is always 0; the last element is the total path length.
    """
    if not path:
        return np.zeros(0)
    return np.concatenate(([0.0], np.cumsum(segment_distances(path))))


def path_distance(path: Sequence[Coord]) -> float:
    """Total length of a polyline in metres. Paths of 0 or 1 points have length 0."""
    return float(segment_distances(path).sum())


def distance_snapshot(path: Sequence[Coord], index: int) -> DistanceSnapshot:
    """
    Total, covered and remaining distance with the parcel at path[index].

    Args:
        path:  Full route polyline.
        index: Current waypoint index; clamped into [0, len(path) - 1].
    """
    cumulative = cumulative_distances(path)
    if cumulative.size == 0:
        return DistanceSnapshot(total=0.0, covered=0.0, remaining=0.0)
    index = min(max(index, 0), cumulative.size - 1)
    total = float(cumulative[-1])
    covered = float(cumulative[index])
    return DistanceSnapshot(total=total, covered=covered, remaining=max(0.0, total - covered))


def calculate_bearing(a: Coord, b: Coord) -> float:
    """Initial heading from a towards b, degrees clockwise from north in [0, 360)."""
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    d_lambda = math.radians(b.lon - a.lon)
    east = math.sin(d_lambda) * math.cos(phi2)
    north = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lambda)
    return math.degrees(math.atan2(east, north)) % 360


def path_bounds(path: Sequence[Coord]) -> Tuple[Coord, Coord]:
    """
    Bounding box of a path as (south_west, north_east).

    Raises:
        ValueError: if the path is empty.
    """
    if not path:
        raise ValueError("Cannot compute bounds of an empty path.")
    lats = [c.lat for c in path]
    lons = [c.lon for c in path]
    return Coord(min(lats), min(lons)), Coord(max(lats), max(lons))
