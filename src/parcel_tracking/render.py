# render.py
# Boundary to the map rendering layer.
# The core only derives what to draw; a Renderer decides how.

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from .geo_utils import calculate_bearing, path_bounds
from .models import Coord, ProgressState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderFrame:
    """Everything the map needs for one state of a tracked parcel."""
    tracking_id: str
    full_path: Tuple[Coord, ...]          # complete route polyline
    travelled_path: Tuple[Coord, ...]     # path[0..current_index], never empty
    marker: Coord                         # live parcel position
    follow: bool
    fit_bounds: bool                      # first frame of a route: fit viewport to bounds
    bounds: Tuple[Coord, Coord]           # (south_west, north_east)
    heading: Optional[float] = None       # bearing to the next waypoint, None at destination


def build_frame(progress: ProgressState, follow: bool) -> RenderFrame:
    """Derive the drawable values for a ProgressState."""
    path = progress.route.path
    index = min(max(progress.current_index, 0), len(path) - 1)
    marker = path[index]
    heading = calculate_bearing(marker, path[index + 1]) if index + 1 < len(path) else None
    return RenderFrame(
        tracking_id=progress.route.tracking_id,
        full_path=path,
        travelled_path=path[: max(1, index + 1)],
        marker=marker,
        follow=follow,
        fit_bounds=index == 0,
        bounds=path_bounds(path),
        heading=heading,
    )


class Renderer(Protocol):
    def draw(self, frame: RenderFrame) -> None: ...

    def clear(self) -> None: ...


class LogRenderer:
    """
    Renderer that reports frames through logging instead of a map widget.

    Holds the last drawn frame the way a map widget holds its layer handles;
    clear() drops it.
    """

    def __init__(self) -> None:
        self.frame: Optional[RenderFrame] = None

    def draw(self, frame: RenderFrame) -> None:
        self.frame = frame
        if frame.fit_bounds:
            sw, ne = frame.bounds
            logger.info(
                f"[Map] {frame.tracking_id}: fit bounds "
                f"({sw.lat:.4f}, {sw.lon:.4f}) - ({ne.lat:.4f}, {ne.lon:.4f})"
            )
        elif frame.follow:
            logger.info(f"[Map] {frame.tracking_id}: pan to ({frame.marker.lat:.4f}, {frame.marker.lon:.4f})")
        else:
            logger.debug(f"[Map] {frame.tracking_id}: marker at ({frame.marker.lat:.4f}, {frame.marker.lon:.4f})")

    def clear(self) -> None:
        if self.frame is not None:
            logger.debug(f"[Map] {self.frame.tracking_id}: layers removed")
        self.frame = None
