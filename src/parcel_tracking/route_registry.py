# route_registry.py
# Static reference data: tracking id -> route template.
# Lookups are case-insensitive; ids are stored upper-case.

from types import MappingProxyType
from typing import List, Mapping, Optional

from .models import Coord, RouteTemplate


def _path(*pairs) -> tuple:
    return tuple(Coord(lat, lon) for lat, lon in pairs)


# ---------------------------------------------------------------------------
# Preset routes
# ---------------------------------------------------------------------------

_TEMPLATES = (
    RouteTemplate(
        tracking_id="CHN123",
        status="In Transit",
        carrier="Phoenix Express",
        origin="Chennai Central",
        destination="Adyar, Chennai",
        path=_path(
            (13.0827, 80.2707),
            (13.0604, 80.2496),
            (13.0431, 80.2460),
            (13.0287, 80.2478),
            (13.0214, 80.2526),
            (13.0067, 80.2570),
            (13.0012, 80.2551),
        ),
    ),
    RouteTemplate(
        tracking_id="BLR555",
        status="Out for Delivery",
        carrier="SouthLine Logistics",
        origin="Bengaluru",
        destination="Mysuru",
        path=_path(
            (12.9716, 77.5946),
            (12.8000, 77.4000),
            (12.6000, 76.9000),
            (12.4500, 76.6500),
            (12.2958, 76.6394),
        ),
    ),
    RouteTemplate(
        tracking_id="MUM777",
        status="In Transit",
        carrier="Western Courier",
        origin="Mumbai",
        destination="Pune",
        path=_path(
            (19.0760, 72.8777),
            (18.9500, 73.1500),
            (18.8000, 73.3000),
            (18.6500, 73.5000),
            (18.5204, 73.8567),
        ),
    ),
)

ROUTES: Mapping[str, RouteTemplate] = MappingProxyType(
    {t.tracking_id: t for t in _TEMPLATES}
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize_tracking_id(raw: Optional[str]) -> str:
    """Trim surrounding whitespace and upper-case a user supplied id."""
    return (raw or "").strip().upper()


def lookup(
    tracking_id: Optional[str],
    routes: Mapping[str, RouteTemplate] = ROUTES,
) -> Optional[RouteTemplate]:
    """Return the template for tracking_id, or None if it is unknown."""
    return routes.get(normalize_tracking_id(tracking_id))


def known_ids(routes: Mapping[str, RouteTemplate] = ROUTES) -> List[str]:
    return sorted(routes)
