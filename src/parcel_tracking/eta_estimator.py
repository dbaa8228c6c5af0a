# eta_estimator.py
# Remaining distance -> minutes at a fixed average speed, and its display text.
# Never raises on numeric input; bad values render as a placeholder.

import math
from typing import Optional

from .track_config import AVERAGE_SPEED_KMH, ETA_PLACEHOLDER

DEFAULT_SPEED_KMH = AVERAGE_SPEED_KMH


def _round_half_up(value: float) -> int:
    # Display rounding: 0.5 goes up, unlike round()
    return int(math.floor(value + 0.5))


def estimate_minutes(remaining_m: float, speed_kmh: float = DEFAULT_SPEED_KMH) -> float:
    """
    Minutes needed to cover remaining_m metres at speed_kmh.

    A non-positive or non-finite speed gives math.inf, which format_eta
    renders as the placeholder.
    """
    if not math.isfinite(speed_kmh) or speed_kmh <= 0:
        return math.inf
    meters_per_min = speed_kmh * 1000 / 60
    return remaining_m / meters_per_min


def format_eta(minutes: Optional[float], placeholder: str = ETA_PLACEHOLDER) -> str:
    """
    Human-readable duration.

    Examples:
        format_eta(30)  -> "30 min"
        format_eta(90)  -> "1h 30m"
        format_eta(-5)  -> placeholder
    """
    if minutes is None or not math.isfinite(minutes) or minutes < 0:
        return placeholder
    if minutes < 60:
        return f"{_round_half_up(minutes)} min"
    hours = int(math.floor(minutes / 60))
    mins = _round_half_up(minutes % 60)
    return f"{hours}h {mins}m"
