import math

import pytest

from parcel_tracking.eta_estimator import estimate_minutes, format_eta
from parcel_tracking.track_config import ETA_PLACEHOLDER


@pytest.mark.parametrize(
    "minutes,expected",
    [
        (0, "0 min"),
        (30, "30 min"),
        (29.4, "29 min"),
        (0.5, "1 min"),
        (59.4, "59 min"),
        (60, "1h 0m"),
        (90, "1h 30m"),
        (135, "2h 15m"),
        (150.5, "2h 31m"),
    ],
)
def test_format_eta(minutes, expected):
    assert format_eta(minutes) == expected


@pytest.mark.parametrize("minutes", [-5, -0.1, float("nan"), math.inf, -math.inf, None])
def test_format_eta_placeholder(minutes):
    assert format_eta(minutes) == ETA_PLACEHOLDER
    assert format_eta(minutes, placeholder="n/a") == "n/a"


def test_estimate_minutes():
    # 35 km/h -> 583.33 m/min
    assert estimate_minutes(35_000, 35) == pytest.approx(60.0)
    assert estimate_minutes(0, 35) == 0.0
    assert estimate_minutes(1_000, 60) == pytest.approx(1.0)


@pytest.mark.parametrize("speed", [0, -10, float("nan")])
def test_estimate_minutes_bad_speed_renders_placeholder(speed):
    minutes = estimate_minutes(1_000, speed)
    assert math.isinf(minutes)
    assert format_eta(minutes) == ETA_PLACEHOLDER
