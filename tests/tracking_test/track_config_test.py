import pytest

from parcel_tracking.track_config import TrackConfig


def test_defaults():
    config = TrackConfig()
    assert config.tick_interval_s == 15.0
    assert config.lookup_delay_s == 0.5
    assert config.average_speed_kmh == 35.0
    assert config.follow is True
    assert config.speed_m_per_min == pytest.approx(583.333, rel=1e-4)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"tick_interval_s": 0},
        {"tick_interval_s": -1},
        {"lookup_delay_s": -0.1},
        {"average_speed_kmh": 0},
        {"average_speed_kmh": float("inf")},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        TrackConfig(**kwargs)
