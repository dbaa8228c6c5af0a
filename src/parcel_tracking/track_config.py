# track_config.py
# All tuneable constants in one place.
# Pass a TrackConfig instance to every module that needs settings.

import math
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Simulation constants
# ---------------------------------------------------------------------------

TICK_INTERVAL_S: float = 15.0      # marker advances one waypoint per tick
LOOKUP_DELAY_S: float = 0.5        # simulated network latency of a lookup
AVERAGE_SPEED_KMH: float = 35.0    # courier speed used for the ETA
ETA_PLACEHOLDER: str = "—"


# ---------------------------------------------------------------------------
# Main config
# ---------------------------------------------------------------------------

@dataclass
class TrackConfig:
    # Simulation
    tick_interval_s: float = TICK_INTERVAL_S
    lookup_delay_s: float = LOOKUP_DELAY_S

    # ETA
    average_speed_kmh: float = AVERAGE_SPEED_KMH
    eta_placeholder: str = ETA_PLACEHOLDER

    # Rendering
    follow: bool = True                    # pan the viewport to the marker on each advance

    def __post_init__(self) -> None:
        if not math.isfinite(self.tick_interval_s) or self.tick_interval_s <= 0:
            raise ValueError(f"tick_interval_s must be positive, got {self.tick_interval_s}")
        if not math.isfinite(self.lookup_delay_s) or self.lookup_delay_s < 0:
            raise ValueError(f"lookup_delay_s must be >= 0, got {self.lookup_delay_s}")
        if not math.isfinite(self.average_speed_kmh) or self.average_speed_kmh <= 0:
            raise ValueError(f"average_speed_kmh must be positive, got {self.average_speed_kmh}")

    @property
    def speed_m_per_min(self) -> float:
        return self.average_speed_kmh * 1000 / 60
