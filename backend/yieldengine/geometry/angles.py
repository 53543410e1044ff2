"""
Angle conventions for roof orientation.

Roof azimuths are stored as compass bearings: degrees clockwise from true
North in [0, 360).  The transposition equations use the solar convention,
where 0 deg points due South and angles grow towards the West.  The two are
a half-turn apart.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

DEG2RAD: float = math.pi / 180.0


def to_radians(deg: float) -> float:
    """Degrees to radians."""
    return deg * DEG2RAD


def normalize_azimuth(deg: float) -> float:
    """Fold any angle in degrees into [0, 360).

    Negative values and values beyond a full turn are accepted.
    """
    normalized = ((deg % 360.0) + 360.0) % 360.0
    # -1e-15 % 360 rounds to exactly 360.0
    return 0.0 if normalized >= 360.0 else normalized


def compass_to_solar_azimuth(deg: float) -> float:
    """Bearing from North (clockwise) -> solar azimuth from South."""
    return normalize_azimuth(normalize_azimuth(deg) - 180.0)


def solar_to_compass_azimuth(deg: float) -> float:
    """Solar azimuth from South -> bearing from North (clockwise)."""
    return normalize_azimuth(normalize_azimuth(deg) + 180.0)


@dataclass(frozen=True)
class Angles:
    """Surface orientation of a PV array.

    Parameters
    ----------
    beta_deg : float
        Tilt from horizontal, 0 -- 90 degrees.
    gamma_deg : float
        Azimuth as a compass bearing from true North, clockwise.
    """

    beta_deg: float
    gamma_deg: float

    @property
    def beta_rad(self) -> float:
        return to_radians(self.beta_deg)

    @property
    def gamma_solar_rad(self) -> float:
        """Surface azimuth in the solar (from-South) convention, radians."""
        return to_radians(compass_to_solar_azimuth(self.gamma_deg))
