"""
Monthly transposition of horizontal irradiation onto a tilted plane.

Converts daily GHI / DHI climatology for each calendar month into
plane-of-array irradiation (HPOA) with an isotropic-sky model:

    HPOA = Hb * Rb + Hd * (1 + cos beta) / 2 + rho * H * (1 - cos beta) / 2

The beam tilt factor Rb is evaluated once per month, at solar noon
(hour angle = 0), on the month's representative day.  This single-instant
approximation replaces a full-day integral and is part of the model: every
downstream figure is calibrated against it.

References
----------
- Liu B.Y.H., Jordan R.C., "Daily insolation on surfaces tilted towards the
  equator", ASHRAE Journal, 3(10):53-59, 1961.
- Duffie J.A., Beckman W.A., "Solar Engineering of Thermal Processes",
  4th ed., Wiley, 2013 (eq. 1.6.2 and 2.19.1).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from yieldengine.geometry.angles import Angles, to_radians

# Days per month of a non-leap year
DAYS_IN_MONTH = np.array(
    [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31], dtype=np.float64
)

# Representative day-of-year per month (Klein 1977, "average day")
REPRESENTATIVE_DAY = np.array(
    [17, 47, 75, 105, 135, 162, 198, 228, 258, 288, 318, 344], dtype=np.float64
)

MONTHS_PER_YEAR: int = 12


@dataclass(frozen=True)
class MonthlyIrradianceSample:
    """Daily irradiation climatology for one calendar month (kWh/m^2/day)."""

    month: str
    ghi: float
    dhi: float
    dni: float


@dataclass(frozen=True)
class MonthlyTransposition:
    """Per-month transposition output, January first.

    ``hpoa`` and the pass-through ``ghi``/``dhi``/``dni`` are monthly totals
    (kWh/m^2/month); ``specific_yield`` is kWh per installed kWp per month.
    """

    specific_yield: NDArray[np.float64]
    hpoa: NDArray[np.float64]
    ghi: NDArray[np.float64]
    dhi: NDArray[np.float64]
    dni: NDArray[np.float64]
    tilt_factor: NDArray[np.float64]


def solar_declination(month_index: NDArray[np.intp] | int) -> NDArray[np.float64]:
    """Solar declination (radians) on the representative day of each month.

    Cooper's equation: 23.45 deg * sin(360/365 * (n - 81)).
    """
    n = REPRESENTATIVE_DAY[np.asarray(month_index)]
    return np.radians(23.45) * np.sin(np.radians(360.0 / 365.0 * (n - 81.0)))


def _cos_incidence(
    latitude: float,
    declination: NDArray[np.float64],
    beta: float,
    gamma: float,
    hour_angle: float,
) -> NDArray[np.float64]:
    """Cosine of the beam incidence angle on a tilted surface.

    All angles in radians; ``gamma`` is the surface azimuth in the solar
    convention (0 = South, positive towards West).
    """
    sin_dec = np.sin(declination)
    cos_dec = np.cos(declination)
    sin_lat, cos_lat = np.sin(latitude), np.cos(latitude)
    sin_b, cos_b = np.sin(beta), np.cos(beta)
    sin_g, cos_g = np.sin(gamma), np.cos(gamma)
    cos_w, sin_w = np.cos(hour_angle), np.sin(hour_angle)

    return (
        sin_dec * sin_lat * cos_b
        - sin_dec * cos_lat * sin_b * cos_g
        + cos_dec * cos_lat * cos_b * cos_w
        + cos_dec * sin_lat * sin_b * cos_g * cos_w
        + cos_dec * sin_b * sin_g * sin_w
    )


def _cos_zenith(
    latitude: float,
    declination: NDArray[np.float64],
    hour_angle: float,
) -> NDArray[np.float64]:
    return (
        np.sin(latitude) * np.sin(declination)
        + np.cos(latitude) * np.cos(declination) * np.cos(hour_angle)
    )


def tilt_factor(
    latitude_deg: float,
    declination: NDArray[np.float64],
    beta_rad: float,
    gamma_solar_rad: float,
) -> NDArray[np.float64]:
    """Beam tilt factor Rb at solar noon.

    Rb = max(cos(theta) / cos(theta_z), 0) while the sun is above the
    horizon at noon; 0 otherwise (polar night, never a division by zero).
    """
    lat = to_radians(latitude_deg)
    hour_angle = 0.0
    cos_theta = _cos_incidence(lat, declination, beta_rad, gamma_solar_rad, hour_angle)
    cos_theta_z = _cos_zenith(lat, declination, hour_angle)

    sun_up = cos_theta_z > 0.0
    safe_cos_z = np.where(sun_up, cos_theta_z, 1.0)
    return np.where(sun_up, np.maximum(cos_theta / safe_cos_z, 0.0), 0.0)


def transpose_monthly(
    dataset: Sequence[MonthlyIrradianceSample],
    latitude: float,
    angles: Angles,
    albedo: float,
    performance_ratio: float,
) -> MonthlyTransposition:
    """Transpose a 12-month climatology onto the array plane.

    Parameters
    ----------
    dataset : sequence of MonthlyIrradianceSample
        Exactly 12 records, January first, daily values in kWh/m^2/day.
        Zero or missing irradiance yields zero output for that month.
    latitude : float
        Site latitude in degrees (positive north).  Hemisphere needs no
        special handling; it flows through the trigonometry.
    angles : Angles
        Array tilt and compass azimuth.
    albedo : float
        Ground reflectance.
    performance_ratio : float
        Derating from HPOA to energy per kWp.

    Returns
    -------
    MonthlyTransposition
        Monthly totals; ``specific_yield = hpoa * performance_ratio``
        (1 kWp delivers 1 kWh per kWh/m^2 at the reference irradiance).
    """
    n = len(dataset)
    months = np.arange(n) % MONTHS_PER_YEAR
    days = DAYS_IN_MONTH[months]

    ghi = np.array([s.ghi or 0.0 for s in dataset], dtype=np.float64)
    dhi = np.array([s.dhi or 0.0 for s in dataset], dtype=np.float64)
    dni = np.array([s.dni or 0.0 for s in dataset], dtype=np.float64)

    beta = angles.beta_rad
    cos_beta = np.cos(beta)

    rb = tilt_factor(latitude, solar_declination(months), beta, angles.gamma_solar_rad)

    # Beam never negative, even for inconsistent datasets (DHI > GHI)
    beam = np.maximum(ghi - dhi, 0.0)

    hpoa_daily = (
        beam * rb
        + dhi * (1.0 + cos_beta) / 2.0
        + albedo * ghi * (1.0 - cos_beta) / 2.0
    )
    hpoa = hpoa_daily * days

    return MonthlyTransposition(
        specific_yield=hpoa * performance_ratio,
        hpoa=hpoa,
        ghi=ghi * days,
        dhi=dhi * days,
        dni=dni * days,
        tilt_factor=rb,
    )
