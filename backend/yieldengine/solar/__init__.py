"""
Solar resource module.

Provides the monthly isotropic-sky transposition (noon tilt factor,
Liu-Jordan diffuse and ground-reflected terms) that turns horizontal
irradiation climatology into plane-of-array irradiation and specific yield.
"""

from .transposition import (
    DAYS_IN_MONTH,
    MONTHS_PER_YEAR,
    REPRESENTATIVE_DAY,
    MonthlyIrradianceSample,
    MonthlyTransposition,
    solar_declination,
    tilt_factor,
    transpose_monthly,
)

__all__ = [
    "DAYS_IN_MONTH",
    "MONTHS_PER_YEAR",
    "REPRESENTATIVE_DAY",
    "MonthlyIrradianceSample",
    "MonthlyTransposition",
    "solar_declination",
    "tilt_factor",
    "transpose_monthly",
]
