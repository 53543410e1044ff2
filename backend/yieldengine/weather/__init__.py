"""Irradiance climatology provider (NASA POWER)."""

from .nasa_power import (
    MONTH_LABELS,
    NasaPowerError,
    fetch_nasa_power_monthly,
    mock_climatology,
    parse_nasa_power_response,
)

__all__ = [
    "MONTH_LABELS",
    "NasaPowerError",
    "fetch_nasa_power_monthly",
    "mock_climatology",
    "parse_nasa_power_response",
]
