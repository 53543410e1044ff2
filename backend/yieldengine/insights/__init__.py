"""Building-insights provider (Google Solar API)."""

from .building_insights import (
    BuildingInsights,
    SolarApiError,
    fetch_building_insights,
    is_solar_api_not_found,
    parse_building_insights,
    select_default_segment,
)

__all__ = [
    "BuildingInsights",
    "SolarApiError",
    "fetch_building_insights",
    "is_solar_api_not_found",
    "parse_building_insights",
    "select_default_segment",
]
