import logging

from cachetools import TTLCache

from yieldapi.config import settings
from yieldengine.insights.building_insights import BuildingInsights, fetch_building_insights

logger = logging.getLogger(__name__)

_insights_cache: TTLCache = TTLCache(
    maxsize=settings.insights_cache_size, ttl=settings.insights_cache_ttl_s
)


class SolarApiKeyMissing(RuntimeError):
    """The Solar API cannot be used without GOOGLE_SOLAR_API_KEY."""


def clear_insights_cache() -> None:
    _insights_cache.clear()


async def get_building_insights(lat: float, lon: float) -> BuildingInsights:
    """Roof segments of the building closest to a point, cached per ~10 m cell.

    Errors from the Solar API propagate; only successful lookups are cached.
    """
    if not settings.google_solar_api_key:
        raise SolarApiKeyMissing("Set GOOGLE_SOLAR_API_KEY to use the Solar API")

    key = f"{lat:.4f},{lon:.4f}"
    cached = _insights_cache.get(key)
    if cached is not None:
        return cached

    insights = await fetch_building_insights(
        lat,
        lon,
        settings.google_solar_api_key,
        base_url=settings.google_solar_base_url,
        timeout=settings.solar_api_timeout_s,
    )
    logger.info("Solar API returned %d segment(s) for %s", len(insights.segments), key)

    _insights_cache[key] = insights
    return insights
