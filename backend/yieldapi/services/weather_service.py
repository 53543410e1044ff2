import logging

from cachetools import TTLCache

from yieldapi.config import settings
from yieldengine.solar.transposition import MonthlyIrradianceSample
from yieldengine.weather.nasa_power import fetch_nasa_power_monthly, mock_climatology

logger = logging.getLogger(__name__)

SOURCE_NASA_POWER = "nasa_power"
SOURCE_MOCK = "mock"

# Live NASA POWER results only; the bundled fallback is never cached
_dataset_cache: TTLCache = TTLCache(
    maxsize=settings.dataset_cache_size, ttl=settings.dataset_cache_ttl_s
)


def _cache_key(lat: float, lon: float) -> str:
    return f"{lat:.3f},{lon:.3f}"


def clear_dataset_cache() -> None:
    _dataset_cache.clear()


async def get_monthly_dataset(
    lat: float, lon: float
) -> tuple[list[MonthlyIrradianceSample], str]:
    """Monthly irradiation climatology for a point, cached per ~100 m cell.

    Returns (dataset, source).  Falls back to the bundled climatology if
    NASA POWER fails; the next request for the cell retries the provider.
    """
    key = _cache_key(lat, lon)
    cached = _dataset_cache.get(key)
    if cached is not None:
        return cached, SOURCE_NASA_POWER

    try:
        dataset = await fetch_nasa_power_monthly(
            lat,
            lon,
            base_url=settings.nasa_power_base_url,
            timeout=settings.nasa_power_timeout_s,
        )
    except Exception as exc:
        logger.warning(
            "NASA POWER request failed for %s, using bundled climatology: %s", key, exc,
            extra={"dataset_source": SOURCE_MOCK},
        )
        return mock_climatology(), SOURCE_MOCK

    _dataset_cache[key] = dataset
    return dataset, SOURCE_NASA_POWER
