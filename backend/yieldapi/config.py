import math

from pydantic import field_validator
from pydantic_settings import BaseSettings

from yieldengine.params import SolarParams

_DEFAULT_TARIFF = 1.0
_DEFAULT_KWP_PER_M2 = 0.2


class Settings(BaseSettings):
    model_config = {"env_prefix": "", "case_sensitive": False}

    # App
    environment: str = "development"
    debug: bool = True
    app_name: str = "RoofYield"
    cors_origins: str = "http://localhost:5173,http://localhost:3000"
    log_json: bool = False

    # NASA POWER
    nasa_power_base_url: str = "https://power.larc.nasa.gov/api/temporal/climatology/point"
    nasa_power_timeout_s: float = 30.0

    # Google Solar API
    google_solar_api_key: str | None = None
    google_solar_base_url: str = "https://solar.googleapis.com/v1/buildingInsights:findClosest"
    solar_api_timeout_s: float = 20.0

    # Provider response caches (entries, seconds)
    dataset_cache_size: int = 1024
    dataset_cache_ttl_s: float = 86400.0
    insights_cache_size: int = 256
    insights_cache_ttl_s: float = 3600.0

    # Engine tuning
    default_tariff: float = _DEFAULT_TARIFF
    specific_kwp_per_m2: float = _DEFAULT_KWP_PER_M2

    # Rate limits (requests per minute per client IP)
    estimate_rate_limit: int = 30
    provider_rate_limit: int = 10

    @field_validator("default_tariff", mode="before")
    @classmethod
    def _positive_tariff(cls, value):
        return _positive_or(value, _DEFAULT_TARIFF)

    @field_validator("specific_kwp_per_m2", mode="before")
    @classmethod
    def _positive_density(cls, value):
        return _positive_or(value, _DEFAULT_KWP_PER_M2)

    def solar_params(self) -> SolarParams:
        return SolarParams(
            default_tariff_brl_kwh=self.default_tariff,
            kwp_per_square_meter=self.specific_kwp_per_m2,
        )


def _positive_or(value, fallback: float) -> float:
    """Numeric, finite and positive, else ``fallback``."""
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(parsed) or parsed <= 0:
        return fallback
    return parsed


settings = Settings()
