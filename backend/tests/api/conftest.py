"""API test infrastructure: async httpx client with stubbed upstream providers."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from yieldapi.core.deps import get_solar_params
from yieldengine.insights.building_insights import parse_building_insights
from yieldengine.params import SolarParams
from yieldengine.solar.transposition import MonthlyIrradianceSample

# Patch at the service modules where the provider clients are looked up
_NASA_TARGET = "yieldapi.services.weather_service.fetch_nasa_power_monthly"
_SOLAR_TARGET = "yieldapi.services.insights_service.fetch_building_insights"

SOLAR_API_KEY = "test-solar-key"


# ---------------------------------------------------------------------------
# FastAPI app with overridden dependencies
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def app():
    from yieldapi.core.rate_limit import estimate_limiter, provider_limiter
    from yieldapi.main import create_app
    from yieldapi.services.insights_service import clear_insights_cache
    from yieldapi.services.weather_service import clear_dataset_cache

    application = create_app()

    # 0.1 kWp/m2 keeps the drawn roof below a R$2000 bill's demand
    application.dependency_overrides[get_solar_params] = lambda: SolarParams(kwp_per_square_meter=0.1)

    # Reset per-process state between tests
    estimate_limiter.reset()
    provider_limiter.reset()
    clear_dataset_cache()
    clear_insights_cache()

    yield application

    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Upstream provider stubs
# ---------------------------------------------------------------------------

def make_dataset() -> list[MonthlyIrradianceSample]:
    labels = ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez"]
    return [
        MonthlyIrradianceSample(month=label, ghi=5.0 + i * 0.1, dhi=2.5, dni=3.0)
        for i, label in enumerate(labels)
    ]


INSIGHTS_PAYLOAD = {
    "center": {"latitude": -23.5612, "longitude": -46.6559},
    "imageryQuality": "HIGH",
    "solarPotential": {
        "roofSegmentSummaries": [
            {
                "segmentId": "north",
                "pitchDegrees": 18.0,
                "azimuthDegrees": 10.0,
                "groundAreaMeters2": 100.0,
                "maxArrayAreaMeters2": 80.0,
                "stats": {
                    "monthlyEnergyDcKwh": [500.0] * 12,
                    "yearlyEnergyDcKwh": 6000.0,
                    "dcCapacityKw": 5.0,
                },
            },
            {
                "segmentId": "south",
                "pitchDegrees": 18.0,
                "azimuthDegrees": 190.0,
                "groundAreaMeters2": 40.0,
            },
        ]
    },
}


@pytest.fixture
def nasa_calls(monkeypatch) -> list[tuple[float, float]]:
    """Stub NASA POWER with a fixed climatology; records each call."""
    calls: list[tuple[float, float]] = []

    async def _fake_fetch(lat, lon, **kwargs):
        calls.append((lat, lon))
        return make_dataset()

    monkeypatch.setattr(_NASA_TARGET, _fake_fetch)
    return calls


@pytest.fixture
def nasa_down(monkeypatch) -> None:
    async def _failing_fetch(lat, lon, **kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(_NASA_TARGET, _failing_fetch)


@pytest.fixture
def solar_api(monkeypatch) -> list[tuple[float, float]]:
    """Configure a key and stub the Solar API; records each call."""
    from yieldapi.config import settings

    calls: list[tuple[float, float]] = []

    async def _fake_fetch(lat, lon, api_key, **kwargs):
        assert api_key == SOLAR_API_KEY
        calls.append((lat, lon))
        return parse_building_insights(INSIGHTS_PAYLOAD)

    monkeypatch.setattr(settings, "google_solar_api_key", SOLAR_API_KEY)
    monkeypatch.setattr(_SOLAR_TARGET, _fake_fetch)
    return calls


@pytest.fixture
def no_solar_key(monkeypatch) -> None:
    from yieldapi.config import settings

    monkeypatch.setattr(settings, "google_solar_api_key", None)
