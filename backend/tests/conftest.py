"""Shared test fixtures for RoofYield engine and API tests."""

from __future__ import annotations

import pytest

from yieldengine.estimate.models import SolarSegment
from yieldengine.geometry.angles import Angles
from yieldengine.geometry.roof import LatLng, RoofSelection
from yieldengine.params import SolarParams
from yieldengine.sizing.billing import BillInput
from yieldengine.solar.transposition import MonthlyIrradianceSample

SAO_PAULO_LAT = -23.50025


# ======================================================================
# Irradiance fixtures
# ======================================================================

@pytest.fixture
def base_dataset() -> list[MonthlyIrradianceSample]:
    """Twelve months of GHI 5.0 -> 6.1 kWh/m2/day with constant diffuse."""
    return [
        MonthlyIrradianceSample(month=f"M{i + 1}", ghi=5.0 + i * 0.1, dhi=2.5, dni=3.0)
        for i in range(12)
    ]


@pytest.fixture
def zero_dataset() -> list[MonthlyIrradianceSample]:
    return [
        MonthlyIrradianceSample(month=f"M{i + 1}", ghi=0.0, dhi=0.0, dni=0.0)
        for i in range(12)
    ]


# ======================================================================
# Roof / orientation fixtures
# ======================================================================

@pytest.fixture
def roof() -> RoofSelection:
    """120 m2 roof in Sao Paulo with 84 m2 usable."""
    polygon = (
        LatLng(-23.5, -46.6),
        LatLng(-23.5005, -46.6),
        LatLng(-23.5005, -46.6005),
        LatLng(-23.5, -46.6005),
    )
    return RoofSelection(
        polygon=polygon,
        area_m2=120.0,
        usable_area_m2=84.0,
        centroid=LatLng(SAO_PAULO_LAT, -46.60025),
        has_polygon=True,
    )


@pytest.fixture
def angles() -> Angles:
    """18 deg tilt facing true North (towards the equator)."""
    return Angles(beta_deg=18.0, gamma_deg=0.0)


# ======================================================================
# Bill / parameter fixtures
# ======================================================================

@pytest.fixture
def bill() -> BillInput:
    """R$500 per month, tariff unknown, 90 % compensation."""
    return BillInput(monthly_spend_brl=500.0, compensation_target_pct=90.0)


@pytest.fixture
def solar_params() -> SolarParams:
    """Engine constants with a conservative 0.1 kWp/m2 density.

    84 m2 usable gives an 8.4 kWp ceiling: above a R$500 bill's demand,
    below a R$2000 bill's.
    """
    return SolarParams(
        performance_ratio=0.8,
        albedo=0.2,
        kwp_per_square_meter=0.1,
        panel_wp=550.0,
        panel_area_m2=2.0,
        default_tariff_brl_kwh=1.0,
        compensation_target_default_pct=90.0,
        uncertainty_pct=0.12,
    )


@pytest.fixture
def segment() -> SolarSegment:
    """Solar API facet carrying a flat 500 kWh/month estimate for 5 kWp."""
    return SolarSegment(
        segment_id="seg-1",
        pitch_degrees=18.0,
        azimuth_degrees=10.0,
        ground_area_m2=100.0,
        max_array_area_m2=80.0,
        monthly_energy_kwh=tuple([500.0] * 12),
        annual_energy_kwh=6000.0,
        recommended_system_kw=5.0,
    )
