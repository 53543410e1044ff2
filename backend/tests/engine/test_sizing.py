"""Tests for yieldengine.sizing: bill resolution and capacity-limited sizing."""

from __future__ import annotations

import math

import numpy as np
import pytest

from yieldengine.params import DEFAULT_SOLAR_PARAMS, SolarParams
from yieldengine.sizing.billing import (
    BillInput,
    resolve_bill,
    resolve_compensation_target,
    resolve_consumption,
    resolve_tariff,
)
from yieldengine.sizing.dimensioning import (
    UNCONSTRAINED_KWP,
    area_capacity,
    average_specific_yield,
    capacity_ceiling,
    dimension_system,
    panel_capacity,
)

FLAT_YIELD = np.full(12, 120.0)


# ======================================================================
# Engine parameters
# ======================================================================


class TestSolarParams:
    def test_defaults(self):
        p = DEFAULT_SOLAR_PARAMS
        assert p.performance_ratio == 0.8
        assert p.albedo == 0.2
        assert p.kwp_per_square_meter == 0.2
        assert p.uncertainty_pct == 0.12
        assert p.tilt_range_deg == (14.0, 22.0)
        assert p.has_panel_sizing

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"performance_ratio": 1.2},
            {"performance_ratio": -0.1},
            {"albedo": 1.5},
            {"kwp_per_square_meter": -0.2},
            {"uncertainty_pct": -0.01},
            {"default_tariff_brl_kwh": -1.0},
            {"tilt_range_deg": (30.0, 10.0)},
        ],
    )
    def test_rejects_out_of_domain(self, kwargs):
        with pytest.raises(ValueError):
            SolarParams(**kwargs)

    def test_panel_sizing_optional(self):
        assert not SolarParams(panel_wp=None).has_panel_sizing
        assert not SolarParams(panel_area_m2=0.0).has_panel_sizing


# ======================================================================
# Bill resolution
# ======================================================================


class TestBillResolution:
    def test_explicit_tariff_wins(self, solar_params):
        bill = BillInput(monthly_spend_brl=500.0, tariff_brl_kwh=0.8, monthly_consumption_kwh=250.0)
        assert resolve_tariff(bill, solar_params) == 0.8

    def test_tariff_derived_from_spend_and_consumption(self, solar_params):
        bill = BillInput(monthly_spend_brl=500.0, monthly_consumption_kwh=400.0)
        assert resolve_tariff(bill, solar_params) == pytest.approx(1.25)

    def test_tariff_falls_back_to_default(self, solar_params):
        assert resolve_tariff(BillInput(monthly_spend_brl=500.0), solar_params) == 1.0

    def test_non_positive_tariff_is_ignored(self, solar_params):
        bill = BillInput(monthly_spend_brl=500.0, tariff_brl_kwh=0.0)
        assert resolve_tariff(bill, solar_params) == 1.0

    def test_explicit_consumption_wins(self):
        bill = BillInput(monthly_spend_brl=500.0, monthly_consumption_kwh=300.0)
        assert resolve_consumption(bill, tariff=2.0) == 300.0

    def test_consumption_derived_from_spend(self):
        assert resolve_consumption(BillInput(monthly_spend_brl=500.0), tariff=1.25) == pytest.approx(400.0)

    def test_consumption_zero_without_information(self):
        assert resolve_consumption(BillInput(), tariff=1.0) == 0.0
        assert resolve_consumption(BillInput(monthly_spend_brl=500.0), tariff=0.0) == 0.0

    def test_unset_compensation_uses_default(self, solar_params):
        assert resolve_compensation_target(BillInput(), solar_params) == 90.0
        assert resolve_compensation_target(BillInput(compensation_target_pct=70.0), solar_params) == 70.0

    def test_resolve_bill(self, bill, solar_params):
        resolved = resolve_bill(bill, solar_params)
        assert resolved.tariff_brl_kwh == 1.0
        assert resolved.consumption_kwh == pytest.approx(500.0)
        assert resolved.compensation_target_pct == 90.0
        assert resolved.consumption_target_kwh == pytest.approx(450.0)


# ======================================================================
# Capacity ceiling
# ======================================================================


class TestCapacityCeiling:
    def test_density_limit(self, solar_params):
        assert area_capacity(84.0, solar_params) == pytest.approx(8.4)

    def test_panel_limit(self, solar_params):
        """84 m2 / 2 m2 = 42 panels x 550 Wp."""
        assert panel_capacity(84.0, solar_params) == pytest.approx(23.1)

    def test_panel_limit_binds(self):
        """0.3 kWp/m2 on 10 m2 is 3 kWp, but only 5 x 550 Wp fit."""
        params = SolarParams(kwp_per_square_meter=0.3)
        assert capacity_ceiling(10.0, params) == pytest.approx(2.75)

    def test_area_smaller_than_one_panel(self, solar_params):
        """Zero whole panels: the density limit applies alone."""
        assert panel_capacity(1.5, solar_params) == 0.0
        assert capacity_ceiling(1.5, solar_params) == pytest.approx(0.15)

    def test_without_panel_sizing(self):
        params = SolarParams(panel_wp=None, panel_area_m2=None)
        assert capacity_ceiling(84.0, params) == pytest.approx(16.8)

    def test_monotone_in_area(self, solar_params):
        ceilings = [capacity_ceiling(a, solar_params) for a in np.linspace(0.0, 500.0, 51)]
        assert all(b >= a for a, b in zip(ceilings, ceilings[1:]))

    def test_zero_area(self, solar_params):
        assert capacity_ceiling(0.0, solar_params) == 0.0


# ======================================================================
# Dimensioning
# ======================================================================


class TestDimensioning:
    def test_average_yield(self):
        assert average_specific_yield(FLAT_YIELD) == 120.0
        assert average_specific_yield([]) == 0.0

    def test_sized_to_target(self):
        sizing = dimension_system(360.0, FLAT_YIELD, kwp_max=8.0)
        assert sizing.kwp_target == pytest.approx(3.0)
        assert sizing.kwp == pytest.approx(3.0)
        assert not sizing.capped

    def test_capped_at_ceiling(self):
        sizing = dimension_system(1800.0, FLAT_YIELD, kwp_max=8.0)
        assert sizing.kwp_target == pytest.approx(15.0)
        assert sizing.kwp == 8.0
        assert sizing.capped

    def test_exactly_at_ceiling_is_not_capped(self):
        sizing = dimension_system(960.0, FLAT_YIELD, kwp_max=8.0)
        assert sizing.kwp == pytest.approx(8.0)
        assert not sizing.capped

    @pytest.mark.parametrize("target", [0.0, 100.0, 960.0, 5000.0])
    @pytest.mark.parametrize("kwp_max", [0.0, 2.5, 8.0, UNCONSTRAINED_KWP])
    def test_bounds(self, target, kwp_max):
        sizing = dimension_system(target, FLAT_YIELD, kwp_max)
        assert 0.0 <= sizing.kwp <= kwp_max
        assert sizing.capped == (sizing.kwp_target > kwp_max and kwp_max > 0)

    def test_zero_yield_sizes_nothing(self):
        sizing = dimension_system(450.0, np.zeros(12), kwp_max=8.0)
        assert sizing.kwp_target == 0.0
        assert sizing.kwp == 0.0
        assert not sizing.capped

    def test_no_capacity(self):
        sizing = dimension_system(450.0, FLAT_YIELD, kwp_max=0.0)
        assert sizing.kwp == 0.0
        assert not sizing.capped

    def test_unconstrained_ceiling(self):
        sizing = dimension_system(6000.0, FLAT_YIELD, kwp_max=UNCONSTRAINED_KWP)
        assert sizing.kwp == pytest.approx(50.0)
        assert math.isinf(sizing.kwp_max)
        assert not sizing.capped
