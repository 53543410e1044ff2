"""
Segment-mode estimate: a roof facet from the building-insights service.

The facet's own energy estimate, when present, is treated as ground truth
and inverted into a per-kWp yield curve; otherwise the irradiance
climatology is transposed onto the facet's pitch/azimuth.  Either way the
system is re-sized for the customer's compensation target: the service's
recommended size only seeds the yield curve.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np
from numpy.typing import NDArray

from yieldengine.geometry.angles import Angles
from yieldengine.geometry.roof import usable_area
from yieldengine.params import SolarParams
from yieldengine.sizing.billing import BillInput, resolve_bill
from yieldengine.sizing.dimensioning import (
    UNCONSTRAINED_KWP,
    capacity_ceiling,
    dimension_system,
)
from yieldengine.solar.transposition import (
    MONTHS_PER_YEAR,
    MonthlyIrradianceSample,
    MonthlyTransposition,
    transpose_monthly,
)

from .models import DataSource, SolarComputationResult, SolarSegment, YieldBasis
from .results import build_month_results, month_labels, summarise_year

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _YieldCurve:
    basis: YieldBasis
    specific_yield: NDArray[np.float64]
    hpoa: NDArray[np.float64]


def segment_usable_area(segment: SolarSegment) -> float:
    """Usable array area of a facet (m^2).

    Priority: reported max array area > ground area x usable fraction > 0.
    """
    if segment.max_array_area_m2 and segment.max_array_area_m2 > 0:
        return segment.max_array_area_m2
    if segment.ground_area_m2 and segment.ground_area_m2 > 0:
        return usable_area(segment.ground_area_m2)
    return 0.0


def segment_capacity_ceiling(segment: SolarSegment, params: SolarParams) -> float:
    """Capacity ceiling of a facet; unconstrained when it reports no area."""
    area = segment_usable_area(segment)
    if area <= 0:
        return UNCONSTRAINED_KWP
    return capacity_ceiling(area, params)


def segment_energy_curve(segment: SolarSegment) -> NDArray[np.float64] | None:
    """Monthly energy the service estimated for the facet (kWh), if any.

    Priority: 12 monthly values > annual value spread evenly > None.
    """
    monthly = segment.monthly_energy_kwh
    if monthly is not None and len(monthly) == MONTHS_PER_YEAR:
        return np.asarray(monthly, dtype=np.float64)
    if segment.annual_energy_kwh and segment.annual_energy_kwh > 0:
        return np.full(MONTHS_PER_YEAR, segment.annual_energy_kwh / MONTHS_PER_YEAR)
    return None


def _yield_from_segment_energy(
    segment: SolarSegment,
    kwp_max: float,
    params: SolarParams,
) -> _YieldCurve | None:
    energy = segment_energy_curve(segment)
    if energy is None:
        return None

    if segment.recommended_system_kw and segment.recommended_system_kw > 0:
        base_kwp = segment.recommended_system_kw
    else:
        base_kwp = kwp_max
    # An unconstrained ceiling cannot normalise energy into a per-kWp curve
    if not math.isfinite(base_kwp) or base_kwp <= 0:
        return None

    specific_yield = np.where(energy > 0, energy / base_kwp, 0.0)
    pr = params.performance_ratio or 1.0
    return _YieldCurve(YieldBasis.SEGMENT_ENERGY, specific_yield, specific_yield / pr)


def _yield_from_transposition(transposed: MonthlyTransposition | None) -> _YieldCurve | None:
    if transposed is None:
        return None
    return _YieldCurve(YieldBasis.TRANSPOSITION, transposed.specific_yield, transposed.hpoa)


def _zero_yield() -> _YieldCurve:
    zeros = np.zeros(MONTHS_PER_YEAR, dtype=np.float64)
    return _YieldCurve(YieldBasis.NONE, zeros, zeros)


def perform_segment_computation(
    segment: SolarSegment,
    bill: BillInput,
    solar_params: SolarParams,
    dataset: Sequence[MonthlyIrradianceSample] | None,
    latitude: float,
) -> SolarComputationResult:
    """Estimate generation and savings for a building-insights roof facet.

    Parameters
    ----------
    segment : SolarSegment
        Facet geometry and optional energy estimate.
    bill : BillInput
        Customer bill information.
    solar_params : SolarParams
        Engine constants.
    dataset : sequence of MonthlyIrradianceSample or None
        Twelve months of irradiation climatology, or None when unavailable.
    latitude : float
        Site latitude in degrees, used only by the transposition fallback.

    Returns
    -------
    SolarComputationResult
        Tagged ``DataSource.SOLAR_API``.  With neither energy data nor a
        dataset, twelve zero-yield months are returned.
    """
    resolved = resolve_bill(bill, solar_params)
    kwp_max = segment_capacity_ceiling(segment, solar_params)

    transposed: MonthlyTransposition | None = None
    if dataset is not None:
        transposed = transpose_monthly(
            dataset,
            latitude,
            Angles(beta_deg=segment.pitch_degrees, gamma_deg=segment.azimuth_degrees),
            albedo=solar_params.albedo,
            performance_ratio=solar_params.performance_ratio,
        )

    # Energy-source priority: service estimate > transposition > zero
    sources: list[Callable[[], _YieldCurve | None]] = [
        lambda: _yield_from_segment_energy(segment, kwp_max, solar_params),
        lambda: _yield_from_transposition(transposed),
    ]
    curve = next(
        (c for c in (source() for source in sources) if c is not None),
        _zero_yield(),
    )

    sizing = dimension_system(resolved.consumption_target_kwh, curve.specific_yield, kwp_max)

    n = curve.specific_yield.size
    if transposed is not None and transposed.ghi.size == n:
        ghi, dhi, dni = transposed.ghi, transposed.dhi, transposed.dni
    else:
        ghi = dhi = dni = np.zeros(n, dtype=np.float64)

    labels = month_labels([s.month for s in dataset] if dataset is not None else None, n)
    monthly = build_month_results(
        labels,
        curve.specific_yield,
        curve.hpoa,
        ghi,
        dhi,
        dni,
        kwp=sizing.kwp,
        tariff=resolved.tariff_brl_kwh,
        uncertainty_pct=solar_params.uncertainty_pct,
    )

    logger.debug(
        "Segment %s estimate: basis=%s kwp=%.2f kwp_max=%s capped=%s",
        segment.segment_id, curve.basis.value, sizing.kwp, sizing.kwp_max, sizing.capped,
    )

    return SolarComputationResult(
        summary=summarise_year(monthly, sizing, resolved),
        monthly=monthly,
        dimensioning_capped=sizing.capped,
        source=DataSource.SOLAR_API,
        yield_basis=curve.basis,
    )
