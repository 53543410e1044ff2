"""
Manual-mode estimate: user-drawn roof polygon plus chosen tilt/azimuth.

bill -> tariff/consumption/target -> monthly transposition at the roof's
latitude -> average specific yield -> size clamped to the roof's capacity
ceiling -> monthly energy, savings and uncertainty.
"""

from __future__ import annotations

import logging
from typing import Sequence

from yieldengine.geometry.angles import Angles
from yieldengine.geometry.roof import RoofSelection
from yieldengine.params import SolarParams
from yieldengine.sizing.billing import BillInput, resolve_bill
from yieldengine.sizing.dimensioning import capacity_ceiling, dimension_system
from yieldengine.solar.transposition import MonthlyIrradianceSample, transpose_monthly

from .models import DataSource, SolarComputationResult, YieldBasis
from .results import build_month_results, month_labels, summarise_year

logger = logging.getLogger(__name__)


def perform_manual_computation(
    roof: RoofSelection,
    angles: Angles,
    bill: BillInput,
    solar_params: SolarParams,
    dataset: Sequence[MonthlyIrradianceSample],
    latitude: float | None = None,
) -> SolarComputationResult:
    """Estimate generation and savings for a manually drawn roof.

    Parameters
    ----------
    roof : RoofSelection
        Outline and usable area; its centroid supplies the latitude unless
        ``latitude`` is given.
    angles : Angles
        Array tilt and compass azimuth chosen by the user.
    bill : BillInput
        Customer bill information.
    solar_params : SolarParams
        Engine constants.
    dataset : sequence of MonthlyIrradianceSample
        Twelve months of daily irradiation climatology, January first.
    latitude : float, optional
        Overrides the roof centroid latitude.

    Returns
    -------
    SolarComputationResult
        Tagged ``DataSource.MANUAL``.  Degenerate inputs (zero area, zero
        irradiance, zero consumption) give zero-valued results, never an
        exception.
    """
    lat = roof.centroid.lat if latitude is None else latitude
    resolved = resolve_bill(bill, solar_params)

    transposed = transpose_monthly(
        dataset,
        lat,
        angles,
        albedo=solar_params.albedo,
        performance_ratio=solar_params.performance_ratio,
    )

    sizing = dimension_system(
        resolved.consumption_target_kwh,
        transposed.specific_yield,
        capacity_ceiling(roof.usable_area_m2, solar_params),
    )

    monthly = build_month_results(
        month_labels([s.month for s in dataset], len(dataset)),
        transposed.specific_yield,
        transposed.hpoa,
        transposed.ghi,
        transposed.dhi,
        transposed.dni,
        kwp=sizing.kwp,
        tariff=resolved.tariff_brl_kwh,
        uncertainty_pct=solar_params.uncertainty_pct,
    )

    logger.debug(
        "Manual estimate: kwp=%.2f kwp_max=%.2f target=%.2f capped=%s",
        sizing.kwp, sizing.kwp_max, sizing.kwp_target, sizing.capped,
    )

    return SolarComputationResult(
        summary=summarise_year(monthly, sizing, resolved),
        monthly=monthly,
        dimensioning_capped=sizing.capped,
        source=DataSource.MANUAL,
        yield_basis=YieldBasis.TRANSPOSITION,
    )
