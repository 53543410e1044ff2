"""Boundary checks and data gathering around the estimate engine.

The engine itself never rejects numerically degenerate input; the checks
that must stop a calculation (no confirmed location, no bill, no roof)
live here, before any provider is called.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from yieldapi.services.insights_service import get_building_insights
from yieldapi.services.weather_service import get_monthly_dataset
from yieldengine.estimate.manual import perform_manual_computation
from yieldengine.estimate.models import SolarComputationResult, SolarSegment
from yieldengine.estimate.segment import perform_segment_computation
from yieldengine.geometry.angles import Angles
from yieldengine.geometry.roof import LatLng, RoofSelection, build_roof_selection
from yieldengine.insights.building_insights import select_default_segment
from yieldengine.params import SolarParams
from yieldengine.sizing.billing import BillInput

logger = logging.getLogger(__name__)


class EstimateInputError(ValueError):
    """The request cannot be estimated as given."""


@dataclass(frozen=True)
class EstimateOutcome:
    result: SolarComputationResult
    dataset_source: str
    roof: RoofSelection | None = None
    segment: SolarSegment | None = None


def _require_location(location: LatLng | None) -> LatLng:
    if location is None:
        raise EstimateInputError("Confirm a valid address before estimating")
    return location


def _require_spend(bill: BillInput) -> None:
    if bill.monthly_spend_brl is None or not bill.monthly_spend_brl > 0:
        raise EstimateInputError("A positive monthly bill amount (BRL) is required")


async def run_manual_estimate(
    location: LatLng | None,
    polygon: Sequence[LatLng],
    bill: BillInput,
    params: SolarParams,
    angles: Angles | None = None,
) -> EstimateOutcome:
    _require_location(location)
    _require_spend(bill)

    roof = build_roof_selection(polygon)
    if not roof.has_polygon:
        raise EstimateInputError("Draw a roof polygon with at least 3 points")

    if angles is None:
        angles = Angles(beta_deg=params.default_tilt_deg, gamma_deg=params.default_azimuth_deg)

    centroid = roof.centroid
    dataset, dataset_source = await get_monthly_dataset(centroid.lat, centroid.lng)

    result = perform_manual_computation(
        roof=roof,
        angles=angles,
        bill=bill,
        solar_params=params,
        dataset=dataset,
        latitude=centroid.lat,
    )
    logger.info(
        "Manual estimate: area=%.1f m2 kwp=%.2f capped=%s dataset=%s",
        roof.area_m2, result.summary.kwp, result.dimensioning_capped, dataset_source,
    )
    return EstimateOutcome(result=result, dataset_source=dataset_source, roof=roof)


async def run_segment_estimate(
    location: LatLng | None,
    bill: BillInput,
    params: SolarParams,
    segment: SolarSegment | None = None,
    segment_id: str | None = None,
) -> EstimateOutcome:
    """Estimate for a building-insights facet.

    The facet is either passed in directly or looked up (by id, else the
    largest facet) from the Solar API for ``location``.
    """
    location = _require_location(location)
    _require_spend(bill)

    lat, lon = location.lat, location.lng
    if segment is None:
        insights = await get_building_insights(location.lat, location.lng)
        if segment_id is not None:
            segment = insights.find_segment(segment_id)
        else:
            segment = select_default_segment(insights.segments)
        if segment is None:
            raise EstimateInputError("Select a valid roof segment or use manual mode")
        lat = insights.lat or location.lat
        lon = insights.lng or location.lng

    dataset, dataset_source = await get_monthly_dataset(lat, lon)

    result = perform_segment_computation(
        segment=segment,
        bill=bill,
        solar_params=params,
        dataset=dataset,
        latitude=lat,
    )
    logger.info(
        "Segment estimate %s: basis=%s kwp=%.2f capped=%s dataset=%s",
        segment.segment_id, result.yield_basis.value, result.summary.kwp,
        result.dimensioning_capped, dataset_source,
    )
    return EstimateOutcome(result=result, dataset_source=dataset_source, segment=segment)
