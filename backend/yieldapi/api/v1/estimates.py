import dataclasses
import math

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request, status

from yieldapi.core.deps import get_solar_params
from yieldapi.core.logging import annotate_estimate
from yieldapi.core.rate_limit import estimate_limiter
from yieldapi.schemas.estimate import (
    BillIn,
    EstimateResponse,
    LatLngIn,
    ManualEstimateRequest,
    MonthResultResponse,
    RoofResponse,
    SegmentEstimateRequest,
    SegmentIn,
    YearSummaryResponse,
)
from yieldapi.services.estimate_service import (
    EstimateInputError,
    EstimateOutcome,
    run_manual_estimate,
    run_segment_estimate,
)
from yieldapi.services.insights_service import SolarApiKeyMissing
from yieldengine.estimate.models import SolarSegment
from yieldengine.geometry.angles import Angles
from yieldengine.geometry.roof import LatLng
from yieldengine.insights.building_insights import SolarApiError
from yieldengine.params import SolarParams
from yieldengine.sizing.billing import BillInput

router = APIRouter()


def _latlng(point: LatLngIn | None) -> LatLng | None:
    return LatLng(lat=point.lat, lng=point.lng) if point is not None else None


def _bill(body: BillIn) -> BillInput:
    return BillInput(
        monthly_spend_brl=body.monthly_spend_brl,
        tariff_brl_kwh=body.tariff_brl_kwh,
        monthly_consumption_kwh=body.monthly_consumption_kwh,
        compensation_target_pct=body.compensation_target_pct,
    )


def _segment(body: SegmentIn | None) -> SolarSegment | None:
    if body is None:
        return None
    data = body.model_dump()
    if data["monthly_energy_kwh"] is not None:
        data["monthly_energy_kwh"] = tuple(data["monthly_energy_kwh"])
    return SolarSegment(**data)


def _to_response(request: Request, outcome: EstimateOutcome) -> EstimateResponse:
    result = outcome.result
    annotate_estimate(
        request,
        dataset_source=outcome.dataset_source,
        segment_id=outcome.segment.segment_id if outcome.segment else None,
        yield_basis=result.yield_basis.value,
        kwp=result.summary.kwp,
        capped=result.dimensioning_capped,
    )
    summary = dataclasses.asdict(result.summary)
    if math.isinf(summary["kwp_max"]):
        summary["kwp_max"] = None

    roof = None
    if outcome.roof is not None:
        roof = RoofResponse(
            area_m2=outcome.roof.area_m2,
            usable_area_m2=outcome.roof.usable_area_m2,
            centroid=LatLngIn(lat=outcome.roof.centroid.lat, lng=outcome.roof.centroid.lng),
        )

    return EstimateResponse(
        summary=YearSummaryResponse(**summary),
        monthly=[MonthResultResponse(**dataclasses.asdict(m)) for m in result.monthly],
        dimensioning_capped=result.dimensioning_capped,
        source=result.source.value,
        yield_basis=result.yield_basis.value,
        dataset_source=outcome.dataset_source,
        segment_id=outcome.segment.segment_id if outcome.segment else None,
        roof=roof,
    )


@router.post(
    "/manual",
    response_model=EstimateResponse,
    summary="Estimate a manually drawn roof",
    description="Size a PV system for a drawn roof polygon and chosen tilt/azimuth "
    "using NASA POWER irradiation climatology.",
)
async def estimate_manual(
    body: ManualEstimateRequest,
    request: Request,
    params: SolarParams = Depends(get_solar_params),
):
    estimate_limiter.check(request)
    angles = None
    if body.angles is not None:
        angles = Angles(beta_deg=body.angles.beta_deg, gamma_deg=body.angles.gamma_deg)

    try:
        outcome = await run_manual_estimate(
            location=_latlng(body.location),
            polygon=[LatLng(lat=p.lat, lng=p.lng) for p in body.polygon],
            bill=_bill(body.bill),
            params=params,
            angles=angles,
        )
    except EstimateInputError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))

    return _to_response(request, outcome)


@router.post(
    "/segment",
    response_model=EstimateResponse,
    summary="Estimate a Solar API roof segment",
    description="Size a PV system for a building-insights roof facet, preferring the "
    "service's own energy estimate and falling back to irradiation climatology.",
)
async def estimate_segment(
    body: SegmentEstimateRequest,
    request: Request,
    params: SolarParams = Depends(get_solar_params),
):
    estimate_limiter.check(request)
    try:
        outcome = await run_segment_estimate(
            location=_latlng(body.location),
            bill=_bill(body.bill),
            params=params,
            segment=_segment(body.segment),
            segment_id=body.segment_id,
        )
    except EstimateInputError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    except SolarApiKeyMissing as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    except SolarApiError as exc:
        if exc.status == 404:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No Solar API roof data for this location; use manual mode",
            )
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)
    except httpx.HTTPError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Solar API unreachable: {exc}")

    return _to_response(request, outcome)
