import httpx
from fastapi import APIRouter, HTTPException, Query, Request, status

from yieldapi.core.rate_limit import provider_limiter
from yieldapi.schemas.insights import BuildingInsightsResponse, SegmentResponse
from yieldapi.services.insights_service import SolarApiKeyMissing, get_building_insights
from yieldengine.insights.building_insights import (
    SolarApiError,
    is_solar_api_not_found,
    select_default_segment,
)

router = APIRouter()


@router.get(
    "",
    response_model=BuildingInsightsResponse,
    summary="Roof segments of the closest building",
    description="Look up roof facets (pitch, azimuth, area, energy estimate) from the "
    "Google Solar API and flag the facet with the most array area.",
)
async def building_insights(
    request: Request,
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180),
):
    provider_limiter.check(request)
    try:
        insights = await get_building_insights(lat, lon)
    except SolarApiKeyMissing as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    except SolarApiError as exc:
        if is_solar_api_not_found(exc):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No Solar API roof data for this location; use manual mode",
            )
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)
    except httpx.HTTPError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Solar API unreachable: {exc}")

    default = select_default_segment(insights.segments)
    return BuildingInsightsResponse(
        lat=insights.lat,
        lng=insights.lng,
        coverage_quality=insights.coverage_quality,
        segments=[
            SegmentResponse(
                segment_id=s.segment_id,
                pitch_degrees=s.pitch_degrees,
                azimuth_degrees=s.azimuth_degrees,
                ground_area_m2=s.ground_area_m2,
                max_array_area_m2=s.max_array_area_m2,
                monthly_energy_kwh=list(s.monthly_energy_kwh) if s.monthly_energy_kwh else None,
                annual_energy_kwh=s.annual_energy_kwh,
                recommended_system_kw=s.recommended_system_kw,
            )
            for s in insights.segments
        ],
        default_segment_id=default.segment_id if default else None,
    )
