from fastapi import APIRouter, Query, Request

from yieldapi.core.logging import annotate_estimate
from yieldapi.core.rate_limit import provider_limiter
from yieldapi.schemas.weather import MonthlyDatasetResponse, MonthlySampleResponse
from yieldapi.services.weather_service import get_monthly_dataset

router = APIRouter()


@router.get(
    "/monthly",
    response_model=MonthlyDatasetResponse,
    summary="Monthly irradiation climatology",
    description="Daily GHI / DNI / DHI (kWh/m2/day) per calendar month from NASA POWER, "
    "or the bundled climatology when the service is unavailable.",
)
async def monthly_climatology(
    request: Request,
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180),
):
    provider_limiter.check(request)
    dataset, source = await get_monthly_dataset(lat, lon)
    annotate_estimate(request, dataset_source=source)
    return MonthlyDatasetResponse(
        lat=lat,
        lon=lon,
        source=source,
        months=[
            MonthlySampleResponse(month=s.month, ghi=s.ghi, dhi=s.dhi, dni=s.dni)
            for s in dataset
        ],
    )
