import dataclasses

from fastapi import APIRouter, Depends

from yieldapi.core.deps import get_solar_params
from yieldapi.schemas.config import SolarParamsResponse
from yieldengine.params import SolarParams

router = APIRouter()


@router.get(
    "/solar",
    response_model=SolarParamsResponse,
    summary="Effective engine parameters",
)
async def solar_params(params: SolarParams = Depends(get_solar_params)):
    return SolarParamsResponse(**dataclasses.asdict(params))
