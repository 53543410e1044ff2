from pydantic import BaseModel


class MonthlySampleResponse(BaseModel):
    month: str
    ghi: float
    dhi: float
    dni: float


class MonthlyDatasetResponse(BaseModel):
    lat: float
    lon: float
    source: str
    months: list[MonthlySampleResponse]
