from pydantic import BaseModel


class SegmentResponse(BaseModel):
    segment_id: str
    pitch_degrees: float
    azimuth_degrees: float
    ground_area_m2: float | None = None
    max_array_area_m2: float | None = None
    monthly_energy_kwh: list[float] | None = None
    annual_energy_kwh: float | None = None
    recommended_system_kw: float | None = None


class BuildingInsightsResponse(BaseModel):
    lat: float
    lng: float
    coverage_quality: str
    segments: list[SegmentResponse]
    default_segment_id: str | None = None
