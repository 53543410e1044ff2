from pydantic import BaseModel


class SolarParamsResponse(BaseModel):
    performance_ratio: float
    albedo: float
    kwp_per_square_meter: float
    panel_wp: float | None
    panel_area_m2: float | None
    default_tariff_brl_kwh: float
    compensation_target_default_pct: float
    uncertainty_pct: float
    default_tilt_deg: float
    default_azimuth_deg: float
    tilt_range_deg: tuple[float, float]
