from pydantic import BaseModel, Field, field_validator

# Offsetting less than half the bill is not offered
MIN_COMPENSATION_TARGET_PCT = 50.0


class LatLngIn(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class AnglesIn(BaseModel):
    beta_deg: float = Field(ge=0, le=90, description="Tilt from horizontal")
    gamma_deg: float = Field(description="Azimuth, degrees clockwise from true North")


class BillIn(BaseModel):
    monthly_spend_brl: float | None = None
    tariff_brl_kwh: float | None = Field(default=None, ge=0)
    monthly_consumption_kwh: float | None = Field(default=None, ge=0)
    compensation_target_pct: float = Field(
        default=0, ge=0, le=100, description="50 -- 100; 0 uses the configured default"
    )

    @field_validator("compensation_target_pct")
    @classmethod
    def _target_in_range(cls, value: float) -> float:
        if 0 < value < MIN_COMPENSATION_TARGET_PCT:
            raise ValueError(
                f"compensation_target_pct must be 0 (default) or between "
                f"{MIN_COMPENSATION_TARGET_PCT:g} and 100"
            )
        return value


class SegmentIn(BaseModel):
    segment_id: str
    pitch_degrees: float = Field(ge=0, le=90)
    azimuth_degrees: float
    ground_area_m2: float | None = Field(default=None, ge=0)
    max_array_area_m2: float | None = Field(default=None, ge=0)
    monthly_energy_kwh: list[float] | None = None
    annual_energy_kwh: float | None = Field(default=None, ge=0)
    recommended_system_kw: float | None = Field(default=None, ge=0)


class ManualEstimateRequest(BaseModel):
    location: LatLngIn | None = None
    polygon: list[LatLngIn] = Field(default_factory=list)
    angles: AnglesIn | None = None
    bill: BillIn


class SegmentEstimateRequest(BaseModel):
    location: LatLngIn | None = None
    segment: SegmentIn | None = Field(
        default=None, description="Facet to use; looked up from the Solar API when omitted"
    )
    segment_id: str | None = None
    bill: BillIn


class MonthResultResponse(BaseModel):
    month: str
    ghi: float
    dhi: float
    dni: float
    hpoa: float
    specific_yield: float
    energy_kwh: float
    savings_brl: float
    uncertainty_low: float
    uncertainty_high: float


class YearSummaryResponse(BaseModel):
    kwp: float
    kwp_max: float | None = Field(description="null when the area is unconstrained")
    annual_generation_kwh: float
    avg_monthly_generation_kwh: float
    monthly_savings_brl: float
    annual_savings_brl: float
    tariff_applied: float
    compensation_target_pct: float


class RoofResponse(BaseModel):
    area_m2: float
    usable_area_m2: float
    centroid: LatLngIn


class EstimateResponse(BaseModel):
    summary: YearSummaryResponse
    monthly: list[MonthResultResponse]
    dimensioning_capped: bool
    source: str
    yield_basis: str
    dataset_source: str
    segment_id: str | None = None
    roof: RoofResponse | None = None
