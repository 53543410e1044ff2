"""Value objects exchanged with the estimate engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DataSource(str, Enum):
    """Where the roof description came from."""

    MANUAL = "MANUAL"
    SOLAR_API = "SOLAR_API"


class YieldBasis(str, Enum):
    """What the monthly specific-yield curve was derived from."""

    SEGMENT_ENERGY = "SEGMENT_ENERGY"   # service's own energy estimate
    TRANSPOSITION = "TRANSPOSITION"     # irradiance climatology
    NONE = "NONE"                       # no data; zero yield


@dataclass(frozen=True)
class SolarSegment:
    """A roof facet reported by the building-insights service.

    Azimuth is a compass bearing (from North, clockwise).  Every energy and
    area field is optional.
    """

    segment_id: str
    pitch_degrees: float
    azimuth_degrees: float
    ground_area_m2: float | None = None
    max_array_area_m2: float | None = None
    monthly_energy_kwh: tuple[float, ...] | None = None
    annual_energy_kwh: float | None = None
    recommended_system_kw: float | None = None


@dataclass(frozen=True)
class MonthResult:
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


@dataclass(frozen=True)
class YearSummary:
    kwp: float
    kwp_max: float
    annual_generation_kwh: float
    avg_monthly_generation_kwh: float
    monthly_savings_brl: float
    annual_savings_brl: float
    tariff_applied: float
    compensation_target_pct: float


@dataclass(frozen=True)
class SolarComputationResult:
    """Year summary plus one :class:`MonthResult` per month, January first."""

    summary: YearSummary
    monthly: list[MonthResult]
    dimensioning_capped: bool
    source: DataSource
    yield_basis: YieldBasis = YieldBasis.TRANSPOSITION
