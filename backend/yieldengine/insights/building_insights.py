"""Google Solar API building-insights client.

Looks up the building closest to a point and normalises its roof-segment
summaries into :class:`SolarSegment` records (azimuth as a compass bearing,
optional energy and area fields).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

import httpx

from yieldengine.estimate.models import SolarSegment

SOLAR_API_URL = "https://solar.googleapis.com/v1/buildingInsights:findClosest"

# Roof angles assumed when the service omits them
DEFAULT_PITCH_DEG = 18.0
DEFAULT_AZIMUTH_DEG = 0.0

COVERAGE_QUALITIES = ("HIGH", "MEDIUM", "BASE", "LOW", "NONE", "UNKNOWN")


class SolarApiError(Exception):
    """Non-success reply from the Solar API."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


def is_solar_api_not_found(exc: BaseException) -> bool:
    """True when the service has no building coverage for the location."""
    return isinstance(exc, SolarApiError) and exc.status == 404


@dataclass(frozen=True)
class BuildingInsights:
    lat: float
    lng: float
    coverage_quality: str = "UNKNOWN"
    segments: list[SolarSegment] = field(default_factory=list)

    def find_segment(self, segment_id: str) -> SolarSegment | None:
        for segment in self.segments:
            if segment.segment_id == segment_id:
                return segment
        return None


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _parse_segment(raw: dict[str, Any], index: int) -> SolarSegment:
    stats = raw.get("stats") or {}
    monthly = stats.get("monthlyEnergyDcKwh")
    segment_id = raw.get("segmentId")

    return SolarSegment(
        segment_id=str(segment_id) if segment_id else f"segment-{index + 1}",
        pitch_degrees=float(raw.get("pitchDegrees", DEFAULT_PITCH_DEG)),
        azimuth_degrees=float(raw.get("azimuthDegrees", DEFAULT_AZIMUTH_DEG)),
        ground_area_m2=_optional_float(raw.get("groundAreaMeters2")),
        max_array_area_m2=_optional_float(raw.get("maxArrayAreaMeters2")),
        monthly_energy_kwh=tuple(float(v) for v in monthly) if monthly else None,
        annual_energy_kwh=_optional_float(stats.get("yearlyEnergyDcKwh")),
        recommended_system_kw=_optional_float(stats.get("dcCapacityKw")),
    )


def parse_building_insights(payload: dict[str, Any]) -> BuildingInsights:
    """Normalise a ``buildingInsights`` payload."""
    center = payload.get("center") or {}
    potential = payload.get("solarPotential") or {}
    summaries = potential.get("roofSegmentSummaries") or []

    quality = payload.get("imageryQuality")
    if quality not in COVERAGE_QUALITIES:
        quality = "UNKNOWN"

    return BuildingInsights(
        lat=float(center.get("latitude", 0.0)),
        lng=float(center.get("longitude", 0.0)),
        coverage_quality=quality,
        segments=[_parse_segment(raw, i) for i, raw in enumerate(summaries)],
    )


def select_default_segment(segments: Sequence[SolarSegment]) -> SolarSegment | None:
    """The facet offering the most array area; first one wins ties."""
    best: SolarSegment | None = None
    best_area = -1.0
    for segment in segments:
        area = segment.max_array_area_m2 or segment.ground_area_m2 or 0.0
        if area > best_area:
            best, best_area = segment, area
    return best


async def fetch_building_insights(
    lat: float,
    lon: float,
    api_key: str,
    *,
    client: httpx.AsyncClient | None = None,
    base_url: str = SOLAR_API_URL,
    timeout: float = 20.0,
) -> BuildingInsights:
    """Fetch roof segments for the building closest to a point.

    Raises
    ------
    SolarApiError
        On any non-2xx reply; status 404 means no coverage.
    """
    params = {
        "location.latitude": str(lat),
        "location.longitude": str(lon),
        "requiredQuality": "BASE",
        "key": api_key,
    }

    if client is None:
        async with httpx.AsyncClient(timeout=timeout) as own_client:
            response = await own_client.get(base_url, params=params)
    else:
        response = await client.get(base_url, params=params)

    if response.is_error:
        raise SolarApiError(
            response.status_code,
            response.text or f"Solar API responded {response.status_code}",
        )

    return parse_building_insights(response.json())
