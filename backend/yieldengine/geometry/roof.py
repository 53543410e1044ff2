"""
Roof polygon sizing.

Builds the immutable :class:`RoofSelection` used by manual-mode estimates
from a user-drawn geographic polygon.  The usable-area policy lives here and
is shared with the segment-mode ground-area fallback.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

# WGS-84 equatorial radius, same sphere the map widgets measure on
EARTH_RADIUS_M: float = 6_378_137.0


# Share of a roof's measured area that can actually carry modules
# (setbacks, walkways, obstructions).
USABLE_AREA_FRACTION: float = 0.7


def usable_area(area_m2: float) -> float:
    """Usable module area for a roof of ``area_m2`` square metres."""
    return area_m2 * USABLE_AREA_FRACTION


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float


@dataclass(frozen=True)
class RoofSelection:
    """A roof outline and its derived areas.

    Rebuilt wholesale (via :func:`build_roof_selection`) whenever the outline
    changes; never mutated.
    """

    polygon: tuple[LatLng, ...]
    area_m2: float
    usable_area_m2: float
    centroid: LatLng
    has_polygon: bool


def spherical_polygon_area(points: Sequence[LatLng]) -> float:
    """Area in m^2 enclosed by a lat/lng ring on a spherical Earth.

    The ring is closed implicitly.  Returns 0 for fewer than 3 points.
    """
    if len(points) < 3:
        return 0.0

    lat = np.radians([p.lat for p in points])
    lng = np.radians([p.lng for p in points])
    lat_next = np.roll(lat, -1)
    lng_next = np.roll(lng, -1)

    # Wrap longitude steps across the antimeridian
    d_lng = (lng_next - lng + np.pi) % (2.0 * np.pi) - np.pi

    total = np.sum(d_lng * (2.0 + np.sin(lat) + np.sin(lat_next)))
    return float(abs(total) * EARTH_RADIUS_M ** 2 / 2.0)


def polygon_centroid(points: Sequence[LatLng]) -> LatLng:
    """Vertex mean of the outline; (0, 0) for an empty path."""
    if not points:
        return LatLng(0.0, 0.0)
    return LatLng(
        lat=sum(p.lat for p in points) / len(points),
        lng=sum(p.lng for p in points) / len(points),
    )


def build_roof_selection(points: Iterable[LatLng]) -> RoofSelection:
    path = tuple(points)
    area = spherical_polygon_area(path)
    return RoofSelection(
        polygon=path,
        area_m2=area,
        usable_area_m2=usable_area(area),
        centroid=polygon_centroid(path),
        has_polygon=len(path) >= 3,
    )
