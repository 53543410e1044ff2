"""Angle conventions and roof polygon sizing."""

from .angles import (
    Angles,
    compass_to_solar_azimuth,
    normalize_azimuth,
    solar_to_compass_azimuth,
    to_radians,
)
from .roof import (
    USABLE_AREA_FRACTION,
    LatLng,
    RoofSelection,
    build_roof_selection,
    polygon_centroid,
    spherical_polygon_area,
    usable_area,
)

__all__ = [
    # angles
    "Angles",
    "to_radians",
    "normalize_azimuth",
    "compass_to_solar_azimuth",
    "solar_to_compass_azimuth",
    # roof
    "USABLE_AREA_FRACTION",
    "LatLng",
    "RoofSelection",
    "usable_area",
    "spherical_polygon_area",
    "polygon_centroid",
    "build_roof_selection",
]
