"""
System-size dimensioning under a roof-area constraint.

Pure arithmetic: the chosen kWp is the size that offsets the consumption
target at the site's average specific yield, clamped to what the roof can
physically carry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

from yieldengine.params import SolarParams

# Ceiling used when no area information exists at all
UNCONSTRAINED_KWP: float = math.inf


@dataclass(frozen=True)
class Dimensioning:
    """Outcome of the sizing step.

    ``capped`` is True when the customer's compensation target cannot be met
    on the available area; callers must surface it.
    """

    kwp: float
    kwp_max: float
    kwp_target: float
    average_yield: float
    capped: bool


def area_capacity(usable_area_m2: float, params: SolarParams) -> float:
    """Capacity density limit: usable area x kWp per m^2."""
    return usable_area_m2 * params.kwp_per_square_meter


def panel_capacity(usable_area_m2: float, params: SolarParams) -> float:
    """Whole-panel limit: floor(area / panel area) x panel Wp, in kWp.

    Zero when the parameters carry no discrete panel sizing.
    """
    if not params.has_panel_sizing:
        return 0.0
    num_panels = math.floor(usable_area_m2 / params.panel_area_m2)
    return num_panels * params.panel_wp / 1000.0


def capacity_ceiling(usable_area_m2: float, params: SolarParams) -> float:
    """Largest kWp that fits on ``usable_area_m2``.

    The smaller of the areal-density and whole-panel limits.  A panel limit
    of zero (area smaller than a single module) is ignored and the density
    limit applies alone.
    """
    kwp_max = area_capacity(usable_area_m2, params)
    by_panels = panel_capacity(usable_area_m2, params)
    if by_panels > 0:
        kwp_max = min(kwp_max, by_panels)
    return kwp_max


def average_specific_yield(monthly_yield: ArrayLike) -> float:
    """Mean monthly specific yield (kWh/kWp/month); 0 for an empty series."""
    values = np.asarray(monthly_yield, dtype=np.float64)
    if values.size == 0:
        return 0.0
    return float(values.mean())


def dimension_system(
    consumption_target_kwh: float,
    monthly_yield: ArrayLike,
    kwp_max: float,
) -> Dimensioning:
    """Size the array for a monthly consumption target.

    Parameters
    ----------
    consumption_target_kwh : float
        Monthly energy the system should offset (kWh).
    monthly_yield : array_like
        Specific yield per month (kWh/kWp).
    kwp_max : float
        Capacity ceiling; ``inf`` means unconstrained, 0 means nothing fits.

    Returns
    -------
    Dimensioning
        ``kwp = clamp(target, 0, kwp_max)`` when ``kwp_max > 0``, else 0.
    """
    avg_yield = average_specific_yield(monthly_yield)
    kwp_target = consumption_target_kwh / avg_yield if avg_yield > 0 else 0.0

    if kwp_max > 0:
        kwp = min(max(kwp_target, 0.0), kwp_max)
    else:
        kwp = 0.0

    return Dimensioning(
        kwp=kwp,
        kwp_max=kwp_max,
        kwp_target=kwp_target,
        average_yield=avg_yield,
        capped=kwp_target > kwp_max and kwp_max > 0,
    )
