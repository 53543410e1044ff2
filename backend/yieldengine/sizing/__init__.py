"""Bill interpretation and system-size dimensioning."""

from .billing import (
    BillInput,
    BillResolution,
    resolve_bill,
    resolve_compensation_target,
    resolve_consumption,
    resolve_tariff,
)
from .dimensioning import (
    UNCONSTRAINED_KWP,
    Dimensioning,
    area_capacity,
    average_specific_yield,
    capacity_ceiling,
    dimension_system,
    panel_capacity,
)

__all__ = [
    # billing
    "BillInput",
    "BillResolution",
    "resolve_bill",
    "resolve_tariff",
    "resolve_consumption",
    "resolve_compensation_target",
    # dimensioning
    "UNCONSTRAINED_KWP",
    "Dimensioning",
    "area_capacity",
    "panel_capacity",
    "capacity_ceiling",
    "average_specific_yield",
    "dimension_system",
]
