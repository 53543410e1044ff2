"""
Estimate orchestration.

Manual mode (drawn roof polygon) and segment mode (building-insights facet)
share bill resolution, dimensioning and month-result propagation; they
differ only in where area and the specific-yield curve come from.
"""

from .models import (
    DataSource,
    MonthResult,
    SolarComputationResult,
    SolarSegment,
    YearSummary,
    YieldBasis,
)
from .manual import perform_manual_computation
from .segment import (
    perform_segment_computation,
    segment_capacity_ceiling,
    segment_energy_curve,
    segment_usable_area,
)

__all__ = [
    # models
    "DataSource",
    "YieldBasis",
    "SolarSegment",
    "MonthResult",
    "YearSummary",
    "SolarComputationResult",
    # manual
    "perform_manual_computation",
    # segment
    "perform_segment_computation",
    "segment_capacity_ceiling",
    "segment_energy_curve",
    "segment_usable_area",
]
