"""
Propagation of a sized system into monthly energy, savings and bands.

Shared by the manual and segment computations so that both modes derive
energy, savings and uncertainty identically.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike

from yieldengine.sizing.billing import BillResolution
from yieldengine.sizing.dimensioning import Dimensioning

from .models import MonthResult, YearSummary


def month_labels(labels: Sequence[str] | None, count: int) -> list[str]:
    """Month labels from the dataset, or ``M1`` .. ``M12`` without one."""
    if labels is None:
        return [f"M{i + 1}" for i in range(count)]
    return [labels[i] if i < len(labels) else f"M{i + 1}" for i in range(count)]


def build_month_results(
    labels: Sequence[str],
    specific_yield: ArrayLike,
    hpoa: ArrayLike,
    ghi: ArrayLike,
    dhi: ArrayLike,
    dni: ArrayLike,
    kwp: float,
    tariff: float,
    uncertainty_pct: float,
) -> list[MonthResult]:
    """Energy = yield x kWp; savings = energy x tariff; band = energy -/+ pct."""
    yields = np.asarray(specific_yield, dtype=np.float64)
    energy = yields * kwp
    savings = energy * tariff
    delta = energy * uncertainty_pct
    low = np.maximum(energy - delta, 0.0)
    high = energy + delta

    hpoa = np.asarray(hpoa, dtype=np.float64)
    ghi = np.asarray(ghi, dtype=np.float64)
    dhi = np.asarray(dhi, dtype=np.float64)
    dni = np.asarray(dni, dtype=np.float64)

    return [
        MonthResult(
            month=labels[i],
            ghi=float(ghi[i]),
            dhi=float(dhi[i]),
            dni=float(dni[i]),
            hpoa=float(hpoa[i]),
            specific_yield=float(yields[i]),
            energy_kwh=float(energy[i]),
            savings_brl=float(savings[i]),
            uncertainty_low=float(low[i]),
            uncertainty_high=float(high[i]),
        )
        for i in range(yields.size)
    ]


def summarise_year(
    monthly: Sequence[MonthResult],
    sizing: Dimensioning,
    bill: BillResolution,
) -> YearSummary:
    annual_generation = sum(m.energy_kwh for m in monthly)
    annual_savings = sum(m.savings_brl for m in monthly)
    n = len(monthly)
    return YearSummary(
        kwp=sizing.kwp,
        kwp_max=sizing.kwp_max,
        annual_generation_kwh=annual_generation,
        avg_monthly_generation_kwh=annual_generation / n if n > 0 else 0.0,
        monthly_savings_brl=annual_savings / n if n > 0 else 0.0,
        annual_savings_brl=annual_savings,
        tariff_applied=bill.tariff_brl_kwh,
        compensation_target_pct=bill.compensation_target_pct,
    )
