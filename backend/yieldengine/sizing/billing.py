"""
Electricity bill interpretation.

Turns whatever the customer knows about their bill (spend, tariff and/or
consumption) into the tariff and monthly consumption the sizing step uses.
Each quantity is resolved through an explicit, ordered list of sources; the
first source that yields a usable value wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from yieldengine.params import SolarParams


@dataclass(frozen=True)
class BillInput:
    """What the customer reported about their electricity bill.

    Parameters
    ----------
    monthly_spend_brl : float or None
        Average monthly bill (BRL).
    tariff_brl_kwh : float or None
        Energy tariff (BRL/kWh), if known.
    monthly_consumption_kwh : float or None
        Average monthly consumption (kWh), if known.
    compensation_target_pct : float
        Share of consumption to offset, 50 -- 100.  Zero means "use the
        configured default".
    """

    monthly_spend_brl: float | None = None
    tariff_brl_kwh: float | None = None
    monthly_consumption_kwh: float | None = None
    compensation_target_pct: float = 0.0


@dataclass(frozen=True)
class BillResolution:
    tariff_brl_kwh: float
    consumption_kwh: float
    compensation_target_pct: float
    consumption_target_kwh: float


def _positive(value: float | None) -> float | None:
    return value if value is not None and value > 0 else None


def _first_resolved(sources: list[Callable[[], float | None]]) -> float | None:
    for source in sources:
        value = source()
        if value is not None:
            return value
    return None


def resolve_tariff(bill: BillInput, params: SolarParams) -> float:
    """Tariff in BRL/kWh.

    Priority: explicit tariff > spend / consumption > configured default.
    """

    def from_spend_and_consumption() -> float | None:
        spend = _positive(bill.monthly_spend_brl)
        consumption = _positive(bill.monthly_consumption_kwh)
        if spend is None or consumption is None:
            return None
        return spend / consumption

    resolved = _first_resolved([
        lambda: _positive(bill.tariff_brl_kwh),
        from_spend_and_consumption,
    ])
    return params.default_tariff_brl_kwh if resolved is None else resolved


def resolve_consumption(bill: BillInput, tariff: float) -> float:
    """Monthly consumption in kWh.

    Priority: explicit consumption > spend / tariff > zero.
    """

    def from_spend() -> float | None:
        spend = _positive(bill.monthly_spend_brl)
        if spend is None or tariff <= 0:
            return None
        return spend / tariff

    resolved = _first_resolved([
        lambda: _positive(bill.monthly_consumption_kwh),
        from_spend,
    ])
    return 0.0 if resolved is None else resolved


def resolve_compensation_target(bill: BillInput, params: SolarParams) -> float:
    """Compensation percentage; unset (0) falls back to the configured default."""
    return bill.compensation_target_pct or params.compensation_target_default_pct


def resolve_bill(bill: BillInput, params: SolarParams) -> BillResolution:
    """Resolve tariff, consumption and the consumption target in one pass."""
    tariff = resolve_tariff(bill, params)
    consumption = resolve_consumption(bill, tariff)
    target_pct = resolve_compensation_target(bill, params)
    return BillResolution(
        tariff_brl_kwh=tariff,
        consumption_kwh=consumption,
        compensation_target_pct=target_pct,
        consumption_target_kwh=consumption * (target_pct / 100.0),
    )
