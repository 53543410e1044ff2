"""
Engine tuning constants.

:class:`SolarParams` is supplied by the caller and treated as read-only for
the duration of a computation.  Defaults describe a typical Brazilian
residential rooftop with 550 Wp crystalline-silicon modules.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SolarParams:
    """Configuration for transposition, dimensioning and savings.

    Parameters
    ----------
    performance_ratio : float
        System derating from plane-of-array irradiation to AC energy (0 -- 1).
    albedo : float
        Ground reflectance used for the reflected component (0 -- 1).
    kwp_per_square_meter : float
        Area-based capacity density (kWp per usable m^2).
    panel_wp, panel_area_m2 : float or None
        Discrete module nameplate (W) and footprint (m^2).  When both are
        positive the capacity ceiling also honours whole-panel counts.
    default_tariff_brl_kwh : float
        Tariff used when the bill does not allow deriving one (BRL/kWh).
    compensation_target_default_pct : float
        Share of consumption to offset when the bill leaves it unset.
    uncertainty_pct : float
        Symmetric relative band applied to monthly energy (0.12 = +/-12 %).
    default_tilt_deg, default_azimuth_deg : float
        Orientation proposed when the user has not chosen one.
    tilt_range_deg : tuple of float
        Tilt interval offered to the user for manual roofs.
    """

    performance_ratio: float = 0.8
    albedo: float = 0.2
    kwp_per_square_meter: float = 0.2
    panel_wp: float | None = 550.0
    panel_area_m2: float | None = 2.0
    default_tariff_brl_kwh: float = 1.0
    compensation_target_default_pct: float = 90.0
    uncertainty_pct: float = 0.12
    default_tilt_deg: float = 18.0
    default_azimuth_deg: float = 0.0
    tilt_range_deg: tuple[float, float] = (14.0, 22.0)

    def __post_init__(self) -> None:
        if not 0.0 <= self.performance_ratio <= 1.0:
            raise ValueError(
                f"performance_ratio must be within [0, 1], got {self.performance_ratio}"
            )
        if not 0.0 <= self.albedo <= 1.0:
            raise ValueError(f"albedo must be within [0, 1], got {self.albedo}")
        if self.kwp_per_square_meter < 0:
            raise ValueError(
                f"kwp_per_square_meter must be >= 0, got {self.kwp_per_square_meter}"
            )
        if self.uncertainty_pct < 0:
            raise ValueError(f"uncertainty_pct must be >= 0, got {self.uncertainty_pct}")
        if self.default_tariff_brl_kwh < 0:
            raise ValueError(
                f"default_tariff_brl_kwh must be >= 0, got {self.default_tariff_brl_kwh}"
            )
        low, high = self.tilt_range_deg
        if low > high:
            raise ValueError(f"tilt_range_deg must be (min, max), got {self.tilt_range_deg}")

    @property
    def has_panel_sizing(self) -> bool:
        return bool(
            self.panel_wp and self.panel_wp > 0
            and self.panel_area_m2 and self.panel_area_m2 > 0
        )


DEFAULT_SOLAR_PARAMS = SolarParams()
