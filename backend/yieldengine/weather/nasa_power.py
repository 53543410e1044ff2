"""NASA POWER monthly climatology client.

Fetches long-term monthly means of daily global, direct-normal and diffuse
irradiation (kWh/m^2/day) for a point and shapes them into the twelve
:class:`MonthlyIrradianceSample` records the transposition model consumes.

Also bundles a representative south-east Brazil climatology used when the
service cannot be reached.
"""

from __future__ import annotations

from typing import Any

import httpx

from yieldengine.solar.transposition import MonthlyIrradianceSample

NASA_POWER_URL = "https://power.larc.nasa.gov/api/temporal/climatology/point"

PARAMETERS = "ALLSKY_SFC_SW_DWN,ALLSKY_SFC_SW_DNI,ALLSKY_SFC_SW_DIFF"

MONTH_KEYS = ["JAN", "FEB", "MAR", "APR", "MAY", "JUN",
              "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"]
MONTH_LABELS = ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun",
                "Jul", "Ago", "Set", "Out", "Nov", "Dez"]

# NASA POWER marks missing data with -999
_FILL_VALUE = -999.0

# (ghi, dni, dhi) kWh/m^2/day, Sao Paulo metropolitan area
_MOCK_CLIMATOLOGY: list[tuple[float, float, float]] = [
    (5.52, 3.41, 2.48),
    (5.61, 3.63, 2.39),
    (5.02, 3.47, 2.12),
    (4.43, 3.58, 1.71),
    (3.79, 3.52, 1.38),
    (3.58, 3.71, 1.21),
    (3.71, 3.85, 1.22),
    (4.52, 4.31, 1.43),
    (4.71, 3.69, 1.86),
    (5.10, 3.42, 2.24),
    (5.49, 3.53, 2.41),
    (5.63, 3.38, 2.55),
]


class NasaPowerError(ValueError):
    """Raised when a NASA POWER payload cannot be interpreted."""


def _monthly_values(raw: dict[str, Any]) -> list[float]:
    values = []
    for key in MONTH_KEYS:
        try:
            value = float(raw.get(key, 0.0))
        except (TypeError, ValueError):
            value = 0.0
        # Fill values and any other negative reading count as no irradiance
        values.append(0.0 if value == _FILL_VALUE or value < 0 else value)
    return values


def parse_nasa_power_response(payload: dict[str, Any]) -> list[MonthlyIrradianceSample]:
    """Shape a NASA POWER climatology payload into 12 monthly samples.

    Missing parameters or months, and fill values, become 0.0.

    Raises
    ------
    NasaPowerError
        If the payload has no ``properties.parameter`` block.
    """
    parameters = (payload.get("properties") or {}).get("parameter")
    if not parameters:
        raise NasaPowerError("NASA POWER response has no parameter block")

    ghi = _monthly_values(parameters.get("ALLSKY_SFC_SW_DWN") or {})
    dni = _monthly_values(parameters.get("ALLSKY_SFC_SW_DNI") or {})
    dhi = _monthly_values(parameters.get("ALLSKY_SFC_SW_DIFF") or {})

    return [
        MonthlyIrradianceSample(month=MONTH_LABELS[m], ghi=ghi[m], dhi=dhi[m], dni=dni[m])
        for m in range(12)
    ]


async def fetch_nasa_power_monthly(
    lat: float,
    lon: float,
    *,
    client: httpx.AsyncClient | None = None,
    base_url: str = NASA_POWER_URL,
    timeout: float = 30.0,
) -> list[MonthlyIrradianceSample]:
    """Fetch the monthly irradiation climatology for a point.

    Args:
        lat: Latitude (-90 to 90)
        lon: Longitude (-180 to 180)
        client: Optional shared client (tests inject a mock transport)
        base_url: Climatology endpoint
        timeout: Request timeout in seconds when no client is given

    Returns:
        12 samples, January first, in kWh/m^2/day
    """
    # Climatology endpoint does not accept start/end params
    params = {
        "parameters": PARAMETERS,
        "community": "RE",
        "longitude": f"{lon:.4f}",
        "latitude": f"{lat:.4f}",
        "format": "JSON",
    }

    if client is None:
        async with httpx.AsyncClient(timeout=timeout) as own_client:
            response = await own_client.get(base_url, params=params)
    else:
        response = await client.get(base_url, params=params)
    response.raise_for_status()

    return parse_nasa_power_response(response.json())


def mock_climatology() -> list[MonthlyIrradianceSample]:
    """Bundled fallback climatology, January first."""
    return [
        MonthlyIrradianceSample(month=label, ghi=ghi, dhi=dhi, dni=dni)
        for label, (ghi, dni, dhi) in zip(MONTH_LABELS, _MOCK_CLIMATOLOGY)
    ]
