from yieldapi.config import settings
from yieldengine.params import SolarParams


def get_solar_params() -> SolarParams:
    return settings.solar_params()
