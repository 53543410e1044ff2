from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from yieldapi.api.v1 import config, estimates, insights, weather
from yieldapi.config import settings
from yieldapi.core.logging import RequestLoggingMiddleware, setup_logging


def create_app() -> FastAPI:
    setup_logging(json_format=settings.log_json, debug=settings.debug)

    application = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )

    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(estimates.router, prefix="/api/v1/estimates", tags=["estimates"])
    application.include_router(weather.router, prefix="/api/v1/weather", tags=["weather"])
    application.include_router(insights.router, prefix="/api/v1/insights", tags=["insights"])
    application.include_router(config.router, prefix="/api/v1/config", tags=["config"])

    @application.get("/health")
    async def health_check() -> dict:
        return {
            "status": "ok",
            "services": {
                "solar_api": "configured" if settings.google_solar_api_key else "not_configured",
            },
        }

    return application


app = create_app()
