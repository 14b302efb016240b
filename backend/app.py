"""FastAPI application entry point for the predictor proxy."""

import logging
import sys

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, settings
from errors import register_error_handlers
from services.cache import TTLCache
from services.predictor import PredictorClient

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    app_settings = app_settings or settings
    app = FastAPI(title="Predictor Proxy API", version="1.0.0")
    app.state.settings = app_settings

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if app_settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.predictions import router as predictions_router

    app.include_router(health_router)
    app.include_router(predictions_router)

    # One cache and one pooled upstream client per app, released on shutdown
    app.state.predictor = PredictorClient(
        base_url=app_settings.predictor_url,
        cache=TTLCache(),
        api_key=app_settings.predictor_api_key,
        timeout_seconds=app_settings.predictor_timeout_seconds,
        cache_ttl_seconds=app_settings.predictor_cache_ttl_seconds,
        transport=transport,
    )

    @app.on_event("startup")
    async def _validate_config() -> None:
        missing = app_settings.validate()
        if missing:
            logger.warning("Missing env vars (using development defaults): %s", ", ".join(missing))
        logger.info(
            "Predictor proxy ready: %s (%d configured matches)",
            app_settings.predictor_url,
            len(app_settings.predictor_match_ids),
        )

    @app.on_event("shutdown")
    async def _stop_predictor() -> None:
        await app.state.predictor.aclose()

    return app


app = create_app()
