"""Health and readiness check routes."""

import logging

from fastapi import APIRouter, Depends

from config import Settings
from dependencies import get_predictor_client, get_settings
from services.predictor import PredictorClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/ready")
async def ready(settings: Settings = Depends(get_settings)) -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": "predictor-proxy", "commit": settings.git_sha}


@router.get("/health")
async def health(
    client: PredictorClient = Depends(get_predictor_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Deep health check that verifies predictor connectivity."""
    connected = await client.ping()
    return {
        "status": "ok" if connected else "degraded",
        "service": "predictor-proxy",
        "commit": settings.git_sha,
        "predictor": "connected" if connected else "unreachable",
        "cached_entries": len(client.cache),
    }
