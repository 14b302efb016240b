"""FastAPI dependencies resolving per-app singletons."""

from fastapi import Request

from config import Settings
from services.predictor import PredictorClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_predictor_client(request: Request) -> PredictorClient:
    """Return the predictor client created at startup for this app."""
    return request.app.state.predictor
