"""Prediction routes.

GET /api/predictions              → summaries for the configured matches (never errors on upstream failure)
GET /api/prediction/{match_id}    → one match; ?detail=true requires a subscribed credential
"""

from fastapi import APIRouter, Depends, Header, Query

from config import Settings
from dependencies import get_predictor_client, get_settings
from services.predictions import aggregate, get_prediction, parse_detail_flag
from services.predictor import PredictorClient

router = APIRouter(prefix="/api")


@router.get("/predictions")
async def list_predictions(
    client: PredictorClient = Depends(get_predictor_client),
    settings: Settings = Depends(get_settings),
) -> list:
    """Aggregated summaries for every configured match, or the fallback set."""
    return await aggregate(client, settings.predictor_match_ids)


@router.get("/prediction/{match_id}")
async def single_prediction(
    match_id: str,
    detail: str = Query("false"),
    authorization: str | None = Header(None),
    client: PredictorClient = Depends(get_predictor_client),
    settings: Settings = Depends(get_settings),
):
    """Proxy one match to the predictor. The API key is forwarded only for subscribers."""
    return await get_prediction(
        client,
        match_id,
        detail=parse_detail_flag(detail),
        authorization=authorization,
        settings=settings,
    )
