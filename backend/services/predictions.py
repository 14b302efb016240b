"""Prediction aggregation and the tier-gated single-match flow."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

from config import Settings
from errors import SubscriptionRequiredError, UnauthorizedError, UpstreamUnavailableError
from services.auth import verify_credential
from services.predictor import PredictorClient

logger = logging.getLogger(__name__)

# Served when every configured match fails upstream.
FALLBACK_MATCHES = [
    {"id": 1, "match": "Demo: Switzerland vs Sweden", "pick": "Switzerland to win", "confidence": 0.52},
    {"id": 2, "match": "Demo: Georgia vs Spain", "pick": "Over 2.5", "confidence": 0.65},
]


def fallback_predictions() -> list[dict]:
    now = datetime.now(timezone.utc).isoformat()
    return [{**match, "date": now, "source": "fallback"} for match in FALLBACK_MATCHES]


def parse_detail_flag(raw: str | None) -> bool:
    """Only a case-insensitive "true" requests the detailed view."""
    return (raw or "false").strip().lower() == "true"


async def aggregate(client: PredictorClient, match_ids: list[str]) -> list[Any]:
    """Fetch summaries for all matches concurrently, dropping failures.

    Results keep the order of match_ids. If nothing succeeds the fixed
    fallback set is returned instead of an empty list.
    """
    results = await asyncio.gather(
        *[client.fetch_match(match_id, detail=False, attach_privileged_header=False) for match_id in match_ids]
    )
    cleaned = [r for r in results if r is not None]
    if not cleaned:
        logger.warning("All %d predictor fetches failed; serving fallback predictions", len(match_ids))
        return fallback_predictions()
    return cleaned


async def get_prediction(
    client: PredictorClient,
    match_id: str,
    detail: bool,
    authorization: str | None,
    settings: Settings,
) -> Any:
    """Resolve one match, gating the detailed view on a subscribed credential.

    Raises:
        UnauthorizedError: detail requested without a valid credential.
        SubscriptionRequiredError: valid credential, but not subscribed.
        UpstreamUnavailableError: the predictor could not be reached.
    """
    attach_privileged_header = False
    if detail:
        claims = verify_credential(authorization, settings.jwt_secret, settings.jwt_algorithm)
        if claims is None:
            raise UnauthorizedError()
        if not claims.subscribed:
            raise SubscriptionRequiredError()
        attach_privileged_header = True

    payload = await client.fetch_match(match_id, detail, attach_privileged_header)
    if payload is None:
        error = UpstreamUnavailableError(match_id)
        logger.warning("Returning 502 for match %s", error.match_id)
        raise error
    return payload
