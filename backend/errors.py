"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

TEASER_MESSAGE = "Full analysis available for VIPs. Start a trial for R199/month."


class PredictorProxyError(Exception):
    """Base exception with HTTP status code and an optional response body."""

    def __init__(self, message: str, status_code: int = 500, payload: dict | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    def to_body(self) -> dict:
        if self.payload is not None:
            return self.payload
        return {"error": str(self)}


class UnauthorizedError(PredictorProxyError):
    def __init__(self):
        super().__init__("Missing or invalid token for detailed analysis", status_code=401)


class SubscriptionRequiredError(PredictorProxyError):
    """Valid credential without the subscribed tier. Rendered as a teaser, not an error."""

    def __init__(self, teaser: str = TEASER_MESSAGE):
        super().__init__(teaser, status_code=403, payload={"teaser": teaser})


class UpstreamUnavailableError(PredictorProxyError):
    def __init__(self, match_id: str):
        super().__init__("Prediction service unavailable", status_code=502)
        self.match_id = match_id


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(PredictorProxyError)
    async def handle_proxy_error(_request: Request, exc: PredictorProxyError):
        return JSONResponse(exc.to_body(), status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
