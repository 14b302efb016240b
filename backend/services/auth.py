"""Subscriber credential helpers.

Credentials are HS256 JWTs issued after a successful subscription payment.
They are verified on every detail request and never stored here.
"""

import logging
import re
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, StrictBool, ValidationError

logger = logging.getLogger(__name__)

_BEARER_PREFIX = re.compile(r"^Bearer\s+", re.IGNORECASE)


class SubscriptionClaims(BaseModel):
    """Claims the proxy relies on. `subscribed` defaults to False when absent."""

    model_config = ConfigDict(extra="allow")

    sub: str | None = None
    subscribed: StrictBool = False


def create_access_token(
    claims: dict[str, Any],
    secret: str,
    algorithm: str = "HS256",
    expires_minutes: int = 60,
) -> str:
    """
    Create a signed subscriber token with expiration and JTI.

    Args:
        claims: Claims to include (e.g., {"sub": "user@example.com", "subscribed": True}).
        secret: Signing secret shared with the proxy.
        algorithm: JWT algorithm.
        expires_minutes: Lifetime of the token.

    Returns:
        Encoded JWT string.
    """
    to_encode = claims.copy()
    to_encode.update({
        "exp": datetime.now(timezone.utc) + timedelta(minutes=expires_minutes),
        "jti": str(uuid.uuid4()),
    })
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def verify_credential(
    authorization: str | None,
    secret: str,
    algorithm: str = "HS256",
) -> SubscriptionClaims | None:
    """
    Verify an Authorization header value and return its claims.

    Missing header, malformed or expired token, bad signature and claims
    that do not fit SubscriptionClaims all return None. Callers must not
    tell these cases apart.
    """
    if not authorization:
        return None

    token = _BEARER_PREFIX.sub("", authorization.strip())
    if not token:
        return None

    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
        return SubscriptionClaims.model_validate(payload)
    except (JWTError, ValidationError) as exc:
        logger.info("Rejected subscriber credential: %s", type(exc).__name__)
        return None
