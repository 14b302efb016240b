"""Centralized configuration — all env vars in one place."""

import os


def _split_csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = _split_csv(os.getenv("CORS_ORIGINS", "*"))
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # Upstream prediction service
        self.predictor_url: str = os.getenv("PREDICTOR_URL", "http://localhost:5000")
        self.predictor_api_key: str = os.getenv("PREDICTOR_API_KEY", "")
        self.predictor_match_ids: list[str] = _split_csv(
            os.getenv("PREDICTOR_MATCH_IDS", "m_20251115_001,m_20251115_002")
        )
        self.predictor_timeout_seconds: float = float(os.getenv("PREDICTOR_TIMEOUT_SECONDS", "5"))
        self.predictor_cache_ttl_seconds: float = float(os.getenv("PREDICTOR_CACHE_TTL_SECONDS", "20"))

        # Subscriber credentials
        self.jwt_secret: str = os.getenv("JWT_SECRET", "dev-secret")
        self.jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of required env vars that were left unset (defaults in use)."""
        required = ["PREDICTOR_URL", "JWT_SECRET"]
        return [var for var in required if not os.getenv(var)]


settings = Settings()
