"""
Pytest fixtures for the predictor proxy tests.

The upstream prediction service is faked with httpx.MockTransport so no
network access is needed.
"""

from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings
from services.auth import create_access_token

from fakes import FakePredictor


@pytest.fixture
def make_settings(monkeypatch) -> Callable[..., Settings]:
    def _make(**env: str) -> Settings:
        defaults = {
            "PREDICTOR_URL": "http://predictor.test/",
            "PREDICTOR_API_KEY": "server-key",
            "PREDICTOR_MATCH_IDS": "m1,m2",
            "PREDICTOR_TIMEOUT_SECONDS": "0.2",
            "PREDICTOR_CACHE_TTL_SECONDS": "20",
            "JWT_SECRET": "test-secret",
        }
        defaults.update(env)
        for key, value in defaults.items():
            monkeypatch.setenv(key, value)
        return Settings()

    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture
def upstream() -> FakePredictor:
    return FakePredictor()


@pytest.fixture
def api_client(settings, upstream) -> Iterator[TestClient]:
    app = create_app(settings, transport=upstream.transport)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_token(settings) -> Callable[..., str]:
    def _make(**claims) -> str:
        return create_access_token(claims, settings.jwt_secret, settings.jwt_algorithm)

    return _make
