"""HTTP client for the upstream prediction service.

One GET per match: {PREDICTOR_URL}/predict/{match_id}[?detail=true].
Every failure mode (timeout, transport error, non-2xx, bad JSON) is
reported as None so callers apply a single fallback policy.
"""

import asyncio
import logging
from collections.abc import Hashable
from typing import Any
from urllib.parse import quote

import httpx

from services.cache import TTLCache, prediction_key

logger = logging.getLogger(__name__)

PRIVILEGED_HEADER = "x-api-key"


class PredictorClient:
    def __init__(
        self,
        base_url: str,
        cache: TTLCache,
        api_key: str = "",
        timeout_seconds: float = 5,
        cache_ttl_seconds: float = 20,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self.timeout_seconds = timeout_seconds
        self.cache_ttl_seconds = cache_ttl_seconds
        self._api_key = api_key
        self._http = httpx.AsyncClient(timeout=timeout_seconds, transport=transport)
        self._inflight: dict[Hashable, asyncio.Task] = {}

    def build_request(self, match_id: str, detail: bool, attach_privileged_header: bool) -> httpx.Request:
        url = f"{self.base_url}/predict/{quote(match_id, safe='')}"
        params = {"detail": "true"} if detail else None
        headers = {"Accept": "application/json"}
        if attach_privileged_header and self._api_key:
            headers[PRIVILEGED_HEADER] = self._api_key
        return self._http.build_request("GET", url, params=params, headers=headers)

    async def fetch_match(
        self,
        match_id: str,
        detail: bool = False,
        attach_privileged_header: bool = False,
    ) -> Any | None:
        """Return the cached or freshly fetched payload for one match, or None on failure."""
        key = prediction_key(match_id, detail)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        # Concurrent misses for the same query share one upstream request.
        flight_key = (key, attach_privileged_header)
        task = self._inflight.get(flight_key)
        if task is None:
            task = asyncio.ensure_future(
                self._fetch_and_store(key, match_id, detail, attach_privileged_header)
            )
            self._inflight[flight_key] = task
            task.add_done_callback(lambda done: self._forget(flight_key, done))
        return await asyncio.shield(task)

    def _forget(self, flight_key: Hashable, task: asyncio.Task) -> None:
        if self._inflight.get(flight_key) is task:
            del self._inflight[flight_key]

    async def _fetch_and_store(
        self,
        key: Hashable,
        match_id: str,
        detail: bool,
        attach_privileged_header: bool,
    ) -> Any | None:
        request = self.build_request(match_id, detail, attach_privileged_header)
        try:
            payload = await asyncio.wait_for(self._send(request), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("Predictor fetch timed out for %s after %.1fs", match_id, self.timeout_seconds)
            return None
        except httpx.HTTPError as e:
            logger.warning("Predictor fetch error for %s: %s", match_id, e)
            return None
        except ValueError as e:
            logger.warning("Predictor returned invalid JSON for %s: %s", match_id, e)
            return None

        if payload is None:
            logger.warning("Predictor returned an empty body for %s", match_id)
            return None

        self.cache.set(key, payload, ttl_seconds=self.cache_ttl_seconds)
        return payload

    async def _send(self, request: httpx.Request) -> Any:
        resp = await self._http.send(request)
        resp.raise_for_status()
        return resp.json()

    async def ping(self) -> bool:
        """Return True if the predictor base URL answers at all within the timeout."""
        try:
            await asyncio.wait_for(self._http.get(self.base_url), timeout=self.timeout_seconds)
        except (asyncio.TimeoutError, httpx.HTTPError) as e:
            logger.warning("Predictor ping failed: %s", e)
            return False
        return True

    async def aclose(self) -> None:
        await self._http.aclose()
