import asyncio
import time
from typing import Any

import httpx

from cosmotax.exceptions import ExternalServiceError


class RateLimitedClient:
    """Async HTTP client that keeps at least ``1 / rate_per_second`` between requests."""

    def __init__(self, rate_per_second: float = 2.0, timeout: float = 30.0) -> None:
        self._min_interval = 1.0 / rate_per_second
        self._last_request_time = 0.0
        self._lock = asyncio.Lock()
        self._client = httpx.AsyncClient(timeout=timeout)

    @property
    def min_interval(self) -> float:
        return self._min_interval

    async def _wait_for_slot(self) -> None:
        async with self._lock:
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < self._min_interval:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()

    async def get(self, url: str, params: dict | None = None) -> httpx.Response:
        await self._wait_for_slot()
        return await self._client.get(url, params=params)

    async def get_json(self, url: str, params: dict | None = None) -> Any:
        """GET and decode JSON. Transport errors and non-200 answers raise ExternalServiceError."""
        try:
            response = await self.get(url, params=params)
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"GET {url} failed: {exc}") from exc
        if response.status_code != 200:
            raise ExternalServiceError(f"GET {url} returned {response.status_code}")
        try:
            return response.json()
        except ValueError as exc:
            raise ExternalServiceError(f"GET {url} returned invalid JSON") from exc

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RateLimitedClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
