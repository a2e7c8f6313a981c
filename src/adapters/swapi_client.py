"""SWAPI JSON fetcher (httpx).

Implements `core.interfaces.fetcher.JsonFetcher`. It lives in adapters
because it is pure I/O: one GET per call, no retries, no caching.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.errors import FetchError

logger = logging.getLogger(__name__)


class SwapiClient:
    """Async JSON fetcher over a shared `httpx.AsyncClient`.

    When no client is given one is built from `settings` and closed on exit;
    a client passed in by the caller is left open.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings)

    async def __aenter__(self) -> "SwapiClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def get_json(self, url: str) -> Any:
        logger.debug("GET %s", url)
        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            # ValueError covers json.JSONDecodeError.
            logger.debug("GET %s failed: %s", url, exc)
            raise FetchError(str(exc), url=url) from exc

        logger.debug("GET %s -> HTTP %s", url, resp.status_code)
        return data
