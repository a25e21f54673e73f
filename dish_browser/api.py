"""Async HTTP client for the restaurant catalog service."""

from __future__ import annotations

import asyncio
from typing import Any
from urllib.parse import quote

import aiohttp

from dish_browser.config import API_BASE_URL, REQUEST_TIMEOUT_SECONDS
from dish_browser.constant import (
    ALL_DISHES_PATH,
    SEARCH_DISH_PATH,
    TOTAL_DISHES_PATH,
    TOTAL_RESTAURANTS_PATH,
)
from dish_browser.data import parse_catalog_payload, parse_count, parse_search_payload
from dish_browser.debug_log import log_debug
from dish_browser.errors import NetworkFailure, ParseFailure
from dish_browser.models import CatalogSnapshot, Dish


class CatalogApi:
    """Read-only client for the catalog endpoints.

    One `aiohttp.ClientSession` is opened lazily on first use and reused for
    every request until `close()`. Every call is bounded by a total timeout.
    Failures never escape as aiohttp exceptions: transport problems, timeouts
    and non-2xx answers raise `NetworkFailure`, undecodable bodies raise
    `ParseFailure`. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> CatalogApi:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _client(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        log_debug("api_request", url=url, params=params)
        try:
            async with self._client().get(url, params=params, timeout=self.timeout) as response:
                if response.status < 200 or response.status >= 300:
                    raise NetworkFailure(
                        f"GET {path} failed: {response.status} {response.reason or ''}".rstrip(),
                        status=response.status,
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as exc:
                    raise ParseFailure(f"GET {path} returned malformed JSON: {exc}") from exc
        except asyncio.TimeoutError as exc:
            log_debug("api_timeout", url=url)
            raise NetworkFailure(f"GET {path} timed out") from exc
        except aiohttp.ClientError as exc:
            log_debug("api_error", url=url, error=exc)
            raise NetworkFailure(f"GET {path} failed: {exc}") from exc

    async def total_restaurants(self) -> int:
        return parse_count(await self._get_json(TOTAL_RESTAURANTS_PATH), "totalRestaurants")

    async def total_dishes(self) -> int:
        return parse_count(await self._get_json(TOTAL_DISHES_PATH), "totalDishes")

    async def all_dishes(self, restaurant_id: str) -> CatalogSnapshot:
        """Fetch the restaurant name, its dishes and its category tree."""
        payload = await self._get_json(ALL_DISHES_PATH.format(restaurant_id=quote(restaurant_id, safe="")))
        return parse_catalog_payload(payload, restaurant_id)

    async def search_dishes(self, restaurant_id: str, query: str) -> list[Dish]:
        """Search one restaurant's dishes; `query` must already be normalized."""
        payload = await self._get_json(
            SEARCH_DISH_PATH.format(restaurant_id=quote(restaurant_id, safe="")),
            params={"query": query},
        )
        return parse_search_payload(payload)
