"""Per-restaurant catalog session and dashboard count fetching."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Protocol

from dish_browser.constant import COUNTS_ERROR_MESSAGE, LOAD_ERROR_MESSAGE, RESTAURANT_NAME_FALLBACK
from dish_browser.debug_log import log_debug
from dish_browser.errors import CatalogError
from dish_browser.models import (
    CatalogSnapshot,
    CatalogTree,
    Category,
    DashboardCounts,
    Dish,
    SearchState,
)
from dish_browser.organizer import organize
from dish_browser.search import SearchOverlay

STATUS_LOADING = "loading"
STATUS_READY = "ready"
STATUS_ERROR = "error"


class CatalogSource(Protocol):
    """The subset of CatalogApi a session needs."""

    async def all_dishes(self, restaurant_id: str) -> CatalogSnapshot: ...

    async def search_dishes(self, restaurant_id: str, query: str) -> list[Dish]: ...

    async def close(self) -> None: ...


class CountsSource(Protocol):
    async def total_restaurants(self) -> int: ...

    async def total_dishes(self) -> int: ...


class CatalogSession:
    """Owns the fetched catalog of one restaurant view.

    Created when a restaurant view opens and closed when it goes away. The
    organized tree is rebuilt from scratch after every successful fetch; a
    mutation elsewhere only ever leads to a full refetch.
    """

    def __init__(self, restaurant_id: str, api: CatalogSource, owns_api: bool = False) -> None:
        self.restaurant_id = str(restaurant_id)
        self.api = api
        self._owns_api = owns_api
        self.dishes: tuple[Dish, ...] = ()
        self.categories: tuple[Category, ...] = ()
        self.tree = CatalogTree()
        self.status = STATUS_LOADING
        self.error = ""
        self._restaurant_name = ""
        self._latest_load = 0
        self.overlay = SearchOverlay(self._lookup, on_clear=self.load)

    @property
    def loading(self) -> bool:
        return self.status == STATUS_LOADING

    @property
    def restaurant_name(self) -> str:
        return self._restaurant_name or RESTAURANT_NAME_FALLBACK.format(restaurant_id=self.restaurant_id)

    async def _lookup(self, query: str) -> list[Dish]:
        return await self.api.search_dishes(self.restaurant_id, query)

    async def load(self, restaurant_id: str | None = None) -> None:
        """Fetch dishes and categories, replacing both on success."""
        if restaurant_id is not None and str(restaurant_id) != self.restaurant_id:
            self.restaurant_id = str(restaurant_id)
            self._restaurant_name = ""
            self.overlay.reset()

        self._latest_load += 1
        load_id = self._latest_load
        self.status = STATUS_LOADING
        log_debug("load_start", restaurant_id=self.restaurant_id, load_id=load_id)

        try:
            snapshot = await self.api.all_dishes(self.restaurant_id)
        except CatalogError as exc:
            if load_id != self._latest_load:
                return
            self.error = LOAD_ERROR_MESSAGE
            self.status = STATUS_ERROR
            log_debug("load_failed", restaurant_id=self.restaurant_id, error=exc)
            return

        if load_id != self._latest_load:
            log_debug("load_stale", load_id=load_id, latest=self._latest_load)
            return

        self.dishes = snapshot.dishes
        self.categories = snapshot.categories
        self._restaurant_name = snapshot.restaurant_name
        self.tree = organize(self.dishes, self.categories)
        self.error = ""
        self.status = STATUS_READY
        log_debug(
            "load_ready",
            restaurant_id=self.restaurant_id,
            dishes=len(self.dishes),
            categories=len(self.categories),
            unclassified=len(self.tree.unclassified),
        )

    async def refresh_after_mutation(self) -> None:
        """Resynchronize after an external add/edit/delete by refetching everything."""
        log_debug("refresh_after_mutation", restaurant_id=self.restaurant_id)
        await self.load()

    async def apply_mutation(self, mutation: Callable[[], Awaitable[Any]]) -> Any:
        """Await an external mutation call, then refresh the catalog on success."""
        try:
            result = await mutation()
        except Exception as exc:
            log_debug("mutation_failed", restaurant_id=self.restaurant_id, error=exc)
            raise
        await self.refresh_after_mutation()
        return result

    async def search(self, query: str | None) -> SearchState:
        return await self.overlay.search(query)

    async def clear_search(self) -> None:
        """Drop the overlay and reload the base catalog."""
        await self.overlay.clear()

    def view(self) -> SearchState | CatalogTree:
        """Return the active render source: overlay state when searching, else the tree."""
        if self.overlay.is_active:
            return self.overlay.state
        return self.tree

    async def close(self) -> None:
        self.overlay.reset()
        self._latest_load += 1
        if self._owns_api:
            await self.api.close()


async def fetch_dashboard_counts(api: CountsSource) -> DashboardCounts:
    """Fetch both aggregate counts concurrently; any failure yields zeros plus an error."""
    results = await asyncio.gather(api.total_restaurants(), api.total_dishes(), return_exceptions=True)
    for result in results:
        if isinstance(result, CatalogError):
            log_debug("counts_failed", error=result)
            return DashboardCounts(error=COUNTS_ERROR_MESSAGE.format(detail=result))
        if isinstance(result, BaseException):
            raise result
    total_restaurants, total_dishes = results
    return DashboardCounts(total_restaurants=total_restaurants, total_dishes=total_dishes)
