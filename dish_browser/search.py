"""Search overlay state machine."""

from __future__ import annotations

from typing import Awaitable, Callable

from dish_browser.constant import SEARCH_FAILED_MESSAGE
from dish_browser.debug_log import log_debug
from dish_browser.errors import CatalogError
from dish_browser.models import (
    SEARCH_INACTIVE,
    Dish,
    SearchEmpty,
    SearchFailed,
    SearchInactive,
    SearchPending,
    SearchResults,
    SearchState,
)

Lookup = Callable[[str], Awaitable[list[Dish]]]
ClearHook = Callable[[], Awaitable[None]]


def normalize_query(text: str | None) -> str:
    """Trim and case-fold a query so equivalent inputs share one key."""
    return (text or "").strip().casefold()


class SearchOverlay:
    """Owns the query lifecycle and the overlay state shown instead of the tree.

    Every call to `search` takes a new request id. Only the response for the
    latest id is applied; responses for superseded requests are discarded, so
    a slow early query can never overwrite a later one.
    """

    def __init__(self, lookup: Lookup, on_clear: ClearHook | None = None) -> None:
        self._lookup = lookup
        self._on_clear = on_clear
        self._state: SearchState = SEARCH_INACTIVE
        self._query = ""
        self._latest_request = 0

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def query(self) -> str:
        return self._query

    @property
    def is_active(self) -> bool:
        return not isinstance(self._state, SearchInactive)

    def reset(self) -> None:
        """Return to Inactive and discard any in-flight lookup."""
        self._latest_request += 1
        self._state = SEARCH_INACTIVE
        self._query = ""

    async def search(self, query: str | None) -> SearchState:
        normalized = normalize_query(query)
        if not normalized:
            self.reset()
            return self._state

        self._latest_request += 1
        request_id = self._latest_request
        self._query = normalized
        self._state = SearchPending(normalized)
        log_debug("search_issued", request_id=request_id, query=normalized)

        outcome: SearchState
        try:
            dishes = await self._lookup(normalized)
        except CatalogError as exc:
            log_debug("search_failed", request_id=request_id, query=normalized, error=exc)
            outcome = SearchFailed(normalized, SEARCH_FAILED_MESSAGE.format(detail=exc))
        else:
            outcome = SearchResults(normalized, tuple(dishes)) if dishes else SearchEmpty(normalized)

        if request_id != self._latest_request:
            log_debug("search_stale", request_id=request_id, latest=self._latest_request, query=normalized)
            return self._state

        self._state = outcome
        log_debug("search_applied", request_id=request_id, state=type(outcome).__name__)
        return outcome

    async def clear(self) -> None:
        """Reset to Inactive and ask the owner for a full catalog reload."""
        self.reset()
        log_debug("search_cleared")
        if self._on_clear is not None:
            await self._on_clear()
