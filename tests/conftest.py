from __future__ import annotations

import asyncio

import pytest

from dish_browser.debug_log import set_debug_log_path
from dish_browser.errors import NetworkFailure
from dish_browser.models import CatalogSnapshot, Category, Dish, SubCategory


@pytest.fixture(autouse=True)
def _debug_log_in_tmp(tmp_path):
    set_debug_log_path(tmp_path / "debug.log")
    yield


def make_categories() -> tuple[Category, ...]:
    return (
        Category(
            category_id="A",
            name="Pizza",
            subcategories=(
                SubCategory(subcategory_id="A1", name="Vegetarian", category_id="A"),
                SubCategory(subcategory_id="A2", name="Meat", category_id="A"),
            ),
        ),
        Category(category_id="B", name="Drinks"),
    )


def make_dishes() -> tuple[Dish, ...]:
    return (
        Dish(dish_id="1", name="Margherita", category_id="A"),
        Dish(dish_id="2", name="Funghi", category_id="A", subcategory_id="A1"),
        Dish(dish_id="3", name="Salami", category_id="A", subcategory_id="A2"),
        Dish(dish_id="4", name="Cola", category_id="B"),
        Dish(dish_id="5", name="Marinara", category_id="A"),
    )


class FakeCatalogApi:
    """In-memory stand-in for CatalogApi with scriptable failures and gates."""

    def __init__(self, snapshot: CatalogSnapshot | None = None) -> None:
        self.snapshot = snapshot or CatalogSnapshot(
            restaurant_name="Luigi's",
            dishes=make_dishes(),
            categories=make_categories(),
        )
        self.search_results: dict[str, list[Dish]] = {}
        self.search_gates: dict[str, asyncio.Event] = {}
        self.fail_load = False
        self.fail_search = False
        self.fail_counts = False
        self.load_calls: list[str] = []
        self.search_calls: list[tuple[str, str]] = []
        self.closed = False

    async def all_dishes(self, restaurant_id: str) -> CatalogSnapshot:
        self.load_calls.append(restaurant_id)
        if self.fail_load:
            raise NetworkFailure("GET /restaurants/allDishes failed: 500", status=500)
        return self.snapshot

    async def search_dishes(self, restaurant_id: str, query: str) -> list[Dish]:
        self.search_calls.append((restaurant_id, query))
        gate = self.search_gates.get(query)
        if gate is not None:
            await gate.wait()
        if self.fail_search:
            raise NetworkFailure("GET /restaurants/searchDish failed: 503", status=503)
        return list(self.search_results.get(query, []))

    async def total_restaurants(self) -> int:
        if self.fail_counts:
            raise NetworkFailure("GET /restaurants/totalRestaurants failed: 500", status=500)
        return 3

    async def total_dishes(self) -> int:
        if self.fail_counts:
            raise NetworkFailure("GET /restaurants/totalDishes failed: 500", status=500)
        return 42

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_api() -> FakeCatalogApi:
    return FakeCatalogApi()
