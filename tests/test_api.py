from __future__ import annotations

import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer as ServiceServer

from dish_browser.api import CatalogApi
from dish_browser.errors import NetworkFailure, ParseFailure
from dish_browser.session import fetch_dashboard_counts


def _service(seen_queries: list[str], restaurants_body: str | None = None) -> web.Application:
    async def total_restaurants(request: web.Request) -> web.Response:
        if restaurants_body is not None:
            return web.Response(text=restaurants_body, content_type="application/json")
        return web.json_response({"totalRestaurants": 4})

    async def total_dishes(request: web.Request) -> web.Response:
        return web.json_response({"totalDishes": 17})

    async def all_dishes(request: web.Request) -> web.Response:
        restaurant_id = request.match_info["restaurant_id"]
        if restaurant_id == "broken":
            return web.json_response({"error": "boom"}, status=500)
        if restaurant_id == "garbled":
            return web.Response(text="{not json", content_type="application/json")
        if restaurant_id == "slow":
            await asyncio.sleep(2)
        return web.json_response(
            {
                "restaurant": {"name": f"Place {restaurant_id}"},
                "dishes": [{"_id": "d1", "name": "Margherita", "categoryId": "c1"}],
                "categories": [{"categoryId": "c1", "categoryName": "Pizza", "subCategories": []}],
            }
        )

    async def search_dish(request: web.Request) -> web.Response:
        query = request.query.get("query", "")
        seen_queries.append(query)
        if query == "margherita":
            return web.json_response(
                {"results": [{"_id": "d1", "name": "Margherita", "categoryName": "Pizza"}]}
            )
        return web.json_response({"results": []})

    app = web.Application()
    app.router.add_get("/api/restaurants/totalRestaurants", total_restaurants)
    app.router.add_get("/api/restaurants/totalDishes", total_dishes)
    app.router.add_get("/api/restaurants/allDishes/{restaurant_id}", all_dishes)
    app.router.add_get("/api/restaurants/searchDish/{restaurant_id}", search_dish)
    return app


def _run(scenario, timeout_seconds: float = 5.0, seen_queries: list[str] | None = None):
    async def runner():
        server = ServiceServer(_service(seen_queries if seen_queries is not None else []))
        await server.start_server()
        try:
            async with CatalogApi(base_url=str(server.make_url("/api")), timeout_seconds=timeout_seconds) as api:
                return await scenario(api)
        finally:
            await server.close()

    return asyncio.run(runner())


def test_counts():
    async def scenario(api: CatalogApi):
        return await api.total_restaurants(), await api.total_dishes()

    assert _run(scenario) == (4, 17)


def test_all_dishes():
    async def scenario(api: CatalogApi):
        return await api.all_dishes("r1")

    snapshot = _run(scenario)

    assert snapshot.restaurant_name == "Place r1"
    assert [dish.name for dish in snapshot.dishes] == ["Margherita"]
    assert snapshot.categories[0].name == "Pizza"


def test_search_sends_query_parameter():
    seen: list[str] = []

    async def scenario(api: CatalogApi):
        return await api.search_dishes("r1", "margherita"), await api.search_dishes("r1", "nothing here")

    hits, misses = _run(scenario, seen_queries=seen)

    assert [dish.category_name for dish in hits] == ["Pizza"]
    assert misses == []
    assert seen == ["margherita", "nothing here"]


def test_non_success_status_is_network_failure():
    async def scenario(api: CatalogApi):
        return await api.all_dishes("broken")

    with pytest.raises(NetworkFailure) as excinfo:
        _run(scenario)
    assert excinfo.value.status == 500


def test_unknown_route_is_network_failure():
    async def scenario(api: CatalogApi):
        api.base_url = api.base_url + "/v2"
        return await api.total_dishes()

    with pytest.raises(NetworkFailure):
        _run(scenario)


def test_malformed_body_is_parse_failure():
    async def scenario(api: CatalogApi):
        return await api.all_dishes("garbled")

    with pytest.raises(ParseFailure):
        _run(scenario)


def test_timeout_is_network_failure():
    async def scenario(api: CatalogApi):
        return await api.all_dishes("slow")

    with pytest.raises(NetworkFailure, match="timed out"):
        _run(scenario, timeout_seconds=0.2)


def test_connection_refused_is_network_failure():
    async def scenario():
        async with CatalogApi(base_url="http://127.0.0.1:9/api", timeout_seconds=2) as api:
            return await api.total_dishes()

    with pytest.raises(NetworkFailure):
        asyncio.run(scenario())


def test_overflowing_count_yields_zero_counts_with_error():
    async def runner():
        server = ServiceServer(_service([], restaurants_body='{"totalRestaurants": 1e999}'))
        await server.start_server()
        try:
            async with CatalogApi(base_url=str(server.make_url("/api"))) as api:
                return await fetch_dashboard_counts(api)
        finally:
            await server.close()

    counts = asyncio.run(runner())

    assert (counts.total_restaurants, counts.total_dishes) == (0, 0)
    assert "totalRestaurants" in counts.error
