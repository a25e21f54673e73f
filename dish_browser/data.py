"""Payload parsing from catalog service JSON into domain models."""

from __future__ import annotations

import math
from typing import Any

from dish_browser.constant import RESTAURANT_NAME_FALLBACK
from dish_browser.errors import ParseFailure
from dish_browser.models import CatalogSnapshot, Category, Dish, SubCategory


def _require_mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ParseFailure(f"{what} must be an object, got {type(value).__name__}")
    return value


def _list_field(payload: dict[str, Any], key: str, what: str) -> list[Any]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseFailure(f"{what}.{key} must be a list, got {type(value).__name__}")
    return value


def _ref(value: Any) -> str | None:
    """Normalize an id reference; falsy ids ("" / null) mean unset."""
    if value is None or value == "":
        return None
    if isinstance(value, dict):
        # Populated references arrive as embedded documents.
        value = value.get("_id")
        if value is None or value == "":
            return None
    return str(value)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def _optional_price(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ParseFailure(f"invalid price {value!r}") from exc


def parse_dish(raw: Any) -> Dish:
    """Build a Dish from one service record."""
    record = _require_mapping(raw, "dish")
    dish_id = _ref(record.get("_id", record.get("id")))
    if dish_id is None:
        raise ParseFailure("dish record without an id")
    return Dish(
        dish_id=dish_id,
        name=str(record.get("name") or ""),
        category_id=_ref(record.get("categoryId")),
        subcategory_id=_ref(record.get("subCategoryId")),
        price=_optional_price(record.get("price")),
        description=_optional_str(record.get("description")),
        category_name=_optional_str(record.get("categoryName")),
        subcategory_name=_optional_str(record.get("subCategoryName")),
    )


def parse_category(raw: Any) -> Category:
    """Build a Category (with nested subcategories) from one service record."""
    record = _require_mapping(raw, "category")
    category_id = _ref(record.get("categoryId"))
    if category_id is None:
        raise ParseFailure("category record without categoryId")

    subcategories: list[SubCategory] = []
    for raw_sub in _list_field(record, "subCategories", "category"):
        sub = _require_mapping(raw_sub, "subcategory")
        subcategory_id = _ref(sub.get("subCategoryId"))
        if subcategory_id is None:
            raise ParseFailure(f"subcategory of {category_id!r} without subCategoryId")
        subcategories.append(
            SubCategory(
                subcategory_id=subcategory_id,
                name=str(sub.get("subCategoryName") or ""),
                category_id=category_id,
            )
        )

    return Category(
        category_id=category_id,
        name=str(record.get("categoryName") or ""),
        subcategories=tuple(subcategories),
    )


def restaurant_display_name(payload: dict[str, Any], restaurant_id: str) -> str:
    """Resolve the restaurant name, falling back to a generated placeholder."""
    restaurant = payload.get("restaurant")
    name = restaurant.get("name") if isinstance(restaurant, dict) else None
    if isinstance(name, str) and name.strip():
        return name
    return RESTAURANT_NAME_FALLBACK.format(restaurant_id=restaurant_id)


def parse_catalog_payload(raw: Any, restaurant_id: str) -> CatalogSnapshot:
    """Parse the all-dishes response for one restaurant."""
    payload = _require_mapping(raw, "catalog response")
    return CatalogSnapshot(
        restaurant_name=restaurant_display_name(payload, restaurant_id),
        dishes=tuple(parse_dish(item) for item in _list_field(payload, "dishes", "catalog response")),
        categories=tuple(parse_category(item) for item in _list_field(payload, "categories", "catalog response")),
    )


def parse_search_payload(raw: Any) -> list[Dish]:
    """Parse the search response into enriched dishes."""
    payload = _require_mapping(raw, "search response")
    if "results" not in payload:
        raise ParseFailure("search response without results")
    return [parse_dish(item) for item in _list_field(payload, "results", "search response")]


def parse_count(raw: Any, key: str) -> int:
    """Read one aggregate counter; a missing or null value counts as zero."""
    payload = _require_mapping(raw, f"{key} response")
    value = payload.get(key)
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ParseFailure(f"{key} must be an integer, got bool")
    if isinstance(value, int):
        return value
    # JSON numbers such as 3.0 decode to float; 3.7, inf and nan are not counts.
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    raise ParseFailure(f"{key} must be an integer, got {value!r}")
