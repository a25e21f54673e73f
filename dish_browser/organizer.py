"""Reorganize a flat dish list into the nested menu tree."""

from __future__ import annotations

from typing import Iterable

from dish_browser.models import CatalogTree, Category, CategoryNode, Dish, SubCategoryNode


def organize(dishes: Iterable[Dish], categories: Iterable[Category]) -> CatalogTree:
    """Place every dish exactly once: under its subcategory, else under its category.

    Source order is kept for categories, subcategories and dishes. Dishes whose
    references match no known category or subcategory go to `unclassified`
    instead of being dropped.
    """
    dishes = tuple(dishes)
    categories = tuple(categories)

    known_subcategories = {
        sub.subcategory_id for category in categories for sub in category.subcategories
    }
    known_categories = {category.category_id for category in categories}

    by_subcategory: dict[str, list[Dish]] = {}
    by_category: dict[str, list[Dish]] = {}
    unclassified: list[Dish] = []
    for dish in dishes:
        if dish.subcategory_id is not None:
            if dish.subcategory_id in known_subcategories:
                by_subcategory.setdefault(dish.subcategory_id, []).append(dish)
            else:
                unclassified.append(dish)
            continue
        if dish.category_id in known_categories:
            by_category.setdefault(dish.category_id, []).append(dish)
        else:
            unclassified.append(dish)

    # A subcategory id listed under two categories keeps its dishes only once.
    placed: set[str] = set()
    nodes: list[CategoryNode] = []
    for category in categories:
        sub_nodes: list[SubCategoryNode] = []
        for sub in category.subcategories:
            sub_dishes: tuple[Dish, ...] = ()
            if sub.subcategory_id not in placed:
                placed.add(sub.subcategory_id)
                sub_dishes = tuple(by_subcategory.get(sub.subcategory_id, ()))
            sub_nodes.append(SubCategoryNode(subcategory=sub, dishes=sub_dishes))
        direct = by_category.pop(category.category_id, [])
        nodes.append(CategoryNode(category=category, subcategories=tuple(sub_nodes), dishes=tuple(direct)))

    return CatalogTree(categories=tuple(nodes), unclassified=tuple(unclassified))
