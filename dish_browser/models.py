"""Domain models for dish-browser."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Dish:
    """A dish as returned by the catalog service."""

    dish_id: str
    name: str
    category_id: str | None = None
    subcategory_id: str | None = None
    price: float | None = None
    description: str | None = None
    # Only set on search results, which arrive enriched with labels.
    category_name: str | None = None
    subcategory_name: str | None = None


@dataclass(frozen=True)
class SubCategory:
    """A subcategory owned by exactly one category."""

    subcategory_id: str
    name: str
    category_id: str


@dataclass(frozen=True)
class Category:
    """A menu category with its ordered subcategories."""

    category_id: str
    name: str
    subcategories: tuple[SubCategory, ...] = ()


@dataclass(frozen=True)
class CatalogSnapshot:
    """One parsed response of the all-dishes endpoint."""

    restaurant_name: str
    dishes: tuple[Dish, ...]
    categories: tuple[Category, ...]


@dataclass(frozen=True)
class SubCategoryNode:
    subcategory: SubCategory
    dishes: tuple[Dish, ...]


@dataclass(frozen=True)
class CategoryNode:
    category: Category
    subcategories: tuple[SubCategoryNode, ...]
    dishes: tuple[Dish, ...]

    def dish_count(self) -> int:
        return len(self.dishes) + sum(len(node.dishes) for node in self.subcategories)


@dataclass(frozen=True)
class CatalogTree:
    """Nested category -> subcategory -> dish view of a restaurant menu."""

    categories: tuple[CategoryNode, ...] = ()
    unclassified: tuple[Dish, ...] = ()

    def dish_count(self) -> int:
        """Total dishes placed anywhere in the tree."""
        return sum(node.dish_count() for node in self.categories) + len(self.unclassified)

    def is_empty(self) -> bool:
        return self.dish_count() == 0


@dataclass(frozen=True)
class SearchInactive:
    """No search is active; the catalog tree is shown."""


@dataclass(frozen=True)
class SearchPending:
    query: str


@dataclass(frozen=True)
class SearchResults:
    query: str
    dishes: tuple[Dish, ...]


@dataclass(frozen=True)
class SearchEmpty:
    """The lookup succeeded with zero matches."""

    query: str


@dataclass(frozen=True)
class SearchFailed:
    """The lookup itself failed (network, timeout or malformed body)."""

    query: str
    error: str


SearchState = SearchInactive | SearchPending | SearchResults | SearchEmpty | SearchFailed

SEARCH_INACTIVE = SearchInactive()


@dataclass(frozen=True)
class DashboardCounts:
    """Aggregate counts shown on the dashboard."""

    total_restaurants: int = 0
    total_dishes: int = 0
    error: str | None = None

