"""Rendering helpers for the menu tree, search overlay and dashboard."""

from __future__ import annotations

from rich.text import Text

from dish_browser.constant import (
    EMPTY_MENU_MESSAGE,
    NO_RESULTS_MESSAGE,
    SEARCHING_MESSAGE,
    UNCATEGORIZED_LABEL,
)
from dish_browser.models import (
    CatalogTree,
    DashboardCounts,
    Dish,
    SearchEmpty,
    SearchFailed,
    SearchPending,
    SearchResults,
    SearchState,
)


def badge_style(kind: str) -> str:
    """Return a consistent badge style for section tags."""
    if kind == "category":
        return "bold #ffffff on #b23a48"
    if kind == "subcategory":
        return "bold #ffffff on #2f6db5"
    return "bold #0b1f0f on #5fbf72"


def format_dish_line(dish: Dish, indent: int = 2) -> Text:
    """Render one dish row with an optional price."""
    text = Text(" " * indent)
    text.append(dish.name or dish.dish_id)
    if dish.price is not None:
        text.append(f"  {dish.price:.2f}", style="dim")
    return text


def format_dish_labels(dish: Dish) -> Text:
    """Render a search hit with its category/subcategory tags."""
    text = Text()
    if dish.category_name:
        text.append(f" {dish.category_name} ", style=badge_style("category"))
        text.append(" ")
    if dish.subcategory_name:
        text.append(f" {dish.subcategory_name} ", style=badge_style("subcategory"))
        text.append(" ")
    text.append(dish.name or dish.dish_id)
    return text


def render_tree(tree: CatalogTree) -> Text:
    """Render the organized menu; empty sections are skipped."""
    lines = Text()
    for node in tree.categories:
        if node.dish_count() == 0:
            continue
        if lines:
            lines.append("\n\n")
        lines.append(f" {node.category.name} ", style=badge_style("category"))
        for dish in node.dishes:
            lines.append("\n")
            lines.append_text(format_dish_line(dish))
        for sub_node in node.subcategories:
            if not sub_node.dishes:
                continue
            lines.append("\n  ")
            lines.append(f" {sub_node.subcategory.name} ", style=badge_style("subcategory"))
            for dish in sub_node.dishes:
                lines.append("\n")
                lines.append_text(format_dish_line(dish, indent=4))

    if tree.unclassified:
        if lines:
            lines.append("\n\n")
        lines.append(f" {UNCATEGORIZED_LABEL} ", style=badge_style("unclassified"))
        for dish in tree.unclassified:
            lines.append("\n")
            lines.append_text(format_dish_line(dish))

    if not lines:
        lines.append(EMPTY_MENU_MESSAGE, style="dim")
    return lines


def render_search_state(state: SearchState) -> Text:
    """Render the overlay that replaces the tree while a search is active."""
    if isinstance(state, SearchPending):
        return Text(SEARCHING_MESSAGE, style="dim")
    if isinstance(state, SearchEmpty):
        return Text(NO_RESULTS_MESSAGE)
    if isinstance(state, SearchFailed):
        return Text(state.error, style="bold red")
    if isinstance(state, SearchResults):
        lines = Text()
        for idx, dish in enumerate(state.dishes):
            if idx > 0:
                lines.append("\n")
            lines.append_text(format_dish_labels(dish))
        return lines
    return Text()


def render_view(view: SearchState | CatalogTree) -> Text:
    if isinstance(view, CatalogTree):
        return render_tree(view)
    return render_search_state(view)


def render_counts(counts: DashboardCounts) -> Text:
    """Render the dashboard counters with an optional error banner."""
    text = Text()
    if counts.error:
        text.append(counts.error, style="bold red")
        text.append("\n")
    text.append("Restaurants ", style="bold")
    text.append(str(counts.total_restaurants), style=badge_style("category"))
    text.append("   Dishes ", style="bold")
    text.append(str(counts.total_dishes), style=badge_style("subcategory"))
    return text
