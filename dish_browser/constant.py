"""Endpoint templates and user-facing text."""

from __future__ import annotations

TOTAL_RESTAURANTS_PATH = "/restaurants/totalRestaurants"
TOTAL_DISHES_PATH = "/restaurants/totalDishes"
ALL_DISHES_PATH = "/restaurants/allDishes/{restaurant_id}"
SEARCH_DISH_PATH = "/restaurants/searchDish/{restaurant_id}"

RESTAURANT_NAME_FALLBACK = "Restaurant {restaurant_id}"

LOAD_ERROR_MESSAGE = "Failed to load restaurant details. Please try again."
COUNTS_ERROR_MESSAGE = "Failed to fetch counts: {detail}"
SEARCH_FAILED_MESSAGE = "Search failed: {detail}"
NO_RESULTS_MESSAGE = "No dishes found matching your search."
SEARCHING_MESSAGE = "Searching..."
LOADING_MESSAGE = "Loading dishes..."
EMPTY_MENU_MESSAGE = "(no dishes yet)"
UNCATEGORIZED_LABEL = "Uncategorized"
