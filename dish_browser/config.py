"""Runtime configuration defaults for the catalog client."""

from __future__ import annotations

import os

API_BASE_URL = os.environ.get("DISH_BROWSER_API_BASE_URL", "http://localhost:3001/api").rstrip("/")

# Applied to every remote call; a timeout is reported as a NetworkFailure.
REQUEST_TIMEOUT_SECONDS = float(os.environ.get("DISH_BROWSER_REQUEST_TIMEOUT", "10"))

DEBUG_LOG_PATH = os.environ.get("DISH_BROWSER_DEBUG_LOG", "/tmp/dish-browser-debug.log")
