"""Append-only debug log shared by the session, API client and app."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from dish_browser.config import DEBUG_LOG_PATH

_debug_log_path = Path(DEBUG_LOG_PATH)


def set_debug_log_path(path: str | Path) -> None:
    """Redirect subsequent debug lines to another file."""
    global _debug_log_path
    _debug_log_path = Path(path)


def log_debug(event: str, **fields: object) -> None:
    """Write one timestamped `event key=value ...` line."""
    try:
        ts = datetime.now(timezone.utc).isoformat()
        details = " ".join(f"{key}={value!r}" for key, value in fields.items())
        line = f"{ts} {event} {details}".rstrip()
        _debug_log_path.parent.mkdir(parents=True, exist_ok=True)
        with _debug_log_path.open("a", encoding="utf-8") as fh:
            fh.write(f"{line}\n")
    except Exception:
        # Logging must never interfere with app flow.
        return
