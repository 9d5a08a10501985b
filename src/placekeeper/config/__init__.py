"""Config subpackage.

- agent: central knobs for intervals, backoff bounds, selectors and URLs
"""
# Import agent configuration explicitly to avoid F403
from .agent import (
    CONFIG_URL,
    REFRESH_INTERVAL_MS,
    REQUEST_TIMEOUT_SECONDS,
    BASE_URL,
    SCREEN_MODE,
    DEFAULT_ZOOM,
    DEFAULT_LOCALE,
    CYCLE_DELAY_MS,
    STARTUP_DELAY_MS,
    CLICK_DELAY_MS,
    IDLE_BACKOFF_RANGE_MS,
    RELOAD_WINDOW_SECONDS,
    SLOW_CYCLE_THRESHOLD_MS,
    SELECTED_COLOR_KEY,
    NO_CONSTRAINT,
)

__all__ = [
    "CONFIG_URL",
    "REFRESH_INTERVAL_MS",
    "REQUEST_TIMEOUT_SECONDS",
    "BASE_URL",
    "SCREEN_MODE",
    "DEFAULT_ZOOM",
    "DEFAULT_LOCALE",
    "CYCLE_DELAY_MS",
    "STARTUP_DELAY_MS",
    "CLICK_DELAY_MS",
    "IDLE_BACKOFF_RANGE_MS",
    "RELOAD_WINDOW_SECONDS",
    "SLOW_CYCLE_THRESHOLD_MS",
    "SELECTED_COLOR_KEY",
    "NO_CONSTRAINT",
]
