"""
Agent configuration knobs centralization.

Intervals, backoff bounds, UI selectors and navigation parameters live here.
The ConfigManager defaults and the browser glue import from this module
instead of hardcoding values.
"""
from __future__ import annotations

from typing import Tuple
import os

# Remote configuration
CONFIG_URL: str = "https://static.emrio.fr/f/r-place-polytechnique/config.json"
REFRESH_INTERVAL_MS: int = 60_000
REQUEST_TIMEOUT_SECONDS: float = 30.0

# Canvas embed
BASE_URL: str = "https://garlic-bread.reddit.com/embed"
SCREEN_MODE: str = "fullscreen"
DEFAULT_ZOOM: int = 8
DEFAULT_LOCALE: str = "fr-FR"

# Loop timing
CYCLE_DELAY_MS: int = 800
STARTUP_DELAY_MS: int = 2_000
CLICK_DELAY_MS: int = 200
IDLE_BACKOFF_RANGE_MS: Tuple[int, int] = (1_000, 120_000)
RELOAD_WINDOW_SECONDS: Tuple[int, int] = (10, 15)
SLOW_CYCLE_THRESHOLD_MS: int = 5_000

# Persisted key holding the display code of the color queued for the next commit
SELECTED_COLOR_KEY: str = "colorCode"

# Template cell that imposes no constraint
NO_CONSTRAINT: str = "_"

# Shadow-DOM hosts of the embed (Playwright CSS pierces open shadow roots)
EMBED_SELECTOR: str = "garlic-bread-embed"
CANVAS_HOST_SELECTOR: str = "garlic-bread-canvas"
STATUS_PILL_SELECTOR: str = "garlic-bread-status-pill"
COLOR_PICKER_SELECTOR: str = "garlic-bread-color-picker"
COOLDOWN_ATTRIBUTE: str = "next-tile-available-in"

# Environment flags
DUMP_CORRECTIONS: bool = os.environ.get("PK_DUMP_CORRECTIONS", "0") == "1"

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
    "EMBED_SELECTOR",
    "CANVAS_HOST_SELECTOR",
    "STATUS_PILL_SELECTOR",
    "COLOR_PICKER_SELECTOR",
    "COOLDOWN_ATTRIBUTE",
    "DUMP_CORRECTIONS",
]
