"""core.config
Configuration core: load/save helpers for config.ini.

This module provides a tiny ConfigManager used by the application to read
and persist simple key/value settings. It purposely keeps a small API:
ConfigManager.load(), get(key, fallback), typed get_* helpers, and save().
"""

import os
from configparser import ConfigParser
from pathlib import Path
from typing import Optional, Tuple

from ..config import agent as defaults


class ConfigManager:
    """Simple configuration manager backed by an INI file.

    Behaviour:
    - Uses a single DEFAULT section for lookups.
    - Creates the file with sensible defaults if it does not exist.
    - Defaults to a per-user config path (%APPDATA% on Windows,
      XDG_CONFIG_HOME or ~/.config on other systems) unless an explicit
      path is provided.
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        if config_path:
            self.config_path = Path(config_path)
        else:
            if os.name == "nt":
                base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
                self.config_path = base.joinpath("Placekeeper", "config.ini")
            else:
                base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
                self.config_path = base.joinpath("placekeeper", "config.ini")

        self.config = ConfigParser(interpolation=None)
        self.load()

    def load(self) -> None:
        """Load configuration from disk, creating defaults when needed."""
        existed = self.config_path.exists()
        if existed:
            self.config.read(self.config_path, encoding="utf-8")

        lo, hi = defaults.IDLE_BACKOFF_RANGE_MS
        rlo, rhi = defaults.RELOAD_WINDOW_SECONDS
        values = {
            "log_level": "INFO",
            "config_url": defaults.CONFIG_URL,
            "base_url": defaults.BASE_URL,
            "refresh_interval_ms": str(defaults.REFRESH_INTERVAL_MS),
            "request_timeout_seconds": str(defaults.REQUEST_TIMEOUT_SECONDS),
            "idle_backoff_min_ms": str(lo),
            "idle_backoff_max_ms": str(hi),
            "cycle_delay_ms": str(defaults.CYCLE_DELAY_MS),
            "startup_delay_ms": str(defaults.STARTUP_DELAY_MS),
            "click_delay_ms": str(defaults.CLICK_DELAY_MS),
            "zoom": str(defaults.DEFAULT_ZOOM),
            "locale": defaults.DEFAULT_LOCALE,
            # Exclusive bounds in seconds; empty disables the refresh
            "reload_window_seconds": f"{rlo}-{rhi}",
            "headless": "False",
            "slow_cycle_threshold_ms": str(defaults.SLOW_CYCLE_THRESHOLD_MS),
            "random_seed": "",
            "state_file": "",
        }

        missing = [key for key in values if key not in self.config["DEFAULT"]]
        for key in missing:
            self.config["DEFAULT"][key] = values[key]

        # Write back when the file is new or lacked some keys
        if not existed or missing:
            self.save()

    def get(self, key: str, fallback=None):
        """Get a configuration value.

        Precedence is env > config.ini > fallback. Environment candidates are
        PK_<KEY>, <KEY> and the key itself.
        """
        env_candidates = [f"PK_{str(key).upper()}", str(key).upper(), str(key)]
        for ek in env_candidates:
            val = os.environ.get(ek)
            if val is not None and str(val) != "":
                return val
        return self.config["DEFAULT"].get(key, fallback)

    def get_int(self, key: str, fallback: int) -> int:
        raw = self.get(key)
        if raw is None or str(raw).strip() == "":
            return fallback
        try:
            return int(float(str(raw).strip()))
        except ValueError:
            return fallback

    def get_float(self, key: str, fallback: float) -> float:
        raw = self.get(key)
        if raw is None or str(raw).strip() == "":
            return fallback
        try:
            return float(str(raw).strip())
        except ValueError:
            return fallback

    def get_bool(self, key: str, fallback: bool = False) -> bool:
        raw = self.get(key)
        if raw is None or str(raw).strip() == "":
            return fallback
        return str(raw).strip().lower() in ("true", "1", "yes", "on")

    def get_range(self, key: str) -> Optional[Tuple[int, int]]:
        """Parse a "lo-hi" pair of integers; None when empty or malformed."""
        raw = str(self.get(key, "") or "").strip()
        if not raw:
            return None
        parts = [p.strip() for p in raw.split("-")]
        if len(parts) != 2:
            return None
        try:
            lo, hi = int(parts[0]), int(parts[1])
        except ValueError:
            return None
        if lo > hi:
            return None
        return lo, hi

    def get_int_pair(self, lo_key: str, hi_key: str, fallback: Tuple[int, int]) -> Tuple[int, int]:
        """Read two int keys as (lo, hi); fallback when lo exceeds hi."""
        lo = self.get_int(lo_key, fallback[0])
        hi = self.get_int(hi_key, fallback[1])
        if lo > hi:
            return fallback
        return lo, hi

    def save(self) -> None:
        """Persist current configuration to disk (creates parent directories)."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with self.config_path.open("w", encoding="utf-8") as fh:
            self.config.write(fh)
