"""Main Application entry point.

Initializes configuration, logging and the persisted store, then runs the
decision-cycle worker until interrupted.
"""

import argparse
import logging
import random
import sys
import threading
from pathlib import Path

from placekeeper.agent.cycle import DecisionCycle
from placekeeper.agent.executor import ActionExecutor
from placekeeper.config.agent import (
    CLICK_DELAY_MS,
    DEFAULT_ZOOM,
    IDLE_BACKOFF_RANGE_MS,
    REFRESH_INTERVAL_MS,
    REQUEST_TIMEOUT_SECONDS,
)
from placekeeper.core.config import ConfigManager
from placekeeper.core.logging_setup import setup_logging
from placekeeper.core.state import PersistentStateManager
from placekeeper.core.worker import Worker
from placekeeper.io.browser import BrowserSession
from placekeeper.remote.refresher import ConfigRefresher


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="placekeeper", description="Keep a shared canvas aligned with templates.")
    parser.add_argument("--config", help="path to config.ini (default: per-user config dir)")
    parser.add_argument("--log-level", help="override DEFAULT.log_level")
    parser.add_argument("--once", action="store_true", help="run a single decision cycle and exit")
    parser.add_argument("--headless", action="store_true", help="run the browser without a window")
    return parser.parse_args(argv)


def _state_path(config_manager: ConfigManager) -> Path:
    custom = str(config_manager.get("state_file", "") or "").strip()
    if custom:
        return Path(custom)
    return Path(config_manager.config_path).parent / "state.json"


def _make_rng(config_manager: ConfigManager) -> random.Random:
    seed = str(config_manager.get("random_seed", "") or "").strip()
    return random.Random(seed) if seed else random.Random()


def build_cycle_factory(config_manager: ConfigManager, store, headless: bool):
    """Return a callable building a DecisionCycle inside the worker thread."""

    def build(stop_event: threading.Event) -> DecisionCycle:
        base_url = config_manager.get("base_url")
        backoff = config_manager.get_int_pair("idle_backoff_min_ms", "idle_backoff_max_ms",
                                              IDLE_BACKOFF_RANGE_MS)
        browser = BrowserSession(start_url=base_url, headless=headless).start()
        try:
            refresher = ConfigRefresher(
                config_manager.get("config_url"),
                interval_ms=config_manager.get_int("refresh_interval_ms", REFRESH_INTERVAL_MS),
                timeout=config_manager.get_float("request_timeout_seconds", REQUEST_TIMEOUT_SECONDS),
            )
            executor = ActionExecutor(
                browser,
                store,
                base_url=base_url,
                zoom=config_manager.get_int("zoom", DEFAULT_ZOOM),
                locale=config_manager.get("locale"),
                click_delay_ms=config_manager.get_int("click_delay_ms", CLICK_DELAY_MS),
                reload_window_seconds=config_manager.get_range("reload_window_seconds"),
                stop_event=stop_event,
            )
        except Exception:
            browser.close()
            raise
        return DecisionCycle(refresher, browser, executor, store, rng=_make_rng(config_manager),
                             backoff_range_ms=backoff)

    return build


def main(argv=None) -> int:
    """Start the worker thread and block until it finishes or Ctrl+C."""
    args = _parse_args(argv)
    config_manager = ConfigManager(args.config)
    setup_logging(config_manager, level=args.log_level)
    logger = logging.getLogger(__name__)

    # Install a global exception hook to log unhandled exceptions
    def _excepthook(exc_type, exc, tb):
        logger.error("Unhandled exception:", exc_info=(exc_type, exc, tb))
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _excepthook

    store = PersistentStateManager(_state_path(config_manager))
    headless = args.headless or config_manager.get_bool("headless", False)
    worker = Worker(
        config_manager,
        build_cycle_factory(config_manager, store, headless),
        max_cycles=1 if args.once else None,
    )
    logger.info("Placekeeper starting (config=%s)", config_manager.config_path)
    worker.start()
    try:
        while worker.is_alive():
            worker.join(timeout=0.5)
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping worker")
        worker.stop()
        worker.join(timeout=10.0)

    if args.once:
        return 0 if worker.failures == 0 and worker.cycles_run == 1 else 1
    # Never got a working agent
    return 1 if worker.cycle is None and worker.failures else 0


if __name__ == "__main__":
    sys.exit(main())
