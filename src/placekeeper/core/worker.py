"""
Worker Thread Module
Runs decision cycles one after another.
"""


import threading
import logging
import time

from ..config.agent import CYCLE_DELAY_MS, SLOW_CYCLE_THRESHOLD_MS, STARTUP_DELAY_MS


class Worker(threading.Thread):
    """Worker thread owning the browser and executing decision cycles.

    The cycle is built inside the thread because the browser session must be
    used from the thread that created it. Cycles never overlap; a failed
    cycle is logged and the loop continues after the fixed delay.
    """

    def __init__(self, config_manager, build_cycle, stop_event=None, max_cycles=None):
        super().__init__(daemon=True, name="placekeeper-worker")
        self.config_manager = config_manager
        self.build_cycle = build_cycle
        self.stop_event = stop_event or threading.Event()
        self.max_cycles = max_cycles
        self.cycles_run = 0
        self.failures = 0
        self.cycle = None

    def stop(self):
        self.stop_event.set()

    def run(self):
        """Main loop delegating to a per-iteration handler to lower complexity."""
        startup_ms = self.config_manager.get_int("startup_delay_ms", STARTUP_DELAY_MS)
        delay_ms = self.config_manager.get_int("cycle_delay_ms", CYCLE_DELAY_MS)
        if self.stop_event.wait(startup_ms / 1000.0):
            return
        try:
            while self._run_iteration():
                if self.stop_event.wait(delay_ms / 1000.0):
                    break
        finally:
            self._close_cycle()
            logging.getLogger(__name__).info("worker: stopped after %d cycles", self.cycles_run)

    def _run_iteration(self) -> bool:
        """Run a single cycle. Return False to break the loop."""
        if self.stop_event.is_set():
            return False
        t0 = time.perf_counter()
        try:
            if self.cycle is None:
                # A failed build is retried on the next iteration
                self.cycle = self.build_cycle(self.stop_event)
                logging.getLogger(__name__).info("worker: agent started")
            action = self.cycle.run_once()
        except Exception:
            self.failures += 1
            logging.getLogger(__name__).exception("worker: cycle failed")
        else:
            logging.getLogger(__name__).debug("worker: cycle finished with %s", type(action).__name__)
        finally:
            self.cycles_run += 1
            dur_ms = (time.perf_counter() - t0) * 1000.0
            thr_ms = self.config_manager.get_int("slow_cycle_threshold_ms", SLOW_CYCLE_THRESHOLD_MS)
            if dur_ms > thr_ms:
                logging.getLogger(__name__).warning("worker: slow cycle took %.1fms", dur_ms)
        if self.max_cycles is not None and self.cycles_run >= self.max_cycles:
            return False
        return True

    def _close_cycle(self):
        browser = getattr(self.cycle, "browser", None)
        close = getattr(browser, "close", None)
        if callable(close):
            try:
                close()
            except Exception:
                logging.getLogger(__name__).exception("worker: browser close failed")
