"""agent.cycle
One decision cycle: refresh, sample, detect, select, execute.

A cycle runs to completion or raises; nothing is committed halfway. The
caller (core.worker.Worker) is responsible for never running two cycles at
once and for the delay between them.
"""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from ..config.agent import DUMP_CORRECTIONS, IDLE_BACKOFF_RANGE_MS
from ..core.errors import ConfigFetchError
from ..corrections.engine import compute_corrections
from ..corrections.model import Correction
from ..corrections.selector import Action, select_action
from ..remote.refresher import ConfigRefresher, now_ms


class DecisionCycle:
    """Wires refresher, browser, engine, selector and executor together."""

    def __init__(
        self,
        refresher: ConfigRefresher,
        browser,
        executor,
        store,
        rng: Optional[random.Random] = None,
        backoff_range_ms: Tuple[int, int] = IDLE_BACKOFF_RANGE_MS,
    ) -> None:
        self.refresher = refresher
        self.browser = browser
        self.executor = executor
        self.store = store
        self.rng = rng or random.Random()
        self.backoff_range_ms = backoff_range_ms
        self.last_corrections: List[Correction] = []
        self._logger = logging.getLogger(__name__)

    def _refresh(self, now: Optional[int]) -> None:
        try:
            self.refresher.refresh(now)
        except ConfigFetchError as e:
            if self.refresher.snapshot is None:
                raise
            self._logger.warning("cycle: config refresh failed, keeping previous config: %s", e)

    def run_once(self, now: Optional[int] = None) -> Action:
        now = now_ms() if now is None else now
        self._refresh(now)
        snapshot = self.refresher.snapshot
        if snapshot is None:
            raise ConfigFetchError("no configuration loaded", url=self.refresher.config_url)

        remaining_s = self.browser.remaining_cooldown_seconds()
        sampler = self.browser.capture_sampler()
        corrections = compute_corrections(snapshot.palette, snapshot.templates, snapshot.origin, sampler)
        self.last_corrections = corrections

        current = self.browser.current_coordinate()
        self._logger.info("cycle: %d corrections, cooldown=%ds, viewport=%s",
                          len(corrections), remaining_s, current)
        if DUMP_CORRECTIONS:
            self._logger.info("cycle: corrections %s", corrections)
        else:
            self._logger.debug("cycle: corrections %s", corrections)

        action = select_action(
            corrections,
            current,
            remaining_s * 1000,
            palette=snapshot.palette,
            store=self.store,
            rng=self.rng,
            backoff_range_ms=self.backoff_range_ms,
        )
        self._logger.debug("cycle: action %s", action)
        self.executor.execute(action, snapshot)
        return action
