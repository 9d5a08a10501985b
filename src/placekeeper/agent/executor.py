"""agent.executor
Carries out the action chosen by the selector against the live page.

- Idle: sleep the backoff (interruptible through the stop event)
- CommitPending: play button (optional), color button, confirm button
- AwaitCooldown: optionally reload the page inside the reload window
- LockTarget: navigate the viewport onto the target coordinate
"""
from __future__ import annotations

import logging
import threading
from typing import Optional, Tuple

from ..config.agent import (
    BASE_URL,
    CLICK_DELAY_MS,
    COLOR_PICKER_SELECTOR,
    DEFAULT_LOCALE,
    DEFAULT_ZOOM,
    SELECTED_COLOR_KEY,
    STATUS_PILL_SELECTOR,
)
from ..core.errors import CommitError, UnknownColorError
from ..corrections.model import ConfigSnapshot
from ..corrections.selector import Action, AwaitCooldown, CommitPending, Idle, LockTarget
from ..io.browser import build_target_url


class ActionExecutor:
    """Maps selector actions onto browser calls."""

    def __init__(
        self,
        browser,
        store,
        base_url: str = BASE_URL,
        zoom: int = DEFAULT_ZOOM,
        locale: str = DEFAULT_LOCALE,
        click_delay_ms: int = CLICK_DELAY_MS,
        reload_window_seconds: Optional[Tuple[int, int]] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        self.browser = browser
        self.store = store
        self.base_url = base_url
        self.zoom = zoom
        self.locale = locale
        self.click_delay_ms = click_delay_ms
        self.reload_window_seconds = reload_window_seconds
        self.stop_event = stop_event or threading.Event()
        self._logger = logging.getLogger(__name__)

    def execute(self, action: Action, snapshot: ConfigSnapshot) -> None:
        if isinstance(action, Idle):
            self._idle(action)
        elif isinstance(action, CommitPending):
            self.place_pixel(action, snapshot)
        elif isinstance(action, AwaitCooldown):
            self._await_cooldown(action)
        elif isinstance(action, LockTarget):
            self._lock_target(action)
        else:
            raise TypeError(f"unsupported action: {action!r}")

    def _idle(self, action: Idle) -> None:
        self._logger.info("executor: no corrections found, backing off %.1fs", action.backoff_ms / 1000.0)
        self.stop_event.wait(action.backoff_ms / 1000.0)

    def _await_cooldown(self, action: AwaitCooldown) -> None:
        remaining_s = action.remaining_ms // 1000
        window = self.reload_window_seconds
        if window is not None and window[0] < remaining_s < window[1]:
            self._logger.info("executor: refreshing page (%ds left)", remaining_s)
            self.browser.reload()
            return
        self._logger.info("executor: waiting for pixel at (%d, %d), %ds left",
                          action.x, action.y, remaining_s)

    def _lock_target(self, action: LockTarget) -> None:
        url = build_target_url(action.x, action.y, base_url=self.base_url,
                               zoom=self.zoom, locale=self.locale)
        self._logger.info(
            "executor: locking on new target (%d, %d) target=%s actual=%s",
            action.x, action.y, action.target_symbol, action.actual_symbol,
        )
        self.browser.navigate(url)

    def resolve_color_code(self, action: CommitPending, snapshot: ConfigSnapshot) -> str:
        """Staged color code, or the commit target's own code when none is staged."""
        code = self.store.get(SELECTED_COLOR_KEY)
        if code:
            return str(code)
        self._logger.warning("executor: no color staged, using %s", action.target_symbol)
        try:
            return snapshot.palette.code_for(action.target_symbol)
        except UnknownColorError as e:
            raise CommitError(f"no color staged and {e}") from e

    def place_pixel(self, action: CommitPending, snapshot: ConfigSnapshot) -> None:
        code = self.resolve_color_code(action, snapshot)
        self._logger.info("executor: placing pixel at (%d, %d) with color %s", action.x, action.y, code)

        # The play button is only shown when the picker is closed
        self.browser.click(f"{STATUS_PILL_SELECTOR} button")
        self.browser.wait(self.click_delay_ms)

        if not self.browser.click(f'{COLOR_PICKER_SELECTOR} button.color[data-color="{code}"]'):
            raise CommitError(f"color button {code!r} not found")
        self.browser.wait(self.click_delay_ms)

        if not self.browser.click(f"{COLOR_PICKER_SELECTOR} button.confirm"):
            raise CommitError("confirm button not found")
