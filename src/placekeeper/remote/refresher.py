"""Remote configuration refresher.

Fetches the palette/template/origin document over HTTP at most once per
interval and swaps the in-memory snapshot atomically. On any failure the
previous snapshot and refresh timestamp are kept and ConfigFetchError is
raised to the caller.
"""
from __future__ import annotations

import json
import logging
import threading
import time
from typing import Optional

import requests

from ..config.agent import REFRESH_INTERVAL_MS, REQUEST_TIMEOUT_SECONDS
from ..core.errors import ConfigFetchError
from ..corrections.model import ConfigSnapshot, parse_config_document

logger = logging.getLogger(__name__)

_HEADERS = {
    "Accept": "application/json",
    "Cache-Control": "no-cache",
    "User-Agent": "placekeeper/1.0",
}


def now_ms() -> int:
    return int(time.time() * 1000)


class ConfigRefresher:
    """Owns the current ConfigSnapshot behind a single lock-protected slot."""

    def __init__(
        self,
        config_url: str,
        interval_ms: int = REFRESH_INTERVAL_MS,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config_url = config_url
        self.interval_ms = int(interval_ms)
        self.timeout = timeout
        self._session = session or requests.Session()
        self._lock = threading.Lock()
        self._snapshot: Optional[ConfigSnapshot] = None
        self._last_refresh_ms: Optional[int] = None

    @property
    def snapshot(self) -> Optional[ConfigSnapshot]:
        with self._lock:
            return self._snapshot

    @property
    def last_refresh_ms(self) -> Optional[int]:
        with self._lock:
            return self._last_refresh_ms

    def is_due(self, now: int) -> bool:
        last = self.last_refresh_ms
        return last is None or now - last >= self.interval_ms

    def refresh(self, now: Optional[int] = None) -> bool:
        """Fetch a new snapshot if the interval has elapsed.

        Returns True when a new snapshot was installed, False when the call
        was a no-op. Raises ConfigFetchError on transport or parse failure.
        """
        now = now_ms() if now is None else now
        if not self.is_due(now):
            return False

        doc = self._fetch()
        try:
            snapshot = parse_config_document(doc)
        except ConfigFetchError as e:
            e.url = e.url or self.config_url
            raise
        with self._lock:
            self._snapshot = snapshot
            self._last_refresh_ms = now
        logger.info(
            "refresher: loaded %d colors, %d templates, origin=(%d, %d)",
            len(snapshot.palette), len(snapshot.templates), snapshot.origin.x, snapshot.origin.y,
        )
        return True

    def _fetch(self):
        url = self.config_url
        try:
            resp = self._session.get(url, headers=_HEADERS, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise ConfigFetchError(f"config fetch failed: {e}", url=url) from e
        try:
            return resp.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise ConfigFetchError(f"invalid JSON in config: {e}", url=url) from e
