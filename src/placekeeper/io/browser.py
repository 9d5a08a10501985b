"""Browser session around the canvas embed.

Responsibility:
- Own the Playwright browser/page lifecycle.
- Export the live canvas and hand back a FrameSampler.
- Read the viewport coordinate (cx/cy query parameters) and the cooldown
  readout from the status pill.
- Perform navigation, reloads and the clicks the executor asks for.

Playwright CSS selectors pierce open shadow roots, so a descendant selector
like "garlic-bread-color-picker button.confirm" reaches into the picker's
shadow DOM. Canvas export walks the shadow roots explicitly because
toDataURL has to run in the page.

Playwright's sync API is bound to the thread that started it; create, use
and close a BrowserSession from the same thread.
"""
from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlparse

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from ..config.agent import (
    BASE_URL,
    CANVAS_HOST_SELECTOR,
    COOLDOWN_ATTRIBUTE,
    DEFAULT_LOCALE,
    DEFAULT_ZOOM,
    EMBED_SELECTOR,
    SCREEN_MODE,
    STATUS_PILL_SELECTOR,
)
from ..core.errors import SampleError
from ..corrections.model import Point
from .sampler import FrameSampler

logger = logging.getLogger(__name__)

_EXPORT_CANVAS_JS = """([embedSel, hostSel]) => {
    const embed = document.querySelector(embedSel);
    if (!embed || !embed.shadowRoot) return null;
    const host = embed.shadowRoot.querySelector(hostSel);
    if (!host || !host.shadowRoot) return null;
    const canvas = host.shadowRoot.querySelector('canvas');
    return canvas ? canvas.toDataURL('image/png') : null;
}"""


def parse_viewport(url: str) -> Optional[Point]:
    """Extract the focused coordinate from the cx/cy query parameters."""
    params = parse_qs(urlparse(url).query)
    try:
        return Point(int(params["cx"][0]), int(params["cy"][0]))
    except (KeyError, IndexError, ValueError):
        return None


def parse_cooldown(raw: Optional[str]) -> int:
    """Seconds until the next edit; absent or unparsable counts as ready."""
    if raw is None:
        return 0
    try:
        return max(0, int(str(raw).strip()))
    except ValueError:
        return 0


def build_target_url(x: int, y: int, base_url: str = BASE_URL, zoom: int = DEFAULT_ZOOM,
                     locale: str = DEFAULT_LOCALE) -> str:
    query = urlencode({
        "screenmode": SCREEN_MODE,
        "cx": str(x),
        "cy": str(y),
        "px": str(zoom),
        "locale": locale,
    })
    return f"{base_url}?{query}"


class BrowserSession:
    """Thin Playwright wrapper exposing what the decision cycle needs."""

    def __init__(self, start_url: str = BASE_URL, headless: bool = False) -> None:
        self.start_url = start_url
        self.headless = headless
        self._pw = None
        self._browser = None
        self._page = None

    # --------------------------- lifecycle ---------------------------
    def start(self) -> "BrowserSession":
        self._pw = sync_playwright().start()
        try:
            self._browser = self._pw.chromium.launch(headless=self.headless)
            self._page = self._browser.new_page()
            logger.info("browser: opening %s (headless=%s)", self.start_url, self.headless)
            self._page.goto(self.start_url)
        except Exception:
            self.close()
            raise
        return self

    def close(self) -> None:
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._pw is not None:
            self._pw.stop()
            self._pw = None
        self._page = None

    def __enter__(self) -> "BrowserSession":
        return self.start()

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def page(self):
        if self._page is None:
            raise RuntimeError("browser session is not started")
        return self._page

    # --------------------------- readouts ---------------------------
    def current_coordinate(self) -> Optional[Point]:
        return parse_viewport(self.page.url)

    def remaining_cooldown_seconds(self) -> int:
        pill = self.page.locator(STATUS_PILL_SELECTOR).first
        if pill.count() == 0:
            return 0
        return parse_cooldown(pill.get_attribute(COOLDOWN_ATTRIBUTE))

    def capture_sampler(self) -> FrameSampler:
        """Export the canvas and wrap it in a sampler; raises SampleError."""
        try:
            data_url = self.page.evaluate(_EXPORT_CANVAS_JS, [EMBED_SELECTOR, CANVAS_HOST_SELECTOR])
        except PlaywrightError as e:
            raise SampleError(f"canvas export failed: {e}") from e
        if not data_url:
            raise SampleError("canvas is not present on the page yet")
        sampler = FrameSampler.from_data_url(data_url)
        logger.debug("browser: captured canvas %dx%d", sampler.width, sampler.height)
        return sampler

    # --------------------------- actions ---------------------------
    def navigate(self, url: str) -> None:
        logger.debug("browser: navigating to %s", url)
        self.page.goto(url)

    def reload(self) -> None:
        self.page.reload()

    def click(self, selector: str) -> bool:
        """Click the first element matching selector; False when absent."""
        target = self.page.locator(selector).first
        if target.count() == 0:
            return False
        target.click()
        return True

    def wait(self, ms: int) -> None:
        self.page.wait_for_timeout(ms)
