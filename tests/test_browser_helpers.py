"""URL and readout helpers of the browser session (no browser launched)."""

import pytest

from placekeeper.corrections.model import Point
from placekeeper.io.browser import BrowserSession, build_target_url, parse_cooldown, parse_viewport


def test_parse_viewport_reads_cx_cy():
    url = "https://garlic-bread.reddit.com/embed?screenmode=fullscreen&cx=-120&cy=45&px=8"
    assert parse_viewport(url) == Point(-120, 45)


@pytest.mark.parametrize("url", [
    "https://garlic-bread.reddit.com/embed",
    "https://garlic-bread.reddit.com/embed?cx=10",
    "https://garlic-bread.reddit.com/embed?cx=ten&cy=3",
])
def test_parse_viewport_missing_or_invalid(url):
    assert parse_viewport(url) is None


@pytest.mark.parametrize("raw,expected", [(None, 0), ("0", 0), ("42", 42), (" 7 ", 7), ("soon", 0), ("-3", 0)])
def test_parse_cooldown(raw, expected):
    assert parse_cooldown(raw) == expected


def test_build_target_url_round_trips_through_viewport():
    url = build_target_url(300, -20, base_url="https://example.invalid/embed", zoom=4, locale="en-US")
    assert url.startswith("https://example.invalid/embed?screenmode=fullscreen&")
    assert "px=4" in url and "locale=en-US" in url
    assert parse_viewport(url) == Point(300, -20)


def test_session_requires_start():
    with pytest.raises(RuntimeError):
        BrowserSession().current_coordinate()


class _FakeChromium:
    def launch(self, headless=False):
        raise RuntimeError("chromium missing")


class _FakePlaywright:
    def __init__(self):
        self.chromium = _FakeChromium()
        self.stopped = False

    def stop(self):
        self.stopped = True


class _FakeManager:
    def __init__(self, pw):
        self.pw = pw

    def start(self):
        return self.pw


def test_start_releases_playwright_on_failure(monkeypatch):
    from placekeeper.io import browser as browser_mod

    pw = _FakePlaywright()
    monkeypatch.setattr(browser_mod, "sync_playwright", lambda: _FakeManager(pw))
    session = BrowserSession(start_url="https://example.invalid/embed", headless=True)
    with pytest.raises(RuntimeError):
        session.start()
    assert pw.stopped
    with pytest.raises(RuntimeError):
        session.current_coordinate()
