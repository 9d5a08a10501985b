"""Remote configuration refresher with a fake HTTP session."""

import json

import pytest
import requests

from placekeeper.core.errors import ConfigFetchError
from placekeeper.remote.refresher import ConfigRefresher

URL = "https://example.invalid/config.json"


class FakeResponse:
    def __init__(self, payload=None, status=200, text=None):
        self.status_code = status
        self.text = text if text is not None else json.dumps(payload)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error", response=None)

    def json(self):
        return json.loads(self.text)


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = 0

    def get(self, url, headers=None, timeout=None):
        self.calls += 1
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def test_first_refresh_installs_snapshot(rb_document):
    session = FakeSession(FakeResponse(rb_document))
    refresher = ConfigRefresher(URL, session=session)
    assert refresher.snapshot is None
    assert refresher.refresh(now=1_000) is True
    assert refresher.snapshot.origin.x == 0
    assert refresher.last_refresh_ms == 1_000


def test_refresh_is_noop_within_interval(rb_document):
    session = FakeSession(FakeResponse(rb_document), FakeResponse(rb_document))
    refresher = ConfigRefresher(URL, interval_ms=60_000, session=session)
    refresher.refresh(now=0)
    assert refresher.refresh(now=59_999) is False
    assert session.calls == 1
    assert refresher.refresh(now=60_000) is True
    assert session.calls == 2


def test_snapshot_replaced_wholesale(rb_document):
    updated = json.loads(json.dumps(rb_document))
    updated["colors"] = {"G": {"code": "g", "rgb": [0, 255, 0]}}
    updated["templates"] = []
    updated["topLeft"] = {"x": -10, "y": -10}
    refresher = ConfigRefresher(URL, interval_ms=0, session=FakeSession(FakeResponse(rb_document), FakeResponse(updated)))
    refresher.refresh(now=0)
    first = refresher.snapshot
    refresher.refresh(now=1)
    second = refresher.snapshot
    assert "R" not in second.palette and "G" in second.palette
    assert second.templates == ()
    assert (second.origin.x, second.origin.y) == (-10, -10)
    # Earlier snapshot object is untouched
    assert "R" in first.palette


@pytest.mark.parametrize("failure", [
    requests.exceptions.ConnectionError("boom"),
    FakeResponse(status=503, text="unavailable"),
    FakeResponse(text="{not json"),
    FakeResponse({"colors": {}}),
])
def test_failure_keeps_previous_state(rb_document, failure):
    refresher = ConfigRefresher(URL, interval_ms=10, session=FakeSession(FakeResponse(rb_document), failure))
    refresher.refresh(now=0)
    before = refresher.snapshot
    with pytest.raises(ConfigFetchError) as excinfo:
        refresher.refresh(now=100)
    assert excinfo.value.url == URL
    assert refresher.snapshot is before
    assert refresher.last_refresh_ms == 0
