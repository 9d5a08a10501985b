"""Pytest configuration.

Ensures src/ is on sys.path so tests can import ``placekeeper.*`` without an
editable install, and provides small fakes shared across test modules.
"""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from placekeeper.corrections.model import parse_config_document  # noqa: E402


class GridSampler:
    """Sampler answering from a dict of canvas coordinates, with a default."""

    def __init__(self, pixels=None, default=(255, 255, 255)):
        self.pixels = dict(pixels or {})
        self.default = default
        self.calls = []

    def __call__(self, x, y):
        self.calls.append((x, y))
        return self.pixels.get((x, y), self.default)


@pytest.fixture
def rb_document():
    return {
        "colors": {
            "R": {"code": "r", "rgb": [255, 0, 0]},
            "B": {"code": "b", "rgb": [0, 0, 255]},
        },
        "templates": [
            {"pattern": [["R", "B"], ["_", "R"]], "topLeft": {"x": 10, "y": 20}},
        ],
        "topLeft": {"x": 0, "y": 0},
    }


@pytest.fixture
def rb_snapshot(rb_document):
    return parse_config_document(rb_document)


@pytest.fixture
def make_sampler():
    return GridSampler
