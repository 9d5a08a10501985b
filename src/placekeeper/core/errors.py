"""Error taxonomy for Placekeeper.

Every failure that can abort a decision cycle derives from PlacekeeperError so
the worker loop can log it and move on to the next cycle.
"""
from __future__ import annotations

from typing import Optional


class PlacekeeperError(Exception):
    """Base class for all application errors."""


class ConfigFetchError(PlacekeeperError):
    """Remote configuration could not be fetched or parsed."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url

    def __str__(self) -> str:
        base = super().__str__()
        if self.url:
            return f"{base} (url={self.url})"
        return base


class SampleError(PlacekeeperError):
    """The rendering surface could not be read."""


class CommitError(PlacekeeperError):
    """A UI control required to place a pixel was not found."""


class UnknownColorError(PlacekeeperError, KeyError):
    """A template references a symbol that the palette does not define."""

    def __init__(self, symbol: str) -> None:
        super().__init__(symbol)
        self.symbol = symbol

    def __str__(self) -> str:
        return f"unknown color symbol: {self.symbol!r}"
