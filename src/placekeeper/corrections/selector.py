"""Target selection: decide the single next action of a decision cycle.

The decision is evaluated in this order:
1. No corrections -> Idle with a random backoff.
2. A correction sits at the current viewport coordinate and the cooldown
   has expired -> CommitPending.
3. Same, but the cooldown is still running -> stage its color and
   AwaitCooldown.
4. Otherwise pick one correction uniformly at random, stage its color and
   LockTarget so the viewport is moved onto it.

Randomness comes from the injected ``rng`` so tests can seed it.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from ..config.agent import IDLE_BACKOFF_RANGE_MS, SELECTED_COLOR_KEY
from .model import Correction, Palette, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    backoff_ms: int


@dataclass(frozen=True)
class CommitPending:
    x: int
    y: int
    target_symbol: str


@dataclass(frozen=True)
class AwaitCooldown:
    x: int
    y: int
    target_symbol: str
    remaining_ms: int


@dataclass(frozen=True)
class LockTarget:
    x: int
    y: int
    target_symbol: str
    actual_symbol: Optional[str]


Action = Union[Idle, CommitPending, AwaitCooldown, LockTarget]


def find_current(corrections: Sequence[Correction], current: Optional[Point]) -> Optional[Correction]:
    """First correction located at the current viewport coordinate."""
    if current is None:
        return None
    for correction in corrections:
        if correction.x == current.x and correction.y == current.y:
            return correction
    return None


def select_action(
    corrections: Sequence[Correction],
    current: Optional[Point],
    remaining_cooldown_ms: int,
    *,
    palette: Palette,
    store,
    rng: random.Random,
    backoff_range_ms: Tuple[int, int] = IDLE_BACKOFF_RANGE_MS,
) -> Action:
    """Pick the next action and stage the selected color in ``store``.

    ``store`` only needs ``set(key, value)``; the staged value is the
    palette display code of the target symbol. Raises UnknownColorError if
    a staged target symbol is missing from the palette.

    The Idle backoff is drawn from the half-open range ``lo <= backoff < hi``;
    equal bounds always yield ``lo``.
    """
    if not corrections:
        lo, hi = backoff_range_ms
        if hi <= lo:
            return Idle(backoff_ms=lo)
        return Idle(backoff_ms=rng.randrange(lo, hi))

    match = find_current(corrections, current)
    if match is not None:
        if remaining_cooldown_ms <= 0:
            return CommitPending(match.x, match.y, match.target_symbol)
        store.set(SELECTED_COLOR_KEY, palette.code_for(match.target_symbol))
        return AwaitCooldown(match.x, match.y, match.target_symbol, remaining_cooldown_ms)

    target = corrections[rng.randrange(len(corrections))]
    store.set(SELECTED_COLOR_KEY, palette.code_for(target.target_symbol))
    logger.debug("selector: locked %s out of %d corrections", target, len(corrections))
    return LockTarget(target.x, target.y, target.target_symbol, target.actual_symbol)
