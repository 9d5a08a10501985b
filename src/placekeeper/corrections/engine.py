"""
Pure correction detection (no IO):

- find_color_by_sample: reverse palette lookup of an observed RGB triple
- compute_template_corrections: mismatches for one template
- compute_corrections: mismatches across a whole template set

Template anchors and the origin offset are world coordinates. The sampler
works in canvas-local space, so each cell is sampled at
(anchor + cell offset - origin) and reported at (anchor + cell offset).

The engine never bounds-checks: whatever the sampler answers for a
coordinate outside the surface is compared like any other sample.
"""
from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence

from ..config.agent import NO_CONSTRAINT
from .model import Correction, Palette, Point, Template

Sampler = Callable[[int, int], Sequence[int]]


def find_color_by_sample(palette: Palette, rgb: Sequence[int]) -> Optional[str]:
    """Return the palette symbol whose RGB equals rgb, or None."""
    return palette.find_by_rgb(rgb)


def compute_template_corrections(
    palette: Palette,
    template: Template,
    origin: Point,
    sample: Sampler,
) -> List[Correction]:
    """Return the corrections for one template in row-major order."""
    base_x = template.anchor.x - origin.x
    base_y = template.anchor.y - origin.y

    corrections: List[Correction] = []
    for row, symbols in enumerate(template.grid):
        for col, target in enumerate(symbols):
            if target == NO_CONSTRAINT:
                continue
            actual = palette.find_by_rgb(sample(base_x + col, base_y + row))
            if actual != target:
                corrections.append(Correction(
                    x=template.anchor.x + col,
                    y=template.anchor.y + row,
                    target_symbol=target,
                    actual_symbol=actual,
                ))
    return corrections


def compute_corrections(
    palette: Palette,
    templates: Iterable[Template],
    origin: Point,
    sample: Sampler,
) -> List[Correction]:
    """Return corrections across all templates, in template order.

    Overlapping templates are evaluated independently, so one world
    coordinate may appear once per template that covers it.
    """
    corrections: List[Correction] = []
    for template in templates:
        corrections.extend(compute_template_corrections(palette, template, origin, sample))
    return corrections
