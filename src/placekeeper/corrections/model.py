"""Data model for palettes, templates and corrections.

All types are immutable. A ConfigSnapshot is built in one go from the remote
configuration document by parse_config_document() and then only ever
replaced wholesale, never edited.

Remote document shape::

    {
      "colors":    {"R": {"code": "2", "rgb": [255, 69, 0]}, ...},
      "templates": [{"pattern": ["RR_", "_RR"], "topLeft": {"x": 10, "y": 20}}, ...],
      "topLeft":   {"x": -500, "y": -500}
    }
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Sequence, Tuple

from ..config.agent import NO_CONSTRAINT
from ..core.errors import ConfigFetchError, UnknownColorError

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class ColorDefinition:
    symbol: str
    code: str
    rgb: RGB


class Palette:
    """Read-only, insertion-ordered mapping of symbol -> ColorDefinition."""

    def __init__(self, colors: Sequence[ColorDefinition] = ()) -> None:
        by_symbol = {}
        for color in colors:
            if color.symbol in by_symbol:
                raise ValueError(f"duplicate palette symbol: {color.symbol!r}")
            by_symbol[color.symbol] = color
        self._colors: Mapping[str, ColorDefinition] = MappingProxyType(by_symbol)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._colors

    def __getitem__(self, symbol: str) -> ColorDefinition:
        try:
            return self._colors[symbol]
        except KeyError:
            raise UnknownColorError(symbol) from None

    def __iter__(self) -> Iterator[ColorDefinition]:
        return iter(self._colors.values())

    def __len__(self) -> int:
        return len(self._colors)

    def __repr__(self) -> str:
        return f"Palette({', '.join(self._colors)})"

    def find_by_rgb(self, rgb: Sequence[int]) -> Optional[str]:
        """Return the first symbol whose RGB triple equals rgb exactly."""
        triple = tuple(int(v) for v in rgb[:3])
        for color in self._colors.values():
            if color.rgb == triple:
                return color.symbol
        return None

    def code_for(self, symbol: str) -> str:
        return self[symbol].code


@dataclass(frozen=True)
class Template:
    """Rectangular grid of symbols anchored at a world coordinate."""

    grid: Tuple[Tuple[str, ...], ...]
    anchor: Point

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0


@dataclass(frozen=True)
class Correction:
    x: int
    y: int
    target_symbol: str
    actual_symbol: Optional[str]


@dataclass(frozen=True)
class ConfigSnapshot:
    palette: Palette
    templates: Tuple[Template, ...]
    origin: Point


# --------------------------- parsing ---------------------------

def _require(mapping: Any, key: str, where: str) -> Any:
    if not isinstance(mapping, dict):
        raise ConfigFetchError(f"{where}: expected an object, got {type(mapping).__name__}")
    if key not in mapping:
        raise ConfigFetchError(f"{where}: missing key {key!r}")
    return mapping[key]


def _parse_int(value: Any, where: str) -> int:
    # bool is an int subclass but never a valid coordinate
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigFetchError(f"{where}: expected an integer, got {value!r}")
    return value


def _parse_point(raw: Any, where: str) -> Point:
    return Point(
        _parse_int(_require(raw, "x", where), f"{where}.x"),
        _parse_int(_require(raw, "y", where), f"{where}.y"),
    )


def _parse_color(symbol: Any, raw: Any) -> ColorDefinition:
    where = f"colors[{symbol!r}]"
    if not isinstance(symbol, str) or len(symbol) != 1 or symbol == NO_CONSTRAINT:
        raise ConfigFetchError(f"{where}: symbol must be a single character other than {NO_CONSTRAINT!r}")
    code = _require(raw, "code", where)
    rgb = _require(raw, "rgb", where)
    if not isinstance(rgb, (list, tuple)) or len(rgb) != 3:
        raise ConfigFetchError(f"{where}.rgb: expected three channels, got {rgb!r}")
    channels = tuple(_parse_int(v, f"{where}.rgb") for v in rgb)
    if any(not 0 <= v <= 255 for v in channels):
        raise ConfigFetchError(f"{where}.rgb: channel out of range in {rgb!r}")
    return ColorDefinition(symbol=symbol, code=str(code), rgb=channels)  # type: ignore[arg-type]


def _parse_row(row: Any, where: str) -> Tuple[str, ...]:
    cells = list(row) if isinstance(row, (str, list, tuple)) else None
    if cells is None:
        raise ConfigFetchError(f"{where}: expected a string or list of symbols, got {row!r}")
    for cell in cells:
        if not isinstance(cell, str) or len(cell) != 1:
            raise ConfigFetchError(f"{where}: cell {cell!r} is not a single character")
    return tuple(cells)


def _parse_template(raw: Any, index: int, palette: Palette) -> Template:
    where = f"templates[{index}]"
    pattern = _require(raw, "pattern", where)
    if not isinstance(pattern, list):
        raise ConfigFetchError(f"{where}.pattern: expected a list of rows")
    grid = tuple(_parse_row(row, f"{where}.pattern[{i}]") for i, row in enumerate(pattern))
    widths = {len(row) for row in grid}
    if len(widths) > 1:
        raise ConfigFetchError(f"{where}.pattern: rows have differing lengths {sorted(widths)}")
    unknown = sorted({cell for row in grid for cell in row if cell != NO_CONSTRAINT and cell not in palette})
    if unknown:
        raise ConfigFetchError(f"{where}.pattern: symbols {unknown} are not in the palette")
    return Template(grid=grid, anchor=_parse_point(_require(raw, "topLeft", where), f"{where}.topLeft"))


def parse_config_document(doc: Any) -> ConfigSnapshot:
    """Validate the remote document and build an immutable snapshot.

    Raises ConfigFetchError describing the first malformed part found.
    """
    colors = _require(doc, "colors", "config")
    if not isinstance(colors, dict):
        raise ConfigFetchError("config.colors: expected an object")
    templates = _require(doc, "templates", "config")
    if not isinstance(templates, list):
        raise ConfigFetchError("config.templates: expected a list")

    palette = Palette([_parse_color(symbol, raw) for symbol, raw in colors.items()])
    return ConfigSnapshot(
        palette=palette,
        templates=tuple(_parse_template(raw, i, palette) for i, raw in enumerate(templates)),
        origin=_parse_point(_require(doc, "topLeft", "config"), "config.topLeft"),
    )
