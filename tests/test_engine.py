"""Correction engine: reverse palette lookup and mismatch detection."""

import pytest

from placekeeper.corrections.engine import (
    compute_corrections,
    compute_template_corrections,
    find_color_by_sample,
)
from placekeeper.corrections.model import ColorDefinition, Correction, Palette, Point, Template


def _template(rows, x, y):
    return Template(grid=tuple(tuple(r) for r in rows), anchor=Point(x, y))


def test_find_color_by_sample_exact_match(rb_snapshot):
    palette = rb_snapshot.palette
    for color in palette:
        assert find_color_by_sample(palette, color.rgb) == color.symbol
    assert find_color_by_sample(palette, (1, 2, 3)) is None


def test_find_color_by_sample_first_match_wins():
    palette = Palette([
        ColorDefinition("A", "a", (10, 10, 10)),
        ColorDefinition("B", "b", (10, 10, 10)),
    ])
    assert find_color_by_sample(palette, [10, 10, 10]) == "A"


def test_find_color_by_sample_ignores_alpha(rb_snapshot):
    assert find_color_by_sample(rb_snapshot.palette, (0, 0, 255, 255)) == "B"


def test_reference_scenario(rb_snapshot, make_sampler):
    sampler = make_sampler({
        (10, 20): (0, 0, 255),
        (11, 20): (255, 0, 0),
        (11, 21): (255, 0, 0),
    })
    result = compute_corrections(rb_snapshot.palette, rb_snapshot.templates, rb_snapshot.origin, sampler)
    assert result == [
        Correction(x=10, y=20, target_symbol="R", actual_symbol="B"),
        Correction(x=11, y=20, target_symbol="B", actual_symbol="R"),
    ]
    # Sentinel cell is never sampled
    assert (10, 21) not in sampler.calls


def test_unknown_sample_yields_null_actual(rb_snapshot, make_sampler):
    sampler = make_sampler(default=(12, 34, 56))
    result = compute_corrections(rb_snapshot.palette, rb_snapshot.templates, rb_snapshot.origin, sampler)
    assert [c.actual_symbol for c in result] == [None, None, None]
    assert [(c.x, c.y) for c in result] == [(10, 20), (11, 20), (11, 21)]


@pytest.mark.parametrize("rgb", [(255, 0, 0), (0, 0, 255), (7, 7, 7)])
def test_sentinel_cells_never_produce_corrections(rb_snapshot, make_sampler, rgb):
    template = _template(["__", "__"], 0, 0)
    result = compute_template_corrections(rb_snapshot.palette, template, Point(0, 0), make_sampler(default=rgb))
    assert result == []


def test_origin_shifts_sampling_but_not_reported_coordinates(rb_snapshot, make_sampler):
    template = _template(["R"], 100, 200)
    origin = Point(-500, 50)
    sampler = make_sampler(default=(0, 0, 255))
    result = compute_template_corrections(rb_snapshot.palette, template, origin, sampler)
    assert sampler.calls == [(600, 150)]
    assert result == [Correction(100, 200, "R", "B")]


def test_row_major_and_template_order(rb_snapshot, make_sampler):
    templates = (_template(["RR", "RR"], 0, 0), _template(["B"], 50, 50))
    sampler = make_sampler(default=(1, 1, 1))
    result = compute_corrections(rb_snapshot.palette, templates, Point(0, 0), sampler)
    assert [(c.x, c.y) for c in result] == [(0, 0), (1, 0), (0, 1), (1, 1), (50, 50)]


def test_overlapping_templates_report_independently(rb_snapshot, make_sampler):
    templates = (_template(["R"], 5, 5), _template(["B"], 5, 5))
    sampler = make_sampler(default=(0, 0, 0))
    result = compute_corrections(rb_snapshot.palette, templates, Point(0, 0), sampler)
    assert result == [Correction(5, 5, "R", None), Correction(5, 5, "B", None)]


def test_empty_template_set(rb_snapshot, make_sampler):
    sampler = make_sampler()
    assert compute_corrections(rb_snapshot.palette, (), Point(0, 0), sampler) == []
    assert sampler.calls == []


def test_out_of_range_cells_are_still_sampled(rb_snapshot, make_sampler):
    template = _template(["R"], -1000, -1000)
    sampler = make_sampler(default=(0, 0, 0))
    result = compute_template_corrections(rb_snapshot.palette, template, Point(0, 0), sampler)
    assert sampler.calls == [(-1000, -1000)]
    assert result == [Correction(-1000, -1000, "R", None)]


def test_deterministic_for_identical_samples(rb_snapshot, make_sampler):
    pixels = {(10, 20): (0, 0, 255), (11, 21): (9, 9, 9)}
    first = compute_corrections(rb_snapshot.palette, rb_snapshot.templates, rb_snapshot.origin, make_sampler(pixels))
    second = compute_corrections(rb_snapshot.palette, rb_snapshot.templates, rb_snapshot.origin, make_sampler(pixels))
    assert first == second
