"""Tests for ``Rect`` and the clipping helper."""

import pytest

from tilemark.geometry import Rect, TileLayout, clip


def test_rect_edges_and_box():
    rect = Rect(2, 3, 10, 5)
    assert rect.right == 12
    assert rect.bottom == 8
    assert rect.box() == (2, 3, 12, 8)


def test_negative_size_is_rejected():
    with pytest.raises(ValueError):
        Rect(0, 0, -1, 4)


def test_intersect_overlapping():
    assert Rect(0, 0, 10, 10).intersect(Rect(5, -5, 10, 10)) == Rect(5, 0, 5, 5)


def test_intersect_disjoint_is_empty():
    assert Rect(0, 0, 10, 10).intersect(Rect(10, 0, 5, 5)).is_empty()


def test_translate():
    assert Rect(1, 1, 2, 2).translate(-3, 4) == Rect(-2, 5, 2, 2)


def test_clip_source_hanging_over_every_edge():
    crop, position = clip((1024, 768), (1300, 850), (-138, -41))
    assert position == (0, 0)
    assert crop == Rect(138, 41, 1024, 768)


def test_clip_source_inside_destination():
    crop, position = clip((100, 100), (20, 10), (5, 7))
    assert crop == Rect(0, 0, 20, 10)
    assert position == (5, 7)


def test_clip_partial_overlap_on_right():
    crop, position = clip((100, 100), (50, 50), (80, -10))
    assert crop == Rect(0, 10, 20, 40)
    assert position == (80, 0)


def test_clip_without_overlap_returns_none():
    assert clip((10, 10), (5, 5), (-5, 0)) is None
    assert clip((10, 10), (5, 5), (10, 10)) is None


def test_tile_layout_mosaic_size():
    layout = TileLayout(columns=13, rows=17, offset_x=-138, offset_y=-41, tile_width=100, tile_height=50)
    assert layout.mosaic_size == (1300, 850)
