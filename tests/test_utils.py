import math
from types import SimpleNamespace

import pytest

from retro_space.utils import aabb_overlap, clamp, is_finite, normalize


def box(x, y, w, h):
    return SimpleNamespace(x=x, y=y, width=w, height=h)


def test_overlapping_boxes():
    assert aabb_overlap(box(0, 0, 10, 10), box(5, 5, 10, 10))
    assert aabb_overlap(box(5, 5, 10, 10), box(0, 0, 10, 10))


def test_contained_box_overlaps():
    assert aabb_overlap(box(0, 0, 100, 100), box(40, 40, 3, 3))


def test_touching_edges_do_not_overlap():
    assert not aabb_overlap(box(0, 0, 10, 10), box(10, 0, 10, 10))
    assert not aabb_overlap(box(0, 0, 10, 10), box(0, 10, 10, 10))


def test_single_axis_overlap_is_not_enough():
    assert not aabb_overlap(box(0, 0, 10, 10), box(5, 20, 10, 10))
    assert not aabb_overlap(box(0, 0, 10, 10), box(20, 5, 10, 10))


def test_clamp():
    assert clamp(-1, 0, 5) == 0
    assert clamp(7, 0, 5) == 5
    assert clamp(3, 0, 5) == 3


def test_normalize():
    x, y = normalize(3.0, 4.0)
    assert x == pytest.approx(0.6)
    assert y == pytest.approx(0.8)
    assert normalize(0.0, 0.0) == (0.0, 0.0)


def test_is_finite():
    assert is_finite(1.0, -2.0, 0.0)
    assert not is_finite(1.0, math.nan)
    assert not is_finite(math.inf)
