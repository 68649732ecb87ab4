from __future__ import annotations

import numpy as np
import pytest

from engine.core.geometry import GeometryBuffer
from engine.core.matrix import make_translate


def test_add_edge_stores_homogeneous_columns() -> None:
    buf = GeometryBuffer("edges")
    buf.add_edge((1, 2, 3), (4, 5, 6))
    assert len(buf) == 1
    np.testing.assert_array_equal(
        buf.points, np.array([[1, 4], [2, 5], [3, 6], [1, 1]], dtype=np.float64)
    )


def test_extend_requires_multiple_of_stride() -> None:
    buf = GeometryBuffer("polygons")
    with pytest.raises(ValueError):
        buf.extend(np.zeros((4, 3)))
    buf.extend(np.zeros((6, 3)))
    assert len(buf) == 2


def test_add_methods_check_kind() -> None:
    with pytest.raises(TypeError):
        GeometryBuffer("polygons").add_edge((0, 0, 0), (1, 1, 1))
    with pytest.raises(TypeError):
        GeometryBuffer("edges").add_polygon((0, 0, 0), (1, 0, 0), (0, 1, 0))
    with pytest.raises(ValueError):
        GeometryBuffer("points")  # type: ignore[arg-type]


def test_apply_left_multiplies_in_place() -> None:
    buf = GeometryBuffer("polygons")
    buf.add_polygon((0, 0, 0), (1, 0, 0), (0, 1, 0))
    buf.apply(make_translate(10, 0, -1))
    np.testing.assert_allclose(buf.as_cartesian(), [[10, 0, -1], [11, 0, -1], [10, 1, -1]])


def test_clear_truncates_but_keeps_capacity() -> None:
    buf = GeometryBuffer("edges", capacity=2)
    for i in range(10):
        buf.add_edge((i, 0, 0), (i, 1, 0))
    cap = buf.capacity
    assert cap >= 20
    buf.clear()
    assert buf.is_empty and len(buf) == 0
    assert buf.points.shape == (4, 0)
    assert buf.capacity == cap


def test_points_view_is_read_only() -> None:
    buf = GeometryBuffer("edges")
    buf.add_edge((0, 0, 0), (1, 1, 1))
    with pytest.raises(ValueError):
        buf.points[0, 0] = 5.0
