from __future__ import annotations

from typing import Any

import numpy as np

from common.types import Vec3
from engine.core.geometry import GeometryBuffer

from .registry import shape, target_buffer

# 頂点インデックス (ix, iy, iz): ix=1 は +width、iy=1 は -height、iz=1 は -depth
# 各面は外側から見て反時計回りの四角形
_FACES: tuple[tuple[tuple[int, int, int], ...], ...] = (
    ((0, 0, 0), (0, 1, 0), (1, 1, 0), (1, 0, 0)),  # 手前 (+z)
    ((0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1)),  # 奥 (-z)
    ((1, 0, 0), (1, 1, 0), (1, 1, 1), (1, 0, 1)),  # 右 (+x)
    ((0, 0, 1), (0, 1, 1), (0, 1, 0), (0, 0, 0)),  # 左 (-x)
    ((0, 0, 1), (0, 0, 0), (1, 0, 0), (1, 0, 1)),  # 上 (+y)
    ((0, 1, 0), (0, 1, 1), (1, 1, 1), (1, 1, 0)),  # 下 (-y)
)

_CORNERS = np.array(
    [corner for quad in _FACES for corner in (quad[0], quad[1], quad[2], quad[0], quad[2], quad[3])],
    dtype=np.float64,
)


@shape
def box(
    *,
    d0: Vec3 = (0.0, 0.0, 0.0),
    d1: Vec3 = (1.0, 1.0, 1.0),
    into: GeometryBuffer | None = None,
    **params: Any,
) -> GeometryBuffer:
    """直方体（三角形 12 枚）を生成します。

    Parameters
    ----------
    d0 : Vec3
        左上手前の角 (x, y, z)。
    d1 : Vec3
        (width, height, depth)。+x / -y / -z 方向へ伸びる。
    """
    origin = np.asarray(d0, dtype=np.float64)
    extent = np.asarray(d1, dtype=np.float64) * np.array([1.0, -1.0, -1.0])
    buf = target_buffer(into, "polygons")
    return buf.extend(origin + _CORNERS * extent)
