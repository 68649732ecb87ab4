from __future__ import annotations

from typing import Any

import numpy as np

from common import settings
from common.types import Vec3
from engine.core.geometry import GeometryBuffer

from .base import grid_triangles
from .registry import shape, target_buffer


def _sphere_grid(d: Vec3, r: float, steps: int) -> np.ndarray:
    """緯度経度格子 `(steps, steps + 1, 3)` を生成。

    - 行 i は x 軸まわりの回転角 `2π i / steps`（周回）。
    - 列 j は半円の角度 `π j / steps`（j=0 と j=steps が両極）。
    """
    cx, cy, cz = d
    rot = 2.0 * np.pi * np.arange(steps, dtype=np.float64) / steps
    circ = np.pi * np.arange(steps + 1, dtype=np.float64) / steps
    phi, theta = np.meshgrid(rot, circ, indexing="ij")
    grid = np.empty((steps, steps + 1, 3), dtype=np.float64)
    grid[..., 0] = r * np.cos(theta) + cx
    grid[..., 1] = r * np.sin(theta) * np.cos(phi) + cy
    grid[..., 2] = r * np.sin(theta) * np.sin(phi) + cz
    return grid


@shape
def sphere(
    *,
    d: Vec3 = (0.0, 0.0, 0.0),
    r: float = 1.0,
    step: int | None = None,
    into: GeometryBuffer | None = None,
    **params: Any,
) -> GeometryBuffer:
    """球を三角形メッシュとしてバッファへ追加します。

    Parameters
    ----------
    d : Vec3
        中心座標。
    r : float
        半径。
    step : int | None
        分割数（緯度・経度とも）。None なら `settings.STEP_3D`。
    into : GeometryBuffer | None
        追記先（kind='polygons'）。None なら新規バッファ。
    """
    steps = int(step if step is not None else settings.get().STEP_3D)
    if steps < 3:
        raise ValueError(f"step は 3 以上: {steps}")
    buf = target_buffer(into, "polygons")
    tris = grid_triangles(_sphere_grid(d, float(r), steps), wrap_cols=False, skip_poles=True)
    return buf.extend(tris)
