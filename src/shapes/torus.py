from __future__ import annotations

from typing import Any

import numpy as np

from common import settings
from common.types import Vec3
from engine.core.geometry import GeometryBuffer

from .base import grid_triangles
from .registry import shape, target_buffer


def _torus_grid(d: Vec3, r0: float, r1: float, steps: int) -> np.ndarray:
    """トーラス格子 `(steps, steps, 3)`。行は y 軸まわりの角度、列は管断面の角度。"""
    cx, cy, cz = d
    ring = 2.0 * np.pi * np.arange(steps, dtype=np.float64) / steps
    tube = 2.0 * np.pi * np.arange(steps, dtype=np.float64) / steps
    phi, theta = np.meshgrid(ring, tube, indexing="ij")
    reach = r0 * np.cos(theta) + r1
    grid = np.empty((steps, steps, 3), dtype=np.float64)
    grid[..., 0] = np.cos(phi) * reach + cx
    grid[..., 1] = r0 * np.sin(theta) + cy
    grid[..., 2] = -np.sin(phi) * reach + cz
    return grid


@shape
def torus(
    *,
    d: Vec3 = (0.0, 0.0, 0.0),
    r0: float = 0.25,
    r1: float = 1.0,
    step: int | None = None,
    into: GeometryBuffer | None = None,
    **params: Any,
) -> GeometryBuffer:
    """トーラスを生成します（`r0` は管の半径、`r1` は中心から管中心までの半径）。"""
    steps = int(step if step is not None else settings.get().STEP_3D)
    if steps < 3:
        raise ValueError(f"step は 3 以上: {steps}")
    buf = target_buffer(into, "polygons")
    # (ring, tube) の順のパラメータ化は内向きになるため巻き方向を反転する
    tris = grid_triangles(_torus_grid(d, float(r0), float(r1), steps), wrap_cols=True, flip=True)
    return buf.extend(tris)
