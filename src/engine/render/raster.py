"""
どこで: `engine.render.raster`。
何を: ラスタライザの境界契約 `Rasterizer`（Protocol）と、既定実装 `WireframeRasterizer`。
なぜ: 走査変換/シェーディングは外部コラボレータとして差し替え可能に保ちつつ、
      CLI 単体でも目視できるフレームを出力できるようにするため。

既定実装の方針:
- `draw_solid` は視点ベクトル側を向く三角形（背面カリング）の輪郭のみを描く。
  輪郭色はマテリアルの diffuse 係数 × 255（光源モデルは持たない）。
- `draw_line` は指定色で線分を描く。
- どちらも深度バッファで z テスト（大きい z が手前）を行う。
- 画面座標の y は上向き（行 = height - 1 - y）。
"""

from __future__ import annotations

from typing import Protocol

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from common.types import RGB, Vec3
from engine.core.geometry import GeometryBuffer
from mdl.symtab import Constants

from .types import Light


class Rasterizer(Protocol):
    """Interpreter が呼び出す描画コラボレータ。"""

    def draw_solid(
        self,
        buffer: GeometryBuffer,
        image: np.ndarray,
        zbuffer: np.ndarray,
        view: Vec3,
        light: Light,
        ambient: RGB,
        constants: Constants,
    ) -> None: ...

    def draw_line(
        self,
        buffer: GeometryBuffer,
        image: np.ndarray,
        zbuffer: np.ndarray,
        color: RGB,
    ) -> None: ...


@njit(cache=True)
def _plot_segments(
    image: np.ndarray,
    zbuffer: np.ndarray,
    starts: np.ndarray,
    ends: np.ndarray,
    colors: np.ndarray,
) -> None:
    """線分列を DDA で z テスト付きに描く（`starts/ends` は (N, 3)、`colors` は (N, 3) uint8）。"""
    height = image.shape[0]
    width = image.shape[1]
    for s in range(starts.shape[0]):
        x0, y0, z0 = starts[s, 0], starts[s, 1], starts[s, 2]
        dx = ends[s, 0] - x0
        dy = ends[s, 1] - y0
        dz = ends[s, 2] - z0
        n = int(max(abs(dx), abs(dy)))
        if n < 1:
            n = 1
        for t in range(n + 1):
            f = t / n
            x = int(np.floor(x0 + dx * f + 0.5))
            y = int(np.floor(y0 + dy * f + 0.5))
            if x < 0 or x >= width or y < 0 or y >= height:
                continue
            z = z0 + dz * f
            row = height - 1 - y
            if z > zbuffer[row, x]:
                zbuffer[row, x] = z
                image[row, x, 0] = colors[s, 0]
                image[row, x, 1] = colors[s, 1]
                image[row, x, 2] = colors[s, 2]


def front_facing(triangles: np.ndarray, view: Vec3) -> np.ndarray:
    """`(T, 3, 3)` の三角形のうち、法線が視点ベクトル側を向くもののマスク。"""
    if triangles.shape[0] == 0:
        return np.zeros(0, dtype=bool)
    normals = np.cross(triangles[:, 1] - triangles[:, 0], triangles[:, 2] - triangles[:, 0])
    return normals @ np.asarray(view, dtype=np.float64) > 0


def _color_array(color: RGB, n: int) -> np.ndarray:
    rgb = np.clip(np.asarray(color, dtype=np.float64), 0, 255).astype(np.uint8)
    return np.ascontiguousarray(np.broadcast_to(rgb, (n, 3)))


class WireframeRasterizer:
    """背面カリング済み三角形の輪郭と線分を描く最小ラスタライザ。"""

    def draw_solid(
        self,
        buffer: GeometryBuffer,
        image: np.ndarray,
        zbuffer: np.ndarray,
        view: Vec3,
        light: Light,
        ambient: RGB,
        constants: Constants,
    ) -> None:
        if buffer.is_empty:
            return
        tris = buffer.points[:3].T.reshape(-1, 3, 3)
        tris = tris[front_facing(tris, view)]
        if tris.shape[0] == 0:
            return
        starts = np.ascontiguousarray(tris.reshape(-1, 3))
        ends = np.ascontiguousarray(tris[:, [1, 2, 0], :].reshape(-1, 3))
        tint = tuple(int(round(k * 255)) for k in constants.diffuse)
        _plot_segments(image, zbuffer, starts, ends, _color_array(tint, starts.shape[0]))

    def draw_line(
        self,
        buffer: GeometryBuffer,
        image: np.ndarray,
        zbuffer: np.ndarray,
        color: RGB,
    ) -> None:
        if buffer.is_empty:
            return
        pts = buffer.points[:3].T
        starts = np.ascontiguousarray(pts[0::2])
        ends = np.ascontiguousarray(pts[1::2])
        _plot_segments(image, zbuffer, starts, ends, _color_array(color, starts.shape[0]))


__all__ = ["Rasterizer", "WireframeRasterizer", "front_facing"]
