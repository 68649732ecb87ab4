"""
シェイプ共通の三角形分割ヘルパ

概要:
- 球/トーラスはどちらも (i, j) の 2 次元パラメータ格子上の点列として表せる。
- `grid_triangles` は格子の各セルを 2 枚の三角形に分割し、外向き（反時計回り）に並べて返す。

規約:
- 格子 `grid` は `(rows, cols, 3)`。行方向（i）は常に周回する（最後の行の次は 0 行目）。
- `wrap_cols=True` なら列方向も周回（トーラス）。False なら最後の列で閉じない（球の極）。
- `skip_poles=True` のとき、極で潰れる退化三角形を除外する。
- `flip=True` は巻き方向を反転する（パラメータ化の向きが内向きになる形状用）。
"""

from __future__ import annotations

import numpy as np
from numba import njit  # type: ignore[attr-defined]


@njit(cache=True)
def _grid_triangles(
    grid: np.ndarray, wrap_cols: bool, skip_poles: bool, flip: bool
) -> np.ndarray:
    rows = grid.shape[0]
    cols = grid.shape[1]
    cells = cols if wrap_cols else cols - 1
    out = np.empty((rows * cells * 6, 3), dtype=np.float64)
    k = 0
    for i in range(rows):
        i1 = (i + 1) % rows
        for j in range(cells):
            j1 = (j + 1) % cols
            a = grid[i, j]
            b = grid[i, j1]
            c = grid[i1, j1]
            d = grid[i1, j]
            if not (skip_poles and j == cells - 1):
                out[k] = a
                if flip:
                    out[k + 1] = c
                    out[k + 2] = b
                else:
                    out[k + 1] = b
                    out[k + 2] = c
                k += 3
            if not (skip_poles and j == 0):
                out[k] = a
                if flip:
                    out[k + 1] = d
                    out[k + 2] = c
                else:
                    out[k + 1] = c
                    out[k + 2] = d
                k += 3
    return out[:k]


def grid_triangles(
    grid: np.ndarray, *, wrap_cols: bool, skip_poles: bool = False, flip: bool = False
) -> np.ndarray:
    """格子点 `(rows, cols, 3)` を三角形列 `(3T, 3)` に変換する。"""
    arr = np.ascontiguousarray(grid, dtype=np.float64)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError(f"grid は (rows, cols, 3) である必要があります: {arr.shape}")
    if arr.shape[0] == 0 or arr.shape[1] < 2:
        return np.empty((0, 3), dtype=np.float64)
    return _grid_triangles(arr, bool(wrap_cols), bool(skip_poles), bool(flip))


__all__ = ["grid_triangles"]
