"""
同次座標ジオメトリバッファ（Pending Geometry Buffer）

本モジュールは、プリミティブ生成 → 原点スタック top の適用 → ラスタライザへの受け渡し、の間だけ
存在する一時バッファ `GeometryBuffer` を提供する。

データモデル（不変条件）:
- `points: float64 ndarray (4, N)` — 同次座標の列ベクトル群（行は x, y, z, w）。
- `kind` が `"edges"` なら 2 列で 1 本の線分、`"polygons"` なら 3 列で 1 枚の三角形。
- 列数 N は常に `stride` の倍数。
- 容量は倍々で拡張し、`clear()` は列数を 0 に切り詰めるだけ（メモリは再利用）。

変換:
- `apply(m)` は `points = m @ points` を就地で行う（左乗算）。

直感図（三角形 2 枚）:

    # points (4, 6)
    #   col   0   1   2 | 3   4   5
    #   x    x0  x1  x2 | x3  x4  x5
    #   y    ..  ..  .. | ..  ..  ..
    #   z    ..  ..  .. | ..  ..  ..
    #   w     1   1   1 |  1   1   1
    # 三角形0 = 列 0..2, 三角形1 = 列 3..5
"""

from __future__ import annotations

from typing import Literal

import numpy as np

from common.types import Vec3

Kind = Literal["edges", "polygons"]

_STRIDE: dict[str, int] = {"edges": 2, "polygons": 3}


def _normalize_points(points: np.ndarray) -> np.ndarray:
    """`(N, 3)` のデカルト座標を `(4, N)` の同次座標列へ整形する。"""
    arr = np.asarray(points, dtype=np.float64)
    if arr.ndim == 1:
        if arr.size % 3 != 0:
            raise ValueError("1次元入力の長さは3の倍数である必要があります（(x, y, z) の並び）")
        arr = arr.reshape(-1, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"座標配列の形状が不正です: {arr.shape}")
    cols = np.ones((4, arr.shape[0]), dtype=np.float64)
    cols[:3, :] = arr.T
    return cols


class GeometryBuffer:
    """線分または三角形を同次座標の列として蓄える可変バッファ。"""

    __slots__ = ("kind", "_data", "_count")

    def __init__(self, kind: Kind = "polygons", capacity: int = 64) -> None:
        if kind not in _STRIDE:
            raise ValueError(f"kind は 'edges' か 'polygons': {kind!r}")
        self.kind: Kind = kind
        self._data = np.zeros((4, max(int(capacity), _STRIDE[kind])), dtype=np.float64)
        self._count = 0

    # ── 情報 ───────────────────
    @property
    def stride(self) -> int:
        """1 要素（線分/三角形）あたりの列数。"""
        return _STRIDE[self.kind]

    @property
    def points(self) -> np.ndarray:
        """有効な列 `(4, N)` の読み取り専用ビュー。"""
        view = self._data[:, : self._count]
        view.setflags(write=False)
        return view

    @property
    def is_empty(self) -> bool:
        return self._count == 0

    def __len__(self) -> int:
        """要素（線分/三角形）の数。"""
        return self._count // self.stride

    @property
    def capacity(self) -> int:
        return self._data.shape[1]

    # ── 追加 ───────────────────
    def _reserve(self, extra: int) -> None:
        need = self._count + extra
        if need <= self._data.shape[1]:
            return
        new_cap = self._data.shape[1]
        while new_cap < need:
            new_cap *= 2
        grown = np.zeros((4, new_cap), dtype=np.float64)
        grown[:, : self._count] = self._data[:, : self._count]
        self._data = grown

    def extend(self, points: np.ndarray) -> "GeometryBuffer":
        """`(N, 3)` の頂点列をまとめて追加する（N は stride の倍数）。"""
        cols = _normalize_points(points)
        n = cols.shape[1]
        if n % self.stride != 0:
            raise ValueError(f"{self.kind} の頂点数は {self.stride} の倍数が必要です: {n}")
        self._reserve(n)
        self._data[:, self._count : self._count + n] = cols
        self._count += n
        return self

    def add_edge(self, p0: Vec3, p1: Vec3) -> "GeometryBuffer":
        if self.kind != "edges":
            raise TypeError("add_edge は kind='edges' のバッファのみ")
        return self.extend(np.array([p0, p1], dtype=np.float64))

    def add_polygon(self, p0: Vec3, p1: Vec3, p2: Vec3) -> "GeometryBuffer":
        if self.kind != "polygons":
            raise TypeError("add_polygon は kind='polygons' のバッファのみ")
        return self.extend(np.array([p0, p1, p2], dtype=np.float64))

    # ── 変換/破棄 ─────────────────
    def apply(self, matrix: np.ndarray) -> "GeometryBuffer":
        """`points = matrix @ points` を就地で適用する。"""
        m = np.asarray(matrix, dtype=np.float64)
        if m.shape != (4, 4):
            raise ValueError(f"変換行列は (4, 4) である必要があります: {m.shape}")
        if self._count:
            self._data[:, : self._count] = m @ self._data[:, : self._count]
        return self

    def clear(self) -> None:
        """列数を 0 に切り詰める（確保済み領域は再利用する）。"""
        self._count = 0

    def as_cartesian(self) -> np.ndarray:
        """`(N, 3)` のデカルト座標コピー（w で除算しない。アフィン変換のみを想定）。"""
        return self._data[:3, : self._count].T.copy()

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"GeometryBuffer(kind={self.kind!r}, items={len(self)})"


__all__ = ["GeometryBuffer", "Kind"]
