"""
どこで: `engine.core.matrix`。
何を: 4×4 同次変換行列（平行移動/拡大縮小/軸回転）の生成と合成 `compose(a, b) = a @ b`。
なぜ: 原点スタックの更新（top × transform）とジオメトリへの適用（top × points）を同じ規約で行うため。

規約:
- 列ベクトル規約。点は `(x, y, z, 1)` を列として持ち、`M @ p` で変換する。
- 角度はラジアン。
"""

from __future__ import annotations

import numpy as np


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float64)


def make_translate(x: float, y: float, z: float) -> np.ndarray:
    m = identity()
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return m


def make_scale(x: float, y: float, z: float) -> np.ndarray:
    m = identity()
    m[0, 0] = x
    m[1, 1] = y
    m[2, 2] = z
    return m


def make_rot_x(theta: float) -> np.ndarray:
    c, s = np.cos(theta), np.sin(theta)
    m = identity()
    m[1, 1], m[1, 2] = c, -s
    m[2, 1], m[2, 2] = s, c
    return m


def make_rot_y(theta: float) -> np.ndarray:
    c, s = np.cos(theta), np.sin(theta)
    m = identity()
    m[0, 0], m[0, 2] = c, s
    m[2, 0], m[2, 2] = -s, c
    return m


def make_rot_z(theta: float) -> np.ndarray:
    c, s = np.cos(theta), np.sin(theta)
    m = identity()
    m[0, 0], m[0, 1] = c, -s
    m[1, 0], m[1, 1] = s, c
    return m


def make_rotation(axis: int, theta: float) -> np.ndarray:
    """軸番号（0=x, 1=y, それ以外=z）で回転行列を選ぶ。"""
    if axis == 0:
        return make_rot_x(theta)
    if axis == 1:
        return make_rot_y(theta)
    return make_rot_z(theta)


def compose(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """行列積 `a × b`（新しい配列を返す）。"""
    return np.asarray(a, dtype=np.float64) @ np.asarray(b, dtype=np.float64)


__all__ = [
    "identity",
    "make_translate",
    "make_scale",
    "make_rot_x",
    "make_rot_y",
    "make_rot_z",
    "make_rotation",
    "compose",
]
