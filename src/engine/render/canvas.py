"""
どこで: `engine.render.canvas`。
何を: フレームごとの画像バッファ（H×W×3 uint8）と深度バッファ（H×W float64, -inf 初期化）。
なぜ: Frame Driver がフレーム境界で新しいバッファを用意し、ラスタライザと書き出しで共有するため。
"""

from __future__ import annotations

import numpy as np

from common import settings
from common.types import RGB


def new_screen(size: int | None = None, background: RGB = (0, 0, 0)) -> np.ndarray:
    n = int(size if size is not None else settings.get().IMAGE_SIZE)
    screen = np.empty((n, n, 3), dtype=np.uint8)
    screen[...] = np.asarray(background, dtype=np.uint8)
    return screen


def new_zbuffer(size: int | None = None) -> np.ndarray:
    n = int(size if size is not None else settings.get().IMAGE_SIZE)
    return np.full((n, n), -np.inf, dtype=np.float64)


def clear_screen(screen: np.ndarray, background: RGB = (0, 0, 0)) -> None:
    screen[...] = np.asarray(background, dtype=np.uint8)


def clear_zbuffer(zbuffer: np.ndarray) -> None:
    zbuffer.fill(-np.inf)


__all__ = ["new_screen", "new_zbuffer", "clear_screen", "clear_zbuffer"]
