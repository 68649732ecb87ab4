"""
どこで: `engine.runtime` のフレーム状態。
何を: 1 フレームの解釈が排他的に所有する状態（原点スタック・画像/深度バッファ・ジオメトリバッファ）。
なぜ: フレーム境界で `reset` して初期状態に戻し、フレーム間で状態が漏れないことを型で明示するため。
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from engine.core.geometry import GeometryBuffer
from engine.core.stack import OriginStack
from engine.render.canvas import clear_screen, clear_zbuffer, new_screen, new_zbuffer


@dataclass
class FrameState:
    """1 フレーム分の可変状態。"""

    index: int
    image: np.ndarray
    zbuffer: np.ndarray
    stack: OriginStack = field(default_factory=OriginStack)
    polygons: GeometryBuffer = field(default_factory=lambda: GeometryBuffer("polygons"))
    edges: GeometryBuffer = field(default_factory=lambda: GeometryBuffer("edges"))

    @classmethod
    def new(cls, index: int = 0, size: int | None = None) -> "FrameState":
        """恒等行列 1 枚のスタックと空の画像/深度バッファで初期化する。"""
        return cls(index=index, image=new_screen(size), zbuffer=new_zbuffer(size))

    def reset(self, index: int) -> None:
        """確保済みのバッファを再利用して `new` 直後と同じ状態に戻す。"""
        self.index = index
        self.stack.reset()
        clear_screen(self.image)
        clear_zbuffer(self.zbuffer)
        self.polygons.clear()
        self.edges.clear()


__all__ = ["FrameState"]
