"""
どこで: `engine.core.stack`。
何を: 4×4 同次変換の「原点スタック」。push は top の複製、pop は top の除去、
      `transform_top(m)` は `top = top × m` を就地で行う。
なぜ: 入れ子になった局所座標系を 1 本のスタックで表し、フレームごとに作り直すため。

不変条件:
- 解釈中にスタックが空になることはない（生成時に恒等行列 1 枚）。
- 最後の 1 枚に対する pop は `StackUnderflowError`（スタックは変更しない）。
"""

from __future__ import annotations

import numpy as np

from common.errors import StackUnderflowError

from .matrix import compose, identity


class OriginStack:
    """座標系スタック。1 フレームの解釈が排他的に所有する。"""

    __slots__ = ("_frames",)

    def __init__(self) -> None:
        self._frames: list[np.ndarray] = [identity()]

    @property
    def depth(self) -> int:
        return len(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def peek(self) -> np.ndarray:
        """現在の top（参照）。"""
        return self._frames[-1]

    def push(self) -> None:
        """top を複製して積む（以後、子座標系として独立に変更できる）。"""
        self._frames.append(self._frames[-1].copy())

    def pop(self) -> np.ndarray:
        """top を取り除き、親座標系に戻す。"""
        if len(self._frames) <= 1:
            raise StackUnderflowError(len(self._frames))
        return self._frames.pop()

    def transform_top(self, matrix: np.ndarray) -> np.ndarray:
        """`top = top × matrix` として top を置き換え、新しい top を返す。"""
        self._frames[-1] = compose(self._frames[-1], matrix)
        return self._frames[-1]

    def reset(self) -> None:
        """恒等行列 1 枚の状態に戻す。"""
        self._frames = [identity()]


__all__ = ["OriginStack"]
