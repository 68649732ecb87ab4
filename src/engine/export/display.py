"""
どこで: `engine.export.display`。
何を: 画像バッファを pyglet ウィンドウに表示し、閉じられるまで待つ（DISPLAY 操作）。
なぜ: 実行途中のフレームを目視確認できるようにするため。

注意:
- pyglet は遅延 import（ヘッドレス実行で DISPLAY を使わない限り OpenGL に触れない）。
"""

from __future__ import annotations

import numpy as np


def show(image: np.ndarray, *, caption: str = "mdlanim") -> None:
    """画像を表示するウィンドウを開き、閉じられるまでブロックする。"""
    try:
        import pyglet
    except ImportError as e:  # pragma: no cover - 実行時依存
        raise RuntimeError(f"pyglet の利用に失敗: {e}") from e

    arr = np.ascontiguousarray(image, dtype=np.uint8)
    height, width = arr.shape[:2]
    window = pyglet.window.Window(width=width, height=height, caption=caption)
    # 負の pitch で「行 0 が上端」の並びをそのまま渡す
    frame = pyglet.image.ImageData(width, height, "RGB", arr.tobytes(), pitch=-width * 3)

    @window.event
    def on_draw() -> None:
        window.clear()
        frame.blit(0, 0)

    pyglet.app.run()


__all__ = ["show"]
