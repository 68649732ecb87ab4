"""
どこで: `engine.export.service`。
何を: Interpreter / Frame Driver が呼ぶ I/O コラボレータの契約 `Exporter` と既定実装 `FileExporter`。
なぜ: SAVE（画像保存）・DISPLAY（表示）・アニメーション組み立てを 1 つの差し替え点にまとめ、
      テストでは記録用の偽物を注入できるようにするため。
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

import numpy as np

from . import animation, display, image


class Exporter(Protocol):
    def save(self, image: np.ndarray, filename: str) -> None: ...

    def show(self, image: np.ndarray) -> None: ...

    def assemble(self, basename: str, frames: Sequence[Path]) -> None: ...


class FileExporter:
    """ファイルシステムへ書き出す既定の Exporter。"""

    def __init__(self, output_dir: str | Path | None = None) -> None:
        self.output_dir = Path(output_dir) if output_dir is not None else None

    def save(self, image_buf: np.ndarray, filename: str) -> None:
        image.save_image(image_buf, filename)

    def show(self, image_buf: np.ndarray) -> None:
        display.show(image_buf)

    def assemble(self, basename: str, frames: Sequence[Path]) -> None:
        animation.assemble(basename, frames, directory=self.output_dir)


__all__ = ["Exporter", "FileExporter"]
