"""共通フィクスチャ。

- 乱数シード固定
- 描画/出力コラボレータの記録用ダミー
- 小さな操作列
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pytest

from common import settings
from mdl import operations as op
from mdl.symtab import SymbolTable


@dataclass
class DrawCall:
    kind: str  # "solid" / "line"
    points: np.ndarray  # (4, N) のコピー
    image_id: int
    args: dict[str, Any] = field(default_factory=dict)


class RecordingRasterizer:
    """draw_* の呼び出しを順に記録する（バッファは呼び出し後に空になるためコピーを保持）。"""

    def __init__(self) -> None:
        self.calls: list[DrawCall] = []

    def draw_solid(self, buffer, image, zbuffer, view, light, ambient, constants) -> None:
        self.calls.append(
            DrawCall(
                "solid",
                buffer.points.copy(),
                id(image),
                {"view": view, "light": light, "ambient": ambient, "constants": constants},
            )
        )

    def draw_line(self, buffer, image, zbuffer, color) -> None:
        self.calls.append(DrawCall("line", buffer.points.copy(), id(image), {"color": color}))


class RecordingExporter:
    """save/show/assemble の呼び出しを `events` に記録する。"""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []
        self.images: list[np.ndarray] = []
        self.assembled: list[tuple[str, list[str]]] = []

    def save(self, image: np.ndarray, filename: str) -> None:
        self.events.append(("save", filename))
        self.images.append(image.copy())

    def show(self, image: np.ndarray) -> None:
        self.events.append(("show", None))

    def assemble(self, basename: str, frames) -> None:
        self.events.append(("assemble", basename))
        self.assembled.append((basename, [str(p) for p in frames]))


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """MDL_* 環境変数の影響を排除して設定を既定値に戻す。"""
    for key in list(os.environ):
        if key.startswith("MDL_"):
            monkeypatch.delenv(key, raising=False)
    settings.reload_from_env()
    yield
    settings.reload_from_env()


@pytest.fixture()
def symbols() -> SymbolTable:
    return SymbolTable()


@pytest.fixture()
def recorder() -> RecordingRasterizer:
    return RecordingRasterizer()


@pytest.fixture()
def exporter() -> RecordingExporter:
    return RecordingExporter()


@pytest.fixture()
def spin_ops() -> tuple[op.Operation, ...]:
    """10 フレームで knob `spin` を 0→360 に変化させ、PUSH/POP 内の球を回す。"""
    return (
        op.Frames(10),
        op.Basename("spin"),
        op.Vary("spin", 0, 9, 0.0, 360.0),
        op.Push(),
        op.Rotate(1, 1.0, "spin"),
        op.Sphere((100.0, 0.0, 0.0), 10.0),
        op.Pop(),
    )
