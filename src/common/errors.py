"""
どこで: `common.errors`。
何を: インタプリタ全体で共有する例外階層（`MdlError` を根とする）。
なぜ: 致命的条件（VARY だけで FRAMES が無い）と呼び出し側契約違反（スタック下溢・未定義名・
      範囲外フレーム）を型で区別し、CLI 層で一括して扱えるようにするため。
"""

from __future__ import annotations


class MdlError(Exception):
    """本パッケージが送出する例外の基底。"""


class AnimationConfigError(MdlError):
    """アニメーション設定が解決できない（致命的。フレーム描画前に停止する）。"""


class StackUnderflowError(MdlError, IndexError):
    """恒等行列 1 枚だけが残った状態で POP した。"""

    def __init__(self, depth: int = 1) -> None:
        super().__init__(f"pop on origin stack with depth {depth}: the base frame cannot be removed")
        self.depth = depth


class UnknownSymbolError(MdlError, KeyError):
    """シンボルテーブルに存在しない knob / constants 名を参照した。"""

    def __init__(self, name: str, kind: str = "knob") -> None:
        super().__init__(f"unknown {kind}: {name!r}")
        self.name = name
        self.kind = kind

    def __str__(self) -> str:
        # KeyError は repr で包むため、メッセージをそのまま返す
        return str(self.args[0])


class FrameRangeError(MdlError, ValueError):
    """VARY のフレーム範囲がフレーム数の外側を指している。"""

    def __init__(self, knob: str, start_frame: int, end_frame: int, num_frames: int) -> None:
        super().__init__(
            f"vary {knob!r}: frames {start_frame}..{end_frame} outside 0..{num_frames - 1}"
        )
        self.knob = knob
        self.start_frame = start_frame
        self.end_frame = end_frame
        self.num_frames = num_frames


class ScriptLoadError(MdlError):
    """操作列ドキュメントの読み込みに失敗した。"""

    def __init__(self, message: str, index: int | None = None) -> None:
        if index is not None:
            message = f"op #{index}: {message}"
        super().__init__(message)
        self.index = index


__all__ = [
    "MdlError",
    "AnimationConfigError",
    "StackUnderflowError",
    "UnknownSymbolError",
    "FrameRangeError",
    "ScriptLoadError",
]
