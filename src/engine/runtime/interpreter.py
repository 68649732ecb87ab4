"""
どこで: `engine.runtime.interpreter`。
何を: 1 フレーム分、操作列を先頭から順に解釈する（Transform Stack Interpreter）。
      スタック操作・プリミティブ描画・I/O を操作順どおりに実行し、並べ替えやまとめ処理はしない。
なぜ: 行列合成の順序（top × transform、top × points）と描画/スタック変更の順序が結果を決めるため。

opcode ごとの動作:
- PUSH: top を複製して積む。POP: top を除去（最後の 1 枚は `StackUnderflowError`）。
- MOVE/SCALE/ROTATE: 数値から変換行列を作り（knob 指定時は各成分に knob 値を掛ける）、
  `top = top × transform` で top を置き換える（新しいエントリは積まない）。
- BOX/SPHERE/TORUS: マテリアル定数を解決（名前指定が無ければ既定値）、バッファへ生成、
  `top × buffer` を適用、`draw_solid` へ渡し、バッファを空にする。定数は呼び出しごとに引数で渡し保持しない。
- LINE: 線分 1 本を生成、`top × buffer`、`draw_line`、バッファを空にする。
- SAVE: 画像と指定ファイル名を exporter へ。DISPLAY: 画像を exporter へ。
- FRAMES/BASENAME/VARY: 事前パスで消費済みのため何もしない。
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Iterable

import shapes
from engine.core.geometry import GeometryBuffer
from engine.core.matrix import make_rotation, make_scale, make_translate
from engine.export.service import Exporter
from engine.render.raster import Rasterizer
from engine.render.types import RenderContext
from mdl.operations import (
    Basename,
    Box,
    Display,
    Frames,
    Line,
    Move,
    Operation,
    Pop,
    Push,
    Rotate,
    Save,
    Scale,
    Sphere,
    Torus,
    Vary,
)
from mdl.symtab import Constants, SymbolTable

from .frame import FrameState

logger = logging.getLogger(__name__)


class Interpreter:
    """操作列を 1 フレームぶん実行する。

    Parameters
    ----------
    symbols : SymbolTable
        knob 値/マテリアル定数の参照先（読み取りのみ）。
    rasterizer : Rasterizer
        `draw_solid` / `draw_line` を提供する描画コラボレータ。
    exporter : Exporter
        SAVE/DISPLAY の出力先。
    context : RenderContext | None
        視点/光源/環境光/既定マテリアル/線色。None なら既定値。
    step : int | None
        球/トーラスの分割数。None なら `settings.STEP_3D`。
    """

    def __init__(
        self,
        symbols: SymbolTable,
        rasterizer: Rasterizer,
        exporter: Exporter,
        context: RenderContext | None = None,
        *,
        step: int | None = None,
    ) -> None:
        self.symbols = symbols
        self.rasterizer = rasterizer
        self.exporter = exporter
        self.context = context if context is not None else RenderContext()
        self.step = step
        self._handlers: dict[type, Callable[[Operation, FrameState], None]] = {
            Frames: self._noop,
            Basename: self._noop,
            Vary: self._noop,
            Push: self._push,
            Pop: self._pop,
            Move: self._move,
            Scale: self._scale,
            Rotate: self._rotate,
            Box: self._box,
            Sphere: self._sphere,
            Torus: self._torus,
            Line: self._line,
            Save: self._save,
            Display: self._display,
        }

    # ── 実行 ───────────────────
    def run(self, ops: Iterable[Operation], frame: FrameState) -> FrameState:
        """操作列を先頭から順に実行する。"""
        for op in ops:
            self.execute(op, frame)
        return frame

    def execute(self, op: Operation, frame: FrameState) -> None:
        handler = self._handlers.get(type(op))
        if handler is None:
            raise TypeError(f"未知の操作: {op!r}")
        logger.debug("frame %d: %s", frame.index, op)
        handler(op, frame)

    # ── knob/定数の解決 ──────────────
    def _knob(self, name: str | None) -> float:
        return 1.0 if name is None else self.symbols.get(name)

    def _constants(self, name: str | None) -> Constants:
        if name is None:
            return self.context.default_constants
        return self.symbols.get_constants(name)

    # ── スタック ───────────────────
    def _noop(self, op: Operation, frame: FrameState) -> None:
        pass

    def _push(self, op: Push, frame: FrameState) -> None:
        frame.stack.push()

    def _pop(self, op: Pop, frame: FrameState) -> None:
        frame.stack.pop()

    # ── 変換 ───────────────────
    def _move(self, op: Move, frame: FrameState) -> None:
        k = self._knob(op.knob)
        x, y, z = op.d
        frame.stack.transform_top(make_translate(x * k, y * k, z * k))

    def _scale(self, op: Scale, frame: FrameState) -> None:
        k = self._knob(op.knob)
        x, y, z = op.d
        frame.stack.transform_top(make_scale(x * k, y * k, z * k))

    def _rotate(self, op: Rotate, frame: FrameState) -> None:
        theta = math.radians(op.degrees) * self._knob(op.knob)
        frame.stack.transform_top(make_rotation(op.axis, theta))

    # ── 描画 ───────────────────
    def _draw_solid(self, buf: GeometryBuffer, frame: FrameState, constants: Constants) -> None:
        ctx = self.context
        try:
            buf.apply(frame.stack.peek())
            self.rasterizer.draw_solid(
                buf, frame.image, frame.zbuffer, ctx.view, ctx.light, ctx.ambient, constants
            )
        finally:
            buf.clear()

    def _box(self, op: Box, frame: FrameState) -> None:
        constants = self._constants(op.constants)
        shapes.build("box", d0=op.d0, d1=op.d1, into=frame.polygons)
        self._draw_solid(frame.polygons, frame, constants)

    def _sphere(self, op: Sphere, frame: FrameState) -> None:
        constants = self._constants(op.constants)
        shapes.build("sphere", d=op.d, r=op.r, step=self.step, into=frame.polygons)
        self._draw_solid(frame.polygons, frame, constants)

    def _torus(self, op: Torus, frame: FrameState) -> None:
        constants = self._constants(op.constants)
        shapes.build("torus", d=op.d, r0=op.r0, r1=op.r1, step=self.step, into=frame.polygons)
        self._draw_solid(frame.polygons, frame, constants)

    def _line(self, op: Line, frame: FrameState) -> None:
        buf = shapes.build("line", p0=op.p0, p1=op.p1, into=frame.edges)
        try:
            buf.apply(frame.stack.peek())
            self.rasterizer.draw_line(buf, frame.image, frame.zbuffer, self.context.line_color)
        finally:
            buf.clear()

    # ── I/O ───────────────────
    def _save(self, op: Save, frame: FrameState) -> None:
        self.exporter.save(frame.image, op.filename)

    def _display(self, op: Display, frame: FrameState) -> None:
        self.exporter.show(frame.image)


__all__ = ["Interpreter"]
