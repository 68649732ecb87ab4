"""
どこで: `engine.runtime.driver`。
何を: 2 つの事前パスを実行し、フレーム index ごとに状態を初期化して Interpreter を回す外側ループ。
なぜ: knob 値の適用 → 解釈 → 連番保存 → 最後に 1 度だけアニメーション組み立て、の順序を 1 箇所で保証するため。

フレームごとの流れ:
1. FrameState を初期化（恒等行列 1 枚のスタック、空の画像/深度バッファ）。
2. そのフレームの knob 値を保存順にシンボルテーブルへ書き込む（同名は後勝ち、未指定 knob は前フレームの値を保持）。
3. 操作列全体を解釈。
4. num_frames > 1 なら `<output_dir>/<basename><NNN>.<ext>` へ保存し、一定間隔で進捗を出す。
最後に num_frames > 1 なら、この実行で保存したフレーム列を渡して `assemble(basename, frames)` を 1 度だけ呼ぶ。

注意:
- 事前パスはすべて描画前に実行する。`AnimationConfigError` 等はフレームを 1 枚も描かずに伝搬する。
- シンボルテーブルはフレーム間で共有されるため、フレームの並列処理はしない。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from common import settings
from engine.animation.config import AnimationConfig, first_pass
from engine.animation.knobs import KnobSchedule, apply_frame, declare_knobs, second_pass
from engine.export.service import Exporter, FileExporter
from engine.render.raster import Rasterizer, WireframeRasterizer
from engine.render.types import RenderContext
from mdl.operations import Operation
from mdl.symtab import SymbolTable
from util.paths import frame_path

from .frame import FrameState
from .interpreter import Interpreter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderSummary:
    """1 回の実行結果。"""

    config: AnimationConfig
    frame_files: tuple[Path, ...]
    animated: bool


class FrameDriver:
    """操作列からフレーム列を描画する外側ループ。"""

    def __init__(
        self,
        ops: Sequence[Operation],
        symbols: SymbolTable | None = None,
        *,
        rasterizer: Rasterizer | None = None,
        exporter: Exporter | None = None,
        context: RenderContext | None = None,
        size: int | None = None,
        step: int | None = None,
        output_dir: str | Path | None = None,
        ext: str | None = None,
    ) -> None:
        s = settings.get()
        self.ops = tuple(ops)
        self.symbols = symbols if symbols is not None else SymbolTable()
        self.output_dir = Path(output_dir) if output_dir is not None else Path(s.OUTPUT_DIR)
        self.ext = (ext or s.IMAGE_EXT).lstrip(".")
        self.size = size
        self.exporter = (
            exporter if exporter is not None else FileExporter(self.output_dir)
        )
        self.interpreter = Interpreter(
            self.symbols,
            rasterizer if rasterizer is not None else WireframeRasterizer(),
            self.exporter,
            context,
            step=step,
        )
        self.config: AnimationConfig | None = None
        self.schedule: KnobSchedule | None = None
        self._frame: FrameState | None = None

    def compile(self) -> tuple[AnimationConfig, KnobSchedule]:
        """第 1/第 2 パスを実行して結果を保持し、参照される knob を登録する。"""
        config = first_pass(self.ops)
        schedule = second_pass(self.ops, config.num_frames)
        declared = declare_knobs(self.ops, self.symbols)
        if declared:
            logger.debug("knobs initialised to 0: %s", ", ".join(declared))
        self.config, self.schedule = config, schedule
        return config, schedule

    def render_frame(self, index: int) -> FrameState:
        """`index` 番目のフレームを初期状態から描画して返す（保存はしない）。

        フレーム状態は実行中 1 つを使い回し、フレーム境界で `reset` する。
        """
        if self.schedule is None:
            self.compile()
        assert self.schedule is not None
        if self._frame is None:
            self._frame = FrameState.new(index, self.size)
        else:
            self._frame.reset(index)
        frame = self._frame
        apply_frame(self.schedule, index, self.symbols)
        return self.interpreter.run(self.ops, frame)

    def run(self) -> RenderSummary:
        config, _ = self.compile()
        every = settings.get().PROGRESS_EVERY
        saved: list[Path] = []

        for f in range(config.num_frames):
            frame = self.render_frame(f)
            if config.is_animation:
                path = frame_path(config.basename, f, directory=self.output_dir, ext=self.ext)
                self.exporter.save(frame.image, str(path))
                saved.append(path)
                if f % every == 0:
                    logger.info("Saving frame %d...", f)

        if config.is_animation:
            logger.info("Generating animation...")
            self.exporter.assemble(config.basename, tuple(saved))

        return RenderSummary(config=config, frame_files=tuple(saved), animated=config.is_animation)


__all__ = ["FrameDriver", "RenderSummary"]
