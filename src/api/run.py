"""
どこで: `api.run`（実行ランナー）。
何を: パース済みスクリプト（YAML）または操作列から、構成の解決 → 描画 → 出力までを 1 呼び出しで実行する。
なぜ: CLI とライブラリ利用の双方で同じ結線（RenderContext・Exporter・FrameDriver）を使うため。

実行フロー:
1) 構成: `util.utils.load_config()` の YAML から `RenderContext` を作る（欠落は既定値）。
2) 読み込み: `mdl.loader.load_script()` で `(ops, symbols)`。
3) 描画: `FrameDriver.run()`（事前パス → フレームループ → 必要ならアニメーション組み立て）。

例:
    from api import render_script
    summary = render_script("scenes/spin.yaml", output_dir="anim")
    print(summary.config.num_frames, summary.frame_files)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence

from engine.export.service import Exporter
from engine.render.raster import Rasterizer
from engine.render.types import RenderContext
from engine.runtime.driver import FrameDriver, RenderSummary
from mdl.loader import load_script
from mdl.operations import Operation
from mdl.symtab import SymbolTable
from util.utils import load_config


def render_ops(
    ops: Sequence[Operation],
    symbols: SymbolTable | None = None,
    *,
    config: Mapping[str, Any] | None = None,
    rasterizer: Rasterizer | None = None,
    exporter: Exporter | None = None,
    output_dir: str | Path | None = None,
    ext: str | None = None,
    size: int | None = None,
    step: int | None = None,
) -> RenderSummary:
    """操作列を描画する。`config` が None ならプロジェクトの YAML 構成を読む。"""
    context = RenderContext.from_config(load_config() if config is None else config)
    driver = FrameDriver(
        ops,
        symbols,
        rasterizer=rasterizer,
        exporter=exporter,
        context=context,
        size=size,
        step=step,
        output_dir=output_dir,
        ext=ext,
    )
    return driver.run()


def render_script(path: str | Path, **kwargs: Any) -> RenderSummary:
    """YAML スクリプトを読み込んで描画する（キーワード引数は `render_ops` と同じ）。"""
    ops, symbols = load_script(path)
    return render_ops(ops, symbols, **kwargs)


__all__ = ["render_ops", "render_script"]
