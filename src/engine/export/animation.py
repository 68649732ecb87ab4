"""
どこで: `engine.export.animation`。
何を: 指定されたフレーム画像列から `<basename>.gif` を組み立てる。
なぜ: 複数フレーム実行の最後に 1 度だけ呼び出し、アニメーションを 1 ファイルにまとめるため。

方針:
- 対象は呼び出し側（Frame Driver）がこの実行で保存したフレーム列そのもの。
  出力先ディレクトリは走査しないため、過去の実行の残りや似た名前のファイルは混入しない。
- GIF の 1 フレームあたりの表示時間は `settings.ANIMATION_DELAY_MS`、無限ループ。
- 出力先は既定でフレームと同じディレクトリ。エンコードは imageio に委譲する。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import imageio.v3 as iio
import numpy as np

from common import settings

logger = logging.getLogger(__name__)


def assemble(
    basename: str,
    frames: Sequence[str | Path],
    *,
    directory: str | Path | None = None,
    delay_ms: int | None = None,
) -> Path:
    """`frames` を順に並べた GIF を作成し、そのパスを返す。

    Parameters
    ----------
    basename : str
        GIF のファイル名（拡張子なし）。
    frames : Sequence[str | Path]
        フレーム画像のパス列（この順で再生される）。
    directory : str | Path | None
        GIF の出力先。None なら先頭フレームのディレクトリ。
    delay_ms : int | None
        1 フレームの表示時間。None なら `settings.ANIMATION_DELAY_MS`。

    Raises
    ------
    FileNotFoundError
        `frames` が空、または存在しないファイルを含む場合。
    """
    paths = [Path(p) for p in frames]
    if not paths:
        raise FileNotFoundError(f"no frames for {basename!r}")
    missing = [p for p in paths if not p.is_file()]
    if missing:
        raise FileNotFoundError(f"missing frame(s) for {basename!r}: {missing[0]}")

    out_dir = Path(directory) if directory is not None else paths[0].parent
    stack = np.stack([iio.imread(p) for p in paths])
    path = out_dir / f"{basename}.gif"
    duration = int(delay_ms if delay_ms is not None else settings.get().ANIMATION_DELAY_MS)
    iio.imwrite(path, stack, duration=duration, loop=0)
    logger.info("animation %s (%d frames)", path, len(paths))
    return path


__all__ = ["assemble"]
