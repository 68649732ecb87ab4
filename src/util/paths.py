"""
どこで: `util.paths`。
何を: フレーム画像の出力先ディレクトリと連番ファイル名を解決する。
なぜ: Frame Driver とアニメーション組み立てで同じ命名規則（`<basename><NNN>.<ext>`）を共有するため。
"""

from __future__ import annotations

from pathlib import Path

from common import settings


def frame_filename(basename: str, index: int, *, ext: str | None = None) -> str:
    """`<basename><3 桁ゼロ詰め index>.<ext>` を返す。"""
    suffix = (ext or settings.get().IMAGE_EXT).lstrip(".")
    return f"{basename}{index:03d}.{suffix}"


def frame_path(
    basename: str, index: int, *, directory: str | Path | None = None, ext: str | None = None
) -> Path:
    """出力ディレクトリ配下のフレーム画像パス。"""
    out = Path(directory) if directory is not None else Path(settings.get().OUTPUT_DIR)
    return out / frame_filename(basename, index, ext=ext)


__all__ = ["frame_filename", "frame_path"]
