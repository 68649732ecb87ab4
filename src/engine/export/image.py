"""
どこで: `engine.export.image`。
何を: 画像バッファ（H×W×3 uint8）をファイルへ書き出すラッパ。
なぜ: SAVE 操作と Frame Driver の連番保存を同じ経路で行うため（エンコードは imageio に委譲）。
"""

from __future__ import annotations

import logging
from pathlib import Path

import imageio.v3 as iio
import numpy as np

from common import settings

logger = logging.getLogger(__name__)


def resolve_image_path(filename: str | Path) -> Path:
    """拡張子が無ければ既定の拡張子（`settings.IMAGE_EXT`）を補う。"""
    path = Path(filename)
    if not path.suffix:
        path = path.with_suffix("." + settings.get().IMAGE_EXT)
    return path


def save_image(image: np.ndarray, filename: str | Path) -> Path:
    """画像を保存し、保存先パスを返す。

    Parameters
    ----------
    image : np.ndarray
        `(H, W, 3)` uint8。行 0 が画像上端。
    filename : str | Path
        出力先。親ディレクトリは必要に応じて作成する。

    Returns
    -------
    Path
        実際に書き出したパス。
    """
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError(f"画像は (H, W, 3) である必要があります: {arr.shape}")
    path = resolve_image_path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    iio.imwrite(path, arr.astype(np.uint8, copy=False))
    logger.debug("saved image %s", path)
    return path


__all__ = ["save_image", "resolve_image_path"]
