"""
どこで: `engine.animation.config`（第 1 パス）。
何を: 操作列を 1 度走査し、総フレーム数とベース名を決定して `AnimationConfig` を返す。
なぜ: Knob Schedule Builder と Frame Driver が同じ解決結果を使い、再導出しないようにするため。

方針:
- VARY があるのに FRAMES が無い → `AnimationConfigError`（致命的。描画前に停止）。
- FRAMES > 0 で BASENAME が無い → 既定名（"image"）を採用し、その旨を通知。
- FRAMES > 0 で VARY が無い → 同一フレームが続く旨を警告して続行。
- FRAMES が無い → 単一フレーム（num_frames = 1）。
- FRAMES/BASENAME が複数回現れた場合は走査順で最後のものを採用。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from common import settings
from common.errors import AnimationConfigError
from mdl.operations import Basename, Frames, Operation, Vary

logger = logging.getLogger(__name__)

MISSING_FRAMES_MESSAGE = "Please specify number of frames!"


@dataclass(frozen=True)
class AnimationConfig:
    """第 1 パスの解決結果。"""

    num_frames: int
    basename: str
    has_vary: bool = False

    @property
    def is_animation(self) -> bool:
        return self.num_frames > 1


def first_pass(ops: Iterable[Operation]) -> AnimationConfig:
    """総フレーム数とベース名を解決する。

    Parameters
    ----------
    ops : Iterable[Operation]
        操作列。

    Returns
    -------
    AnimationConfig
        `num_frames >= 1`。単一フレームの場合 `basename` は空のこともある。

    Raises
    ------
    AnimationConfigError
        VARY があり FRAMES が無い（または 0）場合。
    """
    num_frames = 0
    basename = ""
    found_vary = False

    for op in ops:
        if isinstance(op, Frames):
            num_frames = int(op.num_frames)
        elif isinstance(op, Basename):
            basename = op.name
        elif isinstance(op, Vary):
            found_vary = True

    if found_vary and num_frames <= 0:
        raise AnimationConfigError(MISSING_FRAMES_MESSAGE)
    if num_frames > 0 and not basename:
        basename = settings.get().DEFAULT_BASENAME
        logger.info('Basename set to "%s" by default...', basename)
    if num_frames > 0 and not found_vary:
        logger.warning("Generating %d identical frames...", num_frames)
    if num_frames <= 0:
        num_frames = 1

    return AnimationConfig(num_frames=num_frames, basename=basename, has_vary=found_vary)


__all__ = ["AnimationConfig", "first_pass", "MISSING_FRAMES_MESSAGE"]
