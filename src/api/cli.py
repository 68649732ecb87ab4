"""
どこで: `api.cli`。
何を: `mdlanim <script.yaml>` のコマンドライン入口（argparse）。
なぜ: 操作列ドキュメントから連番フレームと GIF を 1 コマンドで生成するため。

Usage:
    mdlanim scenes/spin.yaml --output-dir anim --size 500 --step 40
    python -m api scenes/spin.yaml --log-level DEBUG

終了コード:
- 0: 正常終了。
- 1: VARY があり FRAMES が無い（診断を標準出力へ出して即終了）、その他 `MdlError`。
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from common.errors import AnimationConfigError, MdlError
from common.logging import setup_default_logging

from .run import render_script

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mdlanim", description="Render an MDL operation document to frames."
    )
    p.add_argument("script", help="parsed operation document (YAML)")
    p.add_argument("--output-dir", default=None, help="frame/animation directory (default: anim)")
    p.add_argument("--ext", default=None, help="frame image extension (default: png)")
    p.add_argument("--size", type=int, default=None, help="square image size in pixels")
    p.add_argument("--step", type=int, default=None, help="sphere/torus tessellation steps")
    p.add_argument("--log-level", default=None, help="logging level (default: MDL_LOG_LEVEL or INFO)")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_default_logging(args.log_level)
    try:
        summary = render_script(
            args.script,
            output_dir=args.output_dir,
            ext=args.ext,
            size=args.size,
            step=args.step,
        )
    except AnimationConfigError as e:
        print(e)
        return 1
    except MdlError as e:
        logger.error("%s", e)
        return 1
    logger.debug(
        "rendered %d frame(s) basename=%r", summary.config.num_frames, summary.config.basename
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
