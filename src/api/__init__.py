"""
どこで: `api` 入口（高レベル公開 API）。
何を: スクリプト/操作列の描画関数と CLI を再輸出。
なぜ: 利用者が単一名前空間から読み込み → 描画 → 出力まで完結できるようにするため。

Usage:
    from api import render_script
    render_script("scenes/spin.yaml")
"""

from .cli import main
from .run import render_ops, render_script

__all__ = ["render_ops", "render_script", "main"]

__version__ = "2026.10"
