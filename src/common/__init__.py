"""
どこで: `common` パッケージ。
何を: 例外階層・設定・レジストリ基底などの軽量ユーティリティ。
なぜ: mdl/engine/shapes から再利用する共通基盤を分離し、依存の向きを単純化するため。
"""

from .base_registry import BaseRegistry
from .errors import (
    AnimationConfigError,
    FrameRangeError,
    MdlError,
    ScriptLoadError,
    StackUnderflowError,
    UnknownSymbolError,
)

__all__ = [
    "BaseRegistry",
    "MdlError",
    "AnimationConfigError",
    "StackUnderflowError",
    "UnknownSymbolError",
    "FrameRangeError",
    "ScriptLoadError",
]
