"""
どこで: `shapes` パッケージ（関数登録）。
何を: ビルトインのプリミティブ（box/sphere/torus/line）を import 副作用で登録する。
なぜ: Interpreter が opcode 名から生成関数を `build(kind, ...)` で解決できるようにするため。
"""

# 関数版 shape 定義を import して登録（副作用）
from . import box as _register_box  # noqa: F401
from . import line as _register_line  # noqa: F401
from . import sphere as _register_sphere  # noqa: F401
from . import torus as _register_torus  # noqa: F401
from .registry import build, get_shape, is_shape_registered, list_shapes, shape  # re-export

__all__ = [
    "shape",
    "build",
    "get_shape",
    "list_shapes",
    "is_shape_registered",
]
