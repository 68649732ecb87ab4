"""
どこで: `shapes` のレジストリ層（関数専用）。
何を: `@shape` デコレータでプリミティブ生成関数を登録し、取得/一覧/`build` を提供。
なぜ: Interpreter が opcode から生成関数を一貫 API で解決できるようにするため。

概要:
- 登録対象は「関数」のみ（`GeometryBuffer` を返す）。
- デコレータは名前省略可（`@shape` / `@shape()`）と明示名指定をサポート。
- `build(kind, **params)` は登録名でディスパッチする薄いラッパ。
"""

from __future__ import annotations

import inspect
from typing import Any, Callable

from common.base_registry import BaseRegistry
from engine.core.geometry import GeometryBuffer, Kind

ShapeFn = Callable[..., GeometryBuffer]

_shape_registry = BaseRegistry()


def shape(arg: Any | None = None, /, name: str | None = None):
    """シェイプ関数をレジストリに登録するデコレータ。

    使用例:
    - `@shape` / `@shape()`                      → 関数名から自動推論。
    - `@shape("custom")` / `@shape(name="custom")` → 明示名で登録。

    例外:
    - TypeError: 関数以外を登録しようとした場合。
    """

    def _register_checked(obj: Any, resolved_name: str | None = None):
        if not inspect.isfunction(obj):
            raise TypeError(f"@shape は関数のみ登録可能です: got {obj!r}")
        return _shape_registry.register(resolved_name)(obj)

    # 直付け (@shape)
    if inspect.isfunction(arg) and name is None:
        return _register_checked(arg, None)

    # 位置引数で名前を渡した (@shape("name"))
    if isinstance(arg, str) and name is None:

        def _decorator_named(obj: Any):
            return _register_checked(obj, arg)

        return _decorator_named

    def _decorator_generic(obj: Any):
        return _register_checked(obj, name)

    return _decorator_generic


def get_shape(name: str) -> ShapeFn:
    """登録されたシェイプ関数を取得（未登録は KeyError）。"""
    return _shape_registry.get(name)


def list_shapes() -> list[str]:
    """登録されているシェイプ名のソート済み一覧。"""
    return sorted(_shape_registry.list_all())


def is_shape_registered(name: str) -> bool:
    return _shape_registry.is_registered(name)


def build(kind: str, **params: Any) -> GeometryBuffer:
    """`kind` のプリミティブを生成する（`into=` で既存バッファへ追記）。"""
    return get_shape(kind)(**params)


def target_buffer(into: GeometryBuffer | None, kind: Kind) -> GeometryBuffer:
    """追記先バッファを検証して返す（未指定なら新規作成）。"""
    if into is None:
        return GeometryBuffer(kind)
    if into.kind != kind:
        raise TypeError(f"{kind} を {into.kind} バッファへは追記できません")
    return into


__all__ = [
    "shape",
    "get_shape",
    "list_shapes",
    "is_shape_registered",
    "build",
    "target_buffer",
]
