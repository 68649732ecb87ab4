"""
どこで: `mdl.loader`。
何を: パース済みスクリプト（YAML ドキュメント）から操作列とシンボルテーブルを構築する。
なぜ: MDL 構文の字句/構文解析は対象外のため、上流パーサの出力を構造化データとして受け取る入口が必要。

ドキュメント形式:

    constants:
      shiny_red: {red: [0.3, 0.7, 0.9], green: [0.1, 0.1, 0.1], blue: [0.1, 0.1, 0.1]}
      dull: [0.2, 0.4, 0.1]          # 3 チャネル共通
    knobs:
      spin: 0                        # 任意: 初期値
    ops:
      - {op: frames, num_frames: 10}
      - {op: basename, name: spin}
      - {op: vary, knob: spin, start_frame: 0, end_frame: 9, start_val: 0, end_val: 1}
      - {op: push}
      - {op: rotate, axis: y, degrees: 360, knob: spin}
      - {op: sphere, d: [250, 250, 0], r: 100, constants: shiny_red}
      - {op: pop}

- `op` は大文字小文字を区別しない。
- 不正な opcode/欠落フィールド/数値でない値は `ScriptLoadError`（op の index 付き）。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from common.errors import ScriptLoadError
from common.types import Vec3

from .operations import AXES, OPCODES, Operation, OperationSequence
from .symtab import Constants, SymbolTable

logger = logging.getLogger(__name__)


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("bool は整数として扱わない")
    if isinstance(value, float):
        if not value.is_integer():
            raise TypeError(f"整数ではありません: {value!r}")
        return int(value)
    if isinstance(value, int):
        return value
    raise TypeError(f"整数ではありません: {value!r}")


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"数値ではありません: {value!r}")
    return float(value)


def _as_vec3(value: Any) -> Vec3:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise TypeError(f"3 要素の数値列が必要です: {value!r}")
    x, y, z = (_as_float(v) for v in value)
    return (x, y, z)


def _as_str(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise TypeError(f"空でない文字列が必要です: {value!r}")
    return value


def _as_axis(value: Any) -> int:
    if isinstance(value, str):
        key = value.strip().lower()
        if key not in AXES:
            raise TypeError(f"axis は x/y/z のいずれか: {value!r}")
        return AXES.index(key)
    axis = _as_int(value)
    if axis not in (0, 1, 2):
        raise TypeError(f"axis は 0/1/2 のいずれか: {value!r}")
    return axis


_REQUIRED = object()

# opcode → {field: (converter, default)}
_SCHEMA: dict[str, dict[str, tuple[Callable[[Any], Any], Any]]] = {
    "FRAMES": {"num_frames": (_as_int, _REQUIRED)},
    "BASENAME": {"name": (_as_str, _REQUIRED)},
    "VARY": {
        "knob": (_as_str, _REQUIRED),
        "start_frame": (_as_int, _REQUIRED),
        "end_frame": (_as_int, _REQUIRED),
        "start_val": (_as_float, _REQUIRED),
        "end_val": (_as_float, _REQUIRED),
    },
    "PUSH": {},
    "POP": {},
    "MOVE": {"d": (_as_vec3, _REQUIRED), "knob": (_as_str, None)},
    "SCALE": {"d": (_as_vec3, _REQUIRED), "knob": (_as_str, None)},
    "ROTATE": {
        "axis": (_as_axis, _REQUIRED),
        "degrees": (_as_float, _REQUIRED),
        "knob": (_as_str, None),
    },
    "BOX": {
        "d0": (_as_vec3, _REQUIRED),
        "d1": (_as_vec3, _REQUIRED),
        "constants": (_as_str, None),
        "cs": (_as_str, None),
    },
    "SPHERE": {
        "d": (_as_vec3, _REQUIRED),
        "r": (_as_float, _REQUIRED),
        "constants": (_as_str, None),
        "cs": (_as_str, None),
    },
    "TORUS": {
        "d": (_as_vec3, _REQUIRED),
        "r0": (_as_float, _REQUIRED),
        "r1": (_as_float, _REQUIRED),
        "constants": (_as_str, None),
        "cs": (_as_str, None),
    },
    "LINE": {
        "p0": (_as_vec3, _REQUIRED),
        "p1": (_as_vec3, _REQUIRED),
        "constants": (_as_str, None),
        "cs0": (_as_str, None),
        "cs1": (_as_str, None),
    },
    "SAVE": {"filename": (_as_str, _REQUIRED)},
    "DISPLAY": {},
}


def build_operation(entry: Mapping[str, Any], index: int = 0) -> Operation:
    """1 件の op マッピングを `Operation` に変換する。"""
    if not isinstance(entry, Mapping):
        raise ScriptLoadError(f"マッピングが必要です: {entry!r}", index)
    raw_op = entry.get("op")
    if not isinstance(raw_op, str):
        raise ScriptLoadError("'op' キーがありません", index)
    opcode = raw_op.strip().upper()
    if opcode not in OPCODES:
        raise ScriptLoadError(f"未知の opcode: {raw_op!r}", index)

    schema = _SCHEMA[opcode]
    unknown = set(entry) - set(schema) - {"op"}
    if unknown:
        raise ScriptLoadError(f"{opcode} に未知のフィールド: {sorted(unknown)}", index)

    kwargs: dict[str, Any] = {}
    for field, (convert, default) in schema.items():
        value = entry.get(field)
        if value is None:
            if default is _REQUIRED:
                raise ScriptLoadError(f"{opcode} に必須フィールド '{field}' がありません", index)
            kwargs[field] = default
            continue
        try:
            kwargs[field] = convert(value)
        except TypeError as e:
            raise ScriptLoadError(f"{opcode}.{field}: {e}", index) from e
    return OPCODES[opcode](**kwargs)


def _build_constants(name: str, raw: Any) -> Constants:
    try:
        if isinstance(raw, Mapping):
            return Constants(
                red=_as_vec3(raw["red"]),
                green=_as_vec3(raw["green"]),
                blue=_as_vec3(raw["blue"]),
            )
        return Constants.uniform(*_as_vec3(raw))
    except (KeyError, TypeError) as e:
        raise ScriptLoadError(f"constants {name!r} が不正です: {e}") from e


def load_document(
    doc: Mapping[str, Any], symbols: SymbolTable | None = None
) -> tuple[OperationSequence, SymbolTable]:
    """辞書化済みドキュメントから `(ops, symbols)` を構築する。"""
    if not isinstance(doc, Mapping):
        raise ScriptLoadError("ドキュメントのトップレベルはマッピングである必要があります")
    raw_ops = doc.get("ops")
    if not isinstance(raw_ops, list):
        raise ScriptLoadError("'ops' リストがありません")

    table = symbols if symbols is not None else SymbolTable()
    for name, raw in (doc.get("constants") or {}).items():
        table.set_constants(str(name), _build_constants(str(name), raw))
    for name, raw in (doc.get("knobs") or {}).items():
        try:
            table.set(str(name), _as_float(raw))
        except TypeError as e:
            raise ScriptLoadError(f"knob {name!r} が不正です: {e}") from e

    ops = tuple(build_operation(entry, i) for i, entry in enumerate(raw_ops))
    logger.debug("loaded %d operations", len(ops))
    return ops, table


def load_script(
    path: str | Path, symbols: SymbolTable | None = None
) -> tuple[OperationSequence, SymbolTable]:
    """YAML ファイルを読み込み `(ops, symbols)` を返す。"""
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            doc = yaml.safe_load(f)
    except OSError as e:
        raise ScriptLoadError(f"スクリプトを開けません: {p}: {e}") from e
    except yaml.YAMLError as e:
        raise ScriptLoadError(f"YAML として読めません: {p}: {e}") from e
    return load_document(doc, symbols)


__all__ = ["build_operation", "load_document", "load_script"]
