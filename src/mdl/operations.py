"""
どこで: `mdl.operations`。
何を: パーサが生成する操作列（Operation Sequence）の各バリアントを凍結データクラスで表す。
なぜ: opcode ごとに必要なフィールドだけを持つ閉じたタグ付き共用体として扱い、
      2 つの事前パスと毎フレームの解釈で読み取り専用に共有するため。

データモデル:
- 各クラスは `opcode`（大文字の opcode 名）をクラス属性に持つ。
- `knob` は任意の knob 名参照。指定時は数値成分にその knob の現在値を掛ける。
- `constants`/`cs` は任意のシンボル名参照（`cs` は保持のみで解釈には使わない）。
- 操作列は `tuple[Operation, ...]` として保持し、変更しない。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from common.types import Vec3

AXES = ("x", "y", "z")


@dataclass(slots=True, frozen=True)
class Frames:
    opcode: ClassVar[str] = "FRAMES"
    num_frames: int


@dataclass(slots=True, frozen=True)
class Basename:
    opcode: ClassVar[str] = "BASENAME"
    name: str


@dataclass(slots=True, frozen=True)
class Vary:
    """`knob` を `start_frame..end_frame`（両端含む）で `start_val → end_val` に線形補間する。"""

    opcode: ClassVar[str] = "VARY"
    knob: str
    start_frame: int
    end_frame: int
    start_val: float
    end_val: float


@dataclass(slots=True, frozen=True)
class Push:
    opcode: ClassVar[str] = "PUSH"


@dataclass(slots=True, frozen=True)
class Pop:
    opcode: ClassVar[str] = "POP"


@dataclass(slots=True, frozen=True)
class Move:
    opcode: ClassVar[str] = "MOVE"
    d: Vec3
    knob: str | None = None


@dataclass(slots=True, frozen=True)
class Scale:
    opcode: ClassVar[str] = "SCALE"
    d: Vec3
    knob: str | None = None


@dataclass(slots=True, frozen=True)
class Rotate:
    """`axis` は 0/1/2（x/y/z）、`degrees` は度。knob は弧度法に換算した角度へ掛かる。"""

    opcode: ClassVar[str] = "ROTATE"
    axis: int
    degrees: float
    knob: str | None = None


@dataclass(slots=True, frozen=True)
class Box:
    """`d0` は左上手前の角、`d1` は (width, height, depth)。"""

    opcode: ClassVar[str] = "BOX"
    d0: Vec3
    d1: Vec3
    constants: str | None = None
    cs: str | None = None


@dataclass(slots=True, frozen=True)
class Sphere:
    opcode: ClassVar[str] = "SPHERE"
    d: Vec3
    r: float
    constants: str | None = None
    cs: str | None = None


@dataclass(slots=True, frozen=True)
class Torus:
    """`r0` は管の半径、`r1` は中心から管中心までの半径。"""

    opcode: ClassVar[str] = "TORUS"
    d: Vec3
    r0: float
    r1: float
    constants: str | None = None
    cs: str | None = None


@dataclass(slots=True, frozen=True)
class Line:
    opcode: ClassVar[str] = "LINE"
    p0: Vec3
    p1: Vec3
    constants: str | None = None
    cs0: str | None = None
    cs1: str | None = None


@dataclass(slots=True, frozen=True)
class Save:
    opcode: ClassVar[str] = "SAVE"
    filename: str


@dataclass(slots=True, frozen=True)
class Display:
    opcode: ClassVar[str] = "DISPLAY"


Operation = Union[
    Frames,
    Basename,
    Vary,
    Push,
    Pop,
    Move,
    Scale,
    Rotate,
    Box,
    Sphere,
    Torus,
    Line,
    Save,
    Display,
]

OperationSequence = tuple[Operation, ...]

OPERATION_TYPES: tuple[type, ...] = (
    Frames,
    Basename,
    Vary,
    Push,
    Pop,
    Move,
    Scale,
    Rotate,
    Box,
    Sphere,
    Torus,
    Line,
    Save,
    Display,
)

# opcode 名（大文字）→ クラス
OPCODES: dict[str, type] = {cls.opcode: cls for cls in OPERATION_TYPES}


__all__ = [
    "AXES",
    "Frames",
    "Basename",
    "Vary",
    "Push",
    "Pop",
    "Move",
    "Scale",
    "Rotate",
    "Box",
    "Sphere",
    "Torus",
    "Line",
    "Save",
    "Display",
    "Operation",
    "OperationSequence",
    "OPERATION_TYPES",
    "OPCODES",
]
