"""
どこで: `engine.animation.knobs`（第 2 パス）。
何を: 各 VARY を展開し、フレーム index → `(knob 名, 値)` 列の `KnobSchedule` を構築する。
なぜ: Frame Driver がフレーム開始時にシンボルテーブルへ適用する値を事前に確定するため。

補間式（互換性のため除数は「範囲幅 + 1」）:

    value(j) = start_val + (end_val - start_val) * (j - start_frame) / (end_frame - start_frame + 1)

    例: start_frame=0, end_frame=4, 0 → 10 なら 0, 2, 4, 6, 8（end_frame でも 10 には達しない）

- 各フレームの列は追記のみ。同じ knob の VARY 範囲が重なると 2 件目を追記する（上書きしない）。
- フレーム数の外側を指す範囲は `FrameRangeError`。
- 操作列が参照する knob は描画前に `declare_knobs` で 0.0 として登録する（範囲開始前のフレームは 0）。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from common.errors import FrameRangeError
from mdl.operations import Move, Operation, Rotate, Scale, Vary
from mdl.symtab import SymbolTable

KnobEntry = tuple[str, float]


def interpolate(vary: Vary, frame: int) -> float:
    """`vary` の `frame` における値。"""
    span = vary.end_frame - vary.start_frame + 1
    return vary.start_val + (vary.end_val - vary.start_val) * (frame - vary.start_frame) / span


@dataclass(frozen=True)
class KnobSchedule:
    """フレームごとの knob 値列（不変）。"""

    frames: tuple[tuple[KnobEntry, ...], ...]

    @property
    def num_frames(self) -> int:
        return len(self.frames)

    def __len__(self) -> int:
        return len(self.frames)

    def __getitem__(self, frame: int) -> tuple[KnobEntry, ...]:
        return self.frames[frame]

    def __iter__(self) -> Iterator[tuple[KnobEntry, ...]]:
        return iter(self.frames)

    def values_at(self, frame: int) -> dict[str, float]:
        """`frame` の knob を順に適用した結果（同名は後勝ち）。"""
        return dict(self.frames[frame])


def second_pass(ops: Iterable[Operation], num_frames: int) -> KnobSchedule:
    """操作列の VARY から `KnobSchedule` を構築する。

    Raises
    ------
    FrameRangeError
        VARY のフレーム範囲が `0..num_frames-1` に収まらない場合。
    """
    per_frame: list[list[KnobEntry]] = [[] for _ in range(max(int(num_frames), 0))]
    for op in ops:
        if not isinstance(op, Vary):
            continue
        if op.start_frame < 0 or op.end_frame >= num_frames:
            raise FrameRangeError(op.knob, op.start_frame, op.end_frame, num_frames)
        for j in range(op.start_frame, op.end_frame + 1):
            per_frame[j].append((op.knob, interpolate(op, j)))
    return KnobSchedule(tuple(tuple(entries) for entries in per_frame))


def declare_knobs(ops: Iterable[Operation], symbols: SymbolTable) -> list[str]:
    """操作列が参照する knob のうち未登録のものを 0.0 で登録し、その名前を返す。

    VARY の範囲より前のフレームや VARY の無い knob 参照は初期値 0 で解釈される。
    読み込み時に設定済みの値は上書きしない。
    """
    known = set(symbols.knob_names())
    added: list[str] = []
    for op in ops:
        name = op.knob if isinstance(op, (Vary, Move, Scale, Rotate)) else None
        if name is None or name in known:
            continue
        symbols.set(name, 0.0)
        known.add(name)
        added.append(name)
    return added


def apply_frame(schedule: KnobSchedule, frame: int, symbols: SymbolTable) -> Sequence[KnobEntry]:
    """`frame` の knob 値を保存順にシンボルテーブルへ書き込む。"""
    entries = schedule[frame]
    for name, value in entries:
        symbols.set(name, value)
    return entries


__all__ = [
    "KnobEntry",
    "KnobSchedule",
    "interpolate",
    "second_pass",
    "declare_knobs",
    "apply_frame",
]
