"""
どこで: `mdl.symtab`。
何を: knob 値とマテリアル定数を名前で引くプロセス共有のシンボルテーブル。
なぜ: Frame Driver が毎フレーム knob 値を書き込み、Interpreter が読み取るための唯一の共有状態。

注意:
- 名前は大文字小文字を区別する。
- knob 値はフレーム間でクリアしない（当該フレームのスケジュールに無い knob は前フレームの値を保持）。
- スレッドセーフではない。フレームを並列処理する場合は呼び出し側でアクセスを直列化すること。
"""

from __future__ import annotations

from dataclasses import dataclass

from common.errors import UnknownSymbolError

Reflect = tuple[float, float, float]  # (ambient, diffuse, specular)


@dataclass(frozen=True)
class Constants:
    """RGB 各チャネルの反射係数 (ambient, diffuse, specular)。"""

    red: Reflect
    green: Reflect
    blue: Reflect

    @classmethod
    def uniform(cls, ambient: float, diffuse: float, specular: float) -> "Constants":
        """3 チャネル共通の係数から生成する。"""
        k = (float(ambient), float(diffuse), float(specular))
        return cls(red=k, green=k, blue=k)

    @property
    def ambient(self) -> tuple[float, float, float]:
        return (self.red[0], self.green[0], self.blue[0])

    @property
    def diffuse(self) -> tuple[float, float, float]:
        return (self.red[1], self.green[1], self.blue[1])

    @property
    def specular(self) -> tuple[float, float, float]:
        return (self.red[2], self.green[2], self.blue[2])


# 既定の "white" 反射係数（スクリプトで constants が指定されない場合）
WHITE = Constants.uniform(0.1, 0.5, 0.5)


class SymbolTable:
    """knob 値とマテリアル定数の名前表。"""

    def __init__(self) -> None:
        self._values: dict[str, float] = {}
        self._constants: dict[str, Constants] = {}

    # --- knobs ---
    def set(self, name: str, value: float) -> None:
        self._values[name] = float(value)

    def get(self, name: str) -> float:
        try:
            return self._values[name]
        except KeyError:
            raise UnknownSymbolError(name, "knob") from None

    def knob_names(self) -> list[str]:
        return list(self._values)

    # --- constants ---
    def set_constants(self, name: str, constants: Constants) -> None:
        self._constants[name] = constants

    def get_constants(self, name: str) -> Constants:
        try:
            return self._constants[name]
        except KeyError:
            raise UnknownSymbolError(name, "constants") from None

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"SymbolTable(knobs={self._values!r}, constants={sorted(self._constants)!r})"


__all__ = ["Constants", "Reflect", "SymbolTable", "WHITE"]
