"""
どこで: `common` の型定義。
何を: Vec3 / RGB などの軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

Vec3 = tuple[float, float, float]
RGB = tuple[int, int, int]

__all__ = ["Vec3", "RGB"]
