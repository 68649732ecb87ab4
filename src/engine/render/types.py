"""
どこで: `engine.render` 型定義。
何を: ラスタライザへ渡す視点ベクトル・光源・環境光・既定マテリアル・線色をまとめた `RenderContext`。
なぜ: フレーム間で不変な描画パラメータを 1 つの凍結レコードにし、構成ファイルから差し替えられるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from common.types import RGB, Vec3
from mdl.symtab import WHITE, Constants


@dataclass(frozen=True)
class Light:
    """点光源（位置ベクトルと色）。"""

    location: Vec3 = (0.5, 0.75, 1.0)
    color: RGB = (255, 255, 255)


@dataclass(frozen=True)
class RenderContext:
    """1 回の実行を通して不変の描画パラメータ。"""

    view: Vec3 = (0.0, 0.0, 1.0)
    ambient: RGB = (50, 50, 50)
    light: Light = field(default_factory=Light)
    default_constants: Constants = WHITE
    line_color: RGB = (255, 255, 255)

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any] | None) -> "RenderContext":
        """`util.utils.load_config()` の辞書から生成する（欠落キーは既定値）。"""
        cfg = cfg or {}
        base = cls()
        light_cfg = cfg.get("light") or {}
        light = Light(
            location=_vec3(light_cfg.get("location"), base.light.location),
            color=_rgb(light_cfg.get("color"), base.light.color),
        )
        white_cfg = (cfg.get("constants") or {}).get("white")
        return cls(
            view=_vec3(cfg.get("view"), base.view),
            ambient=_rgb(cfg.get("ambient"), base.ambient),
            light=light,
            default_constants=_constants(white_cfg, base.default_constants),
            line_color=_rgb(cfg.get("line_color"), base.line_color),
        )


def _vec3(value: Any, default: Vec3) -> Vec3:
    if value is None:
        return default
    x, y, z = (float(v) for v in value)
    return (x, y, z)


def _rgb(value: Any, default: RGB) -> RGB:
    if value is None:
        return default
    r, g, b = (int(v) for v in value)
    return (r, g, b)


def _constants(value: Any, default: Constants) -> Constants:
    if value is None:
        return default
    if isinstance(value, Mapping):
        return Constants(
            red=_vec3(value.get("red"), default.red),
            green=_vec3(value.get("green"), default.green),
            blue=_vec3(value.get("blue"), default.blue),
        )
    return Constants.uniform(*_vec3(value, default.red))


__all__ = ["Light", "RenderContext"]
