"""
どこで: `engine.animation` サブパッケージ。
何を: 描画前の 2 パス（フレーム数/ベース名の解決、knob スケジュールの構築）。
なぜ: 毎フレームの解釈より先に、アニメーション全体で不変な情報を一度だけ確定するため。
"""

from .config import AnimationConfig, first_pass
from .knobs import KnobSchedule, apply_frame, declare_knobs, interpolate, second_pass

__all__ = [
    "AnimationConfig",
    "first_pass",
    "KnobSchedule",
    "second_pass",
    "declare_knobs",
    "interpolate",
    "apply_frame",
]
