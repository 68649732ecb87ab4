"""
どこで: `engine.runtime` サブパッケージ。
何を: フレーム状態・操作列インタプリタ・フレームドライバ。
なぜ: 事前パスの結果を使って毎フレームの解釈と出力を駆動するため。
"""

from .driver import FrameDriver, RenderSummary
from .frame import FrameState
from .interpreter import Interpreter

__all__ = ["FrameDriver", "RenderSummary", "FrameState", "Interpreter"]
