"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_int, env_str

@dataclass
class _Settings:
    # 出力
    OUTPUT_DIR: str = "anim"
    IMAGE_EXT: str = "png"
    DEFAULT_BASENAME: str = "image"
    ANIMATION_DELAY_MS: int = 40

    # 描画
    IMAGE_SIZE: int = 500
    STEP_3D: int = 100

    # 進捗/ログ
    PROGRESS_EVERY: int = 5
    LOG_LEVEL: str = "INFO"

_settings = _Settings()

def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - int は `env_int`、str は `env_str` を使用。
    - 数値は下限丸めを適用する（サイズ/分割数は 1 以上）。
    """
    _settings.OUTPUT_DIR = env_str("MDL_OUTPUT_DIR", "anim")
    _settings.IMAGE_EXT = env_str("MDL_IMAGE_EXT", "png").lstrip(".")
    _settings.DEFAULT_BASENAME = env_str("MDL_DEFAULT_BASENAME", "image")
    _settings.ANIMATION_DELAY_MS = env_int("MDL_ANIMATION_DELAY_MS", 40, min_value=1) or 40

    _settings.IMAGE_SIZE = env_int("MDL_IMAGE_SIZE", 500, min_value=1) or 500
    _settings.STEP_3D = env_int("MDL_STEP_3D", 100, min_value=3) or 100

    _settings.PROGRESS_EVERY = env_int("MDL_PROGRESS_EVERY", 5, min_value=1) or 5
    _settings.LOG_LEVEL = env_str("MDL_LOG_LEVEL", "INFO").upper()

def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings

# 初期ロード
reload_from_env()

__all__ = ["get", "reload_from_env", "_Settings"]
