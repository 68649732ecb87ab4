"""
共通レジストリ基底クラス
shapes/ のプリミティブ生成関数の登録に使う。
"""

from abc import ABC
from typing import Any, Callable


class BaseRegistry(ABC):
    """名前 → オブジェクトの登録簿。

    - 文字列キーは正規化されます（前後空白除去・小文字化・ハイフン→アンダースコア）。
    - デコレータは名前省略可。省略時は関数名から自動推論します。
    """

    def __init__(self):
        self._registry: dict[str, Any] = {}

    @staticmethod
    def _normalize_key(name: str) -> str:
        """レジストリキーの正規化（例: "Sphere" -> "sphere"）。"""
        if not isinstance(name, str):
            raise TypeError("レジストリキーは str である必要があります")
        key = name.strip().replace("-", "_").lower()
        if not key:
            raise ValueError("レジストリキーは空であってはなりません")
        return key

    def register(self, name: str | None = None) -> Callable:
        """関数をレジストリに登録するデコレータ。"""

        def decorator(obj: Any) -> Any:
            key = self._normalize_key(name) if name else self._normalize_key(obj.__name__)
            if key in self._registry and self._registry[key] is not obj:
                raise ValueError(f"'{key}' は既に登録されています")
            self._registry[key] = obj
            return obj

        return decorator

    def get(self, name: str) -> Any:
        """登録された関数を取得。"""
        key = self._normalize_key(name)
        if key not in self._registry:
            raise KeyError(f"'{name}' は登録されていません")
        return self._registry[key]

    def list_all(self) -> list[str]:
        """登録されているすべての名前を取得（未ソート）。"""
        return list(self._registry.keys())

    def is_registered(self, name: str) -> bool:
        """指定された名前が登録されているかチェック"""
        return self._normalize_key(name) in self._registry

