"""
どこで: `engine.export` サブパッケージ。
何を: 画像保存・表示・アニメーション組み立ての I/O コラボレータ。
なぜ: 描画ループから I/O を分離し、テストで差し替えられるようにするため。
"""

from .service import Exporter, FileExporter

__all__ = ["Exporter", "FileExporter"]
