"""
どこで: `mdl` パッケージ。
何を: 操作列（`operations`）・シンボルテーブル（`symtab`）・パース済みドキュメントの読み込み（`loader`）。
なぜ: 上流パーサとの境界契約を 1 箇所にまとめ、engine 側は型付きの操作列だけを扱えるようにするため。
"""

from .loader import load_document, load_script
from .operations import OPCODES, Operation, OperationSequence
from .symtab import WHITE, Constants, SymbolTable

__all__ = [
    "load_document",
    "load_script",
    "OPCODES",
    "Operation",
    "OperationSequence",
    "Constants",
    "SymbolTable",
    "WHITE",
]
