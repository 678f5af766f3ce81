# -*- coding: utf-8 -*-
"""
団体コードマスタ/GeoJSON処理で共通に使う例外。
CLI側では CityCodeError をまとめて捕捉し、終了コード1に変換する。
"""
from __future__ import annotations


class CityCodeError(Exception):
    """本ツール群の例外の基底クラス。"""


class NotFoundError(CityCodeError, FileNotFoundError):
    """指定パスが存在しない。"""

    def __init__(self, path, label: str = "ファイル"):
        self.path = str(path)
        super().__init__(f"{label}が見つかりません: {self.path}")


class UnsupportedFormatError(CityCodeError, ValueError):
    def __init__(self, ext: str, supported):
        self.ext = ext
        super().__init__(f"未対応のファイル形式です: {ext or '(拡張子なし)'} (対応形式: {', '.join(supported)})")


class MasterParseError(CityCodeError, ValueError):
    """JSON/表形式の中身が想定構造として読めない。"""


class ArgumentError(CityCodeError):
    """位置引数の不足など。"""
