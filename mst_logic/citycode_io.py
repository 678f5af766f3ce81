# -*- coding: utf-8 -*-
"""
マスタ/GeoJSON の入出力ヘルパー
- JSON 読み込み（構文エラーは MasterParseError）
- JSON 書き込み（UTF-8, indent=2。一時ファイル経由で置き換え）
- Excel/CSV をシート単位の文字列行リストとして読み込み
"""
from __future__ import annotations

import json
import math
import os
import tempfile
from pathlib import Path
from typing import List, Tuple

import pandas as pd

from .errors import MasterParseError, NotFoundError

EXCEL_EXTS = (".xls", ".xlsx")
CSV_EXTS = (".csv",)
TABULAR_EXTS = EXCEL_EXTS + CSV_EXTS

Rows = List[List[str]]


def safe_strip(val) -> str:
    if val is None or (isinstance(val, float) and math.isnan(val)):
        return ""
    return str(val).strip()


def ensure_exists(path, label: str = "ファイル") -> Path:
    p = Path(path)
    if not p.exists():
        raise NotFoundError(p, label)
    return p


def read_json(path):
    p = ensure_exists(path)
    try:
        with open(p, "r", encoding="utf-8-sig") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MasterParseError(f"JSONとして読み込めません: {p} ({exc})") from exc


def _default_file_mode() -> int:
    # 通常の open() で作った場合と同じ権限（0o666 & ~umask）
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_json(path, data) -> Path:
    """同じディレクトリの一時ファイルに書いてから置き換える。書きかけのファイルは残さない。"""
    p = Path(path)
    out_dir = p.parent
    out_dir.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=out_dir)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.chmod(tmp_path, _default_file_mode())
        os.replace(tmp_path, p)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    return p


def _frame_to_rows(df: pd.DataFrame) -> Rows:
    return [[safe_strip(v) for v in row] for row in df.itertuples(index=False, name=None)]


def read_sheets(path, first_only: bool = False) -> List[Tuple[str, Rows]]:
    """
    表形式ファイルを [(シート名, 行リスト)] で返す。ヘッダー行も1行目としてそのまま含める。
    CSVはファイル名をシート名とした1シート扱い。
    """
    p = ensure_exists(path)
    ext = p.suffix.lower()
    try:
        if ext in CSV_EXTS:
            df = pd.read_csv(p, header=None, dtype=str, encoding="utf-8-sig", keep_default_na=False)
            return [(p.stem, _frame_to_rows(df))]
        if ext not in EXCEL_EXTS:
            raise MasterParseError(f"表形式ファイルではありません: {p}")
        # sheet_name=None でブック内の全シートをシート順の dict で受け取る
        book = pd.read_excel(p, sheet_name=None, header=None, dtype=str)
    except (ImportError, MasterParseError):
        raise
    except Exception as exc:
        raise MasterParseError(f"表形式ファイルとして読み込めません: {p} ({exc})") from exc

    sheets = [(name, _frame_to_rows(df)) for name, df in book.items()]
    return sheets[:1] if first_only else sheets
