# -*- coding: utf-8 -*-
"""
団体コードマスタ読み込み
- JSON（階層構造 code-to-city.json / フラット構造 city-to-code.json）
- 表形式（.xls/.xlsx/.csv。1シート目の 1列目=団体コード, 2列目=都道府県名及び市町村名）
どの形式でも フラットマップ（名称 -> 団体コード）を返す。
"""
from __future__ import annotations

from pathlib import Path

from . import citycode_model as model
from .citycode_io import TABULAR_EXTS, ensure_exists, read_json, read_sheets
from .errors import MasterParseError, UnsupportedFormatError

JSON_EXTS = (".json",)
SUPPORTED_EXTS = JSON_EXTS + TABULAR_EXTS


def flat_master_from_json(data) -> model.FlatMaster:
    if not isinstance(data, dict):
        raise MasterParseError("マスタJSONのトップレベルはオブジェクトである必要があります")
    if not data:
        # 空だと階層/フラットの判定ができないため推測しない
        raise MasterParseError("マスタJSONが空です")

    first_key = next(iter(data))
    if model.nested_cities(data[first_key]) is not None:
        return model.flatten(model.hierarchical_from_dict(data))

    bad = [k for k, v in data.items() if not isinstance(v, str)]
    if bad:
        raise MasterParseError(f"フラット構造のマスタに文字列以外の値があります: {bad[:3]}")
    return dict(data)


def flat_master_from_rows(rows) -> model.FlatMaster:
    # ヘッダー行をスキップして、データ行を処理
    city_code_map: model.FlatMaster = {}
    for row in rows[1:]:
        if len(row) < 2:
            continue
        city_code = row[0].strip()
        city_name = row[1].strip()
        if city_name and city_code:
            city_code_map[city_name] = city_code
    return city_code_map


def load_city_code_master(path) -> model.FlatMaster:
    p = Path(path)
    ext = p.suffix.lower()
    if ext not in SUPPORTED_EXTS:
        raise UnsupportedFormatError(ext, SUPPORTED_EXTS)
    ensure_exists(p, "市区町村コードマスターファイル")

    if ext in JSON_EXTS:
        data = read_json(p)
        flat = flat_master_from_json(data)
        kind = "JSON/階層" if model.nested_cities(data[next(iter(data))]) is not None else "JSON/フラット"
    else:
        sheets = read_sheets(p, first_only=True)
        flat = flat_master_from_rows(sheets[0][1]) if sheets else {}
        kind = "表形式"

    print(f"市区町村コードマスター読み込み完了 ({kind}): {len(flat)}件")
    return flat


load = load_city_code_master
