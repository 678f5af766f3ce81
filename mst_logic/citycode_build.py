# -*- coding: utf-8 -*-
"""
総務省の「都道府県コード及び市区町村コード」一覧（Excel）から団体コードマスタJSONを生成するスクリプト。
仕様:
- 全シートをシート順に処理し、各シートの1行目（ヘッダー）はスキップ
- 1列目: 団体コード（6桁）, 2列目: 都道府県名（漢字）, 3列目: 市区町村名（漢字）
- 都道府県名+市区町村名が空、または団体コードが6文字未満の行は読み飛ばす
- 団体コード先頭2桁=都道府県コード、3〜6桁目=市区町村コード（7桁目以降は無視）
- 同じキーの市区町村は後勝ち（シート順→行順）
出力:
- code-to-city.json（階層構造）
- 同じディレクトリに city-to-code.json（名称 -> 団体コードの逆引き）
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from . import citycode_model as model
from .citycode_io import Rows, ensure_exists, read_sheets, safe_strip, write_json
from .cli_common import CliArgumentParser, run_cli

DEFAULT_OUTPUT = "code-to-city.json"
CITY_TO_CODE_NAME = "city-to-code.json"
CODE_LENGTH = 6
DEBUG_ROWS = 5


@dataclass
class BuildResult:
    hierarchical: model.HierarchicalMaster
    flat: model.FlatMaster
    processed: int = 0
    skipped: int = 0
    long_codes: List[str] = field(default_factory=list)
    per_sheet: Dict[str, int] = field(default_factory=dict)


def parse_row(row: Sequence[str]) -> Optional[Tuple[str, model.MunicipalityRecord]]:
    """1行を (都道府県名, 市区町村レコード) に変換。採用しない行は None。"""
    if not row or len(row) < 2:
        return None
    full_code = safe_strip(row[0])
    pref_name = safe_strip(row[1])
    city_name = safe_strip(row[2]) if len(row) > 2 else ""
    full_name = pref_name + city_name
    if not full_name or len(full_code) < CODE_LENGTH:
        return None
    return pref_name, model.MunicipalityRecord(code=full_code, name=full_name, city_name=city_name)


def build_master(sheets: Iterable[Tuple[str, Rows]]) -> BuildResult:
    hierarchical: model.HierarchicalMaster = {}
    per_sheet: Dict[str, int] = {}
    long_codes: List[str] = []
    processed = skipped = 0

    for sheet_name, rows in sheets:
        count = 0
        for row in rows[1:]:
            parsed = parse_row(row)
            if parsed is None:
                skipped += 1
                continue
            pref_name, record = parsed
            pref_code, city_code = model.split_code(record.code)
            if len(record.code) > CODE_LENGTH:
                long_codes.append(record.code)

            # 都道府県は初出時に作成
            prefecture = hierarchical.get(pref_code)
            if prefecture is None:
                prefecture = model.Prefecture(name=pref_name, code=pref_code)
                hierarchical[pref_code] = prefecture
            prefecture.cities[city_code] = record
            count += 1
        per_sheet[sheet_name] = per_sheet.get(sheet_name, 0) + count
        processed += count

    return BuildResult(
        hierarchical=hierarchical,
        flat=model.flatten(hierarchical),
        processed=processed,
        skipped=skipped,
        long_codes=long_codes,
        per_sheet=per_sheet,
    )


def city_to_code_path(output_path) -> Path:
    # 階層JSONと同じディレクトリに出力
    return Path(output_path).parent / CITY_TO_CODE_NAME


def _print_head(sheet_name: str, rows: Rows) -> None:
    print(f"シート \"{sheet_name}\" を処理中...")
    print(f"  行数: {len(rows)}")
    for i, row in enumerate(rows[:DEBUG_ROWS]):
        cells = ", ".join(f'"{v}"' for v in row[:4]) if row else "empty"
        print(f"    行{i}: [{cells}]")


def convert_excel_to_json(input_path, output_path=DEFAULT_OUTPUT) -> BuildResult:
    print(f"Excelファイル読み込み: {input_path}")
    sheets = read_sheets(input_path)
    print(f"利用可能なシート: {', '.join(name for name, _ in sheets)}\n")
    for sheet_name, rows in sheets:
        _print_head(sheet_name, rows)

    result = build_master(sheets)
    for sheet_name, count in result.per_sheet.items():
        print(f"  {sheet_name}: 処理件数 {count}件")
    if result.long_codes:
        print(f"注意: 7文字以上の団体コード {len(result.long_codes)}件（先頭6文字で登録）: {result.long_codes[:5]}")

    out = write_json(output_path, model.hierarchical_to_dict(result.hierarchical))
    print("JSON変換完了:")
    print(f"  都道府県数: {len(result.hierarchical)}")
    print(f"  市区町村数合計: {result.processed}")
    print(f"出力ファイル (code-to-city): {out}")

    reverse = write_json(city_to_code_path(out), result.flat)
    print(f"出力ファイル (city-to-code): {reverse}")
    print(f"  逆引きマップ件数: {len(result.flat)}件")
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = CliArgumentParser(
        prog="citycode-build",
        description="団体コード一覧(Excel)から code-to-city.json / city-to-code.json を生成",
        epilog="例: citycode-build 都道府県コード及び市区町村コード.xls code-to-city.json",
    )
    parser.add_argument("input", help="入力Excelファイルパス (.xls/.xlsx/.csv)")
    parser.add_argument("output", nargs="?", default=DEFAULT_OUTPUT, help=f"出力JSONファイルパス (default: {DEFAULT_OUTPUT})")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_cli(
        build_parser(),
        argv,
        validate=lambda args: ensure_exists(args.input),
        body=lambda args: convert_excel_to_json(args.input, args.output),
    )


if __name__ == "__main__":
    sys.exit(main())
