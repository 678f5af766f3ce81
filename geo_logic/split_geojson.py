# -*- coding: utf-8 -*-
"""
避難所GeoJSONを市区町村（団体コード）ごとに分割する
- 市区町村コードマスター（JSON/Excel/CSV）を読み込み、名称 -> 団体コードで突合
- 突合できないフィーチャーは unknown グループへ（取りこぼし・重複なし）
- グループごとに <団体コード>.json / unknown.json を出力
ジオメトリは参照も加工もしない。
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from mst_logic import citycode_loader
from mst_logic.citycode_io import ensure_exists, read_json, write_json
from mst_logic.cli_common import CliArgumentParser, run_cli
from mst_logic.errors import MasterParseError

NAME_PROPERTY = "都道府県名及び市町村名"
UNKNOWN_KEY = "unknown"
UNKNOWN_LABEL = "不明"
DEFAULT_OUTPUT_DIR = "./output"


def load_feature_collection(path) -> dict:
    data = read_json(path)
    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        raise MasterParseError(f"FeatureCollection ではありません（features 配列がありません）: {path}")
    return data


def resolve_group(feature: dict, master: Dict[str, str], name_property: str = NAME_PROPERTY) -> str:
    props = feature.get("properties") if isinstance(feature, dict) else None
    city_name = props.get(name_property) if isinstance(props, dict) else None
    code = master.get(city_name) if isinstance(city_name, str) and city_name else None
    if code:
        return code
    return UNKNOWN_KEY


def partition_features(collection: dict, master: Dict[str, str], name_property: str = NAME_PROPERTY) -> Dict[str, dict]:
    """
    フィーチャーを団体コードでグループ化して {キー: FeatureCollection} を返す。
    キーの並びは初出順、グループ内は入力順。
    """
    grouped: Dict[str, List[dict]] = {}
    for feature in collection.get("features", []):
        key = resolve_group(feature, master, name_property)
        grouped.setdefault(key, []).append(feature)

    return {
        key: {
            "type": collection.get("type"),
            "name": UNKNOWN_LABEL if key == UNKNOWN_KEY else key,
            "features": features,
        }
        for key, features in grouped.items()
    }


def output_path_for(output_dir, key: str) -> Path:
    # 団体コード.json としてフラットに出力（例: 011002.json）
    return Path(output_dir) / f"{key}.json"


def write_groups(groups: Dict[str, dict], output_dir, progress=None) -> List[Path]:
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    total = len(groups)
    for done, (key, collection) in enumerate(groups.items(), start=1):
        out = write_json(output_path_for(output_dir, key), collection)
        written.append(out)
        if progress:
            progress(done, total, f"{key}: {len(collection['features'])}件 → {out}")
    return written


def _print_progress(done: int, total: int, message: str) -> None:
    print(f"[{done}/{total}] {message}")


def split_geojson_by_city_code(
    input_path,
    master_path,
    output_dir=DEFAULT_OUTPUT_DIR,
    name_property: str = NAME_PROPERTY,
) -> Dict[str, int]:
    master = citycode_loader.load_city_code_master(master_path)
    collection = load_feature_collection(input_path)

    groups = partition_features(collection, master, name_property)
    unknown = groups.get(UNKNOWN_KEY)
    if unknown:
        print(f"警告: 市区町村コードが見つからないフィーチャー: {len(unknown['features'])}件\n")

    written = write_groups(groups, output_dir, progress=_print_progress)
    print(f"\n処理完了: {len(written)}ファイルを出力しました")
    print(f"合計フィーチャー数: {len(collection['features'])}")
    return {key: len(group["features"]) for key, group in groups.items()}


def build_parser() -> argparse.ArgumentParser:
    parser = CliArgumentParser(
        prog="split-geojson",
        description="GeoJSONを市区町村コードごとのファイルに分割",
        epilog=(
            "例1: split-geojson input.geojson city-to-code.json ./output  (推奨・高速)\n"
            "例2: split-geojson input.geojson code-to-city.json ./output\n"
            "例3: split-geojson input.geojson 都道府県コード及び市区町村コード.xls ./output"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", help="入力GeoJSONファイルパス")
    parser.add_argument("master", help="市区町村コードマスターパス (.xls/.xlsx/.csv/.json)")
    parser.add_argument("output_dir", nargs="?", default=DEFAULT_OUTPUT_DIR, help=f"出力ディレクトリ (default: {DEFAULT_OUTPUT_DIR})")
    parser.add_argument("--name-property", default=NAME_PROPERTY, help=f"市区町村名を持つプロパティ名 (default: {NAME_PROPERTY})")
    return parser


def _validate(args: argparse.Namespace) -> None:
    ensure_exists(args.input, "入力ファイル")
    ensure_exists(args.master, "市区町村コードマスターファイル")
    print(f"入力ファイル: {args.input}")
    print(f"市区町村コードマスター: {args.master}")
    print(f"出力ディレクトリ: {args.output_dir}\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_cli(
        build_parser(),
        argv,
        validate=_validate,
        body=lambda args: split_geojson_by_city_code(args.input, args.master, args.output_dir, args.name_property),
    )


if __name__ == "__main__":
    sys.exit(main())
