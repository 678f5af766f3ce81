# -*- coding: utf-8 -*-
"""
全自治体の避難所データ（指定避難所 evacuation / 緊急避難場所 emergency）の有無をチェックする
- city-to-code.json の各自治体について <団体コード>.json の存在だけを確認（中身は読まない）
- 「群馬県」のような都道府県名のみのエントリは対象外
- 結果を data-availability.json に保存し、概要を表示
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from mst_logic import citycode_loader
from mst_logic.citycode_io import ensure_exists, write_json
from mst_logic.citycode_model import is_prefecture_only
from mst_logic.cli_common import CliArgumentParser, run_cli

BASE_DIR = Path("docs") / "api" / "v0"
CITY_TO_CODE_NAME = "city-to-code.json"
EVACUATION_DIR_NAME = "evacuation"
EMERGENCY_DIR_NAME = "emergency"
OUTPUT_NAME = "data-availability.json"
SAMPLE_SIZE = 5


@dataclass(frozen=True)
class UnavailableCity:
    code: str
    name: str
    evacuation: bool
    emergency: bool

    def to_dict(self) -> Dict[str, object]:
        return {"code": self.code, "name": self.name, "evacuation": self.evacuation, "emergency": self.emergency}


@dataclass
class AvailabilityReport:
    both: List[UnavailableCity] = field(default_factory=list)
    evacuation_only: List[UnavailableCity] = field(default_factory=list)
    emergency_only: List[UnavailableCity] = field(default_factory=list)
    total: int = 0
    available: int = 0
    evacuation_total: int = 0
    emergency_total: int = 0

    @property
    def unavailable(self) -> int:
        return self.total - self.available

    def to_dict(self) -> dict:
        return {
            "unavailable": {
                "both": [c.to_dict() for c in self.both],
                "evacuationOnly": [c.to_dict() for c in self.evacuation_only],
                "emergencyOnly": [c.to_dict() for c in self.emergency_only],
            },
            "summary": {
                "total": self.total,
                "available": self.available,
                "unavailable": self.unavailable,
                "bothMissing": len(self.both),
                "evacuationMissing": len(self.evacuation_only),
                "emergencyMissing": len(self.emergency_only),
                "evacuationTotal": self.evacuation_total,
                "emergencyTotal": self.emergency_total,
            },
        }


def check_data_availability(master: Dict[str, str], evacuation_dir, emergency_dir) -> AvailabilityReport:
    evacuation_dir = Path(evacuation_dir)
    emergency_dir = Path(emergency_dir)
    report = AvailabilityReport()

    for city_name, code in master.items():
        # 都道府県のみのエントリはスキップ
        if is_prefecture_only(city_name):
            continue
        report.total += 1

        has_evacuation = (evacuation_dir / f"{code}.json").exists()
        has_emergency = (emergency_dir / f"{code}.json").exists()
        if has_evacuation:
            report.evacuation_total += 1
        if has_emergency:
            report.emergency_total += 1
        if has_evacuation or has_emergency:
            report.available += 1

        entry = UnavailableCity(code=code, name=city_name, evacuation=has_evacuation, emergency=has_emergency)
        if not has_evacuation and not has_emergency:
            report.both.append(entry)
        elif not has_evacuation:
            report.evacuation_only.append(entry)
        elif not has_emergency:
            report.emergency_only.append(entry)

    return report


def check_data_availability_file(master_path, evacuation_dir, emergency_dir) -> AvailabilityReport:
    master = citycode_loader.load_city_code_master(master_path)
    return check_data_availability(master, evacuation_dir, emergency_dir)


def print_summary(report: AvailabilityReport) -> None:
    print("\n=== チェック結果 ===")
    print(f"総自治体数: {report.total}")
    print(f"データあり: {report.available}")
    print(f"データなし: {report.unavailable}")
    print(f"\n指定避難所データあり: {report.evacuation_total}")
    print(f"緊急避難所データあり: {report.emergency_total}")
    print(f"\n両方なし: {len(report.both)}")
    print(f"指定避難所のみなし: {len(report.evacuation_only)}")
    print(f"緊急避難所のみなし: {len(report.emergency_only)}")


def print_samples(report: AvailabilityReport, limit: int = SAMPLE_SIZE) -> None:
    if not report.both:
        return
    print(f"\n両方のデータがない自治体（最初の{limit}件）:")
    for city in report.both[:limit]:
        print(f"  - {city.name} ({city.code})")


def run(base_dir=BASE_DIR) -> AvailabilityReport:
    base_dir = Path(base_dir)
    city_to_code_path = base_dir / CITY_TO_CODE_NAME
    evacuation_dir = base_dir / EVACUATION_DIR_NAME
    emergency_dir = base_dir / EMERGENCY_DIR_NAME
    output_path = base_dir / OUTPUT_NAME

    print("避難所データの可用性をチェックしています...")
    print(f"city-to-code.json: {city_to_code_path}")
    print(f"evacuation dir: {evacuation_dir}")
    print(f"emergency dir: {emergency_dir}")

    report = check_data_availability_file(city_to_code_path, evacuation_dir, emergency_dir)
    print_summary(report)

    write_json(output_path, report.to_dict())
    print(f"\n結果を保存しました: {output_path}")
    print_samples(report)
    return report


def build_parser() -> argparse.ArgumentParser:
    parser = CliArgumentParser(
        prog="check-data-availability",
        description="city-to-code.json の全自治体について避難所データの有無をチェック",
    )
    parser.add_argument("--base-dir", default=str(BASE_DIR), help=f"データディレクトリ (default: {BASE_DIR})")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_cli(
        build_parser(),
        argv,
        validate=lambda args: ensure_exists(Path(args.base_dir) / CITY_TO_CODE_NAME, "city-to-code.json"),
        body=lambda args: run(args.base_dir),
    )


if __name__ == "__main__":
    sys.exit(main())
