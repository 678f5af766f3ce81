# -*- coding: utf-8 -*-
"""
団体コードマスタのデータモデル
- 階層構造: 都道府県コード(2桁) -> 都道府県 -> 市区町村コード(4桁) -> 市区町村
- フラット構造: 都道府県名及び市町村名 -> 団体コード(6桁)
I/Oは持たない。
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

# 階層JSON内の市区町村を保持するキー（旧形式の municipalities も読み込み可）
CITIES_KEYS = ("cities", "municipalities")

PREFECTURE_NAMES = (
    "北海道", "青森県", "岩手県", "宮城県", "秋田県", "山形県", "福島県",
    "茨城県", "栃木県", "群馬県", "埼玉県", "千葉県", "東京都", "神奈川県",
    "新潟県", "富山県", "石川県", "福井県", "山梨県", "長野県", "岐阜県",
    "静岡県", "愛知県", "三重県", "滋賀県", "京都府", "大阪府", "兵庫県",
    "奈良県", "和歌山県", "鳥取県", "島根県", "岡山県", "広島県", "山口県",
    "徳島県", "香川県", "愛媛県", "高知県", "福岡県", "佐賀県", "長崎県",
    "熊本県", "大分県", "宮崎県", "鹿児島県", "沖縄県",
)

# 「群馬県」のように都道府県名だけのエントリ（市区町村名なし）
PREFECTURE_ONLY_PATTERN = re.compile(r"^(北海道|.*[都道府県])$")


@dataclass(frozen=True)
class MunicipalityRecord:
    code: str  # 6桁の団体コード
    name: str  # 都道府県名及び市町村名
    city_name: Optional[str] = None  # 市町村名のみ

    def to_dict(self) -> Dict[str, str]:
        out = {"code": self.code, "name": self.name}
        if self.city_name is not None:
            out["cityName"] = self.city_name
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "MunicipalityRecord":
        return cls(
            code=str(data.get("code", "")),
            name=str(data.get("name", "")),
            city_name=data.get("cityName"),
        )


@dataclass
class Prefecture:
    name: str
    code: str
    cities: Dict[str, MunicipalityRecord] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "code": self.code,
            "cities": {k: v.to_dict() for k, v in self.cities.items()},
        }


HierarchicalMaster = Dict[str, Prefecture]
FlatMaster = Dict[str, str]


def split_code(code: str) -> Tuple[str, str]:
    """団体コードを (都道府県コード, 市区町村コード) に分割。7桁目以降は無視する。"""
    s = code.strip()
    return s[:2], s[2:6]


def extract_prefecture_name(full_name: str) -> str:
    # 前方一致で都道府県名を取り出す。該当なしは空文字
    for pref in PREFECTURE_NAMES:
        if full_name.startswith(pref):
            return pref
    return ""


def is_prefecture_only(name: str) -> bool:
    return bool(PREFECTURE_ONLY_PATTERN.fullmatch(name))


def nested_cities(value) -> Optional[dict]:
    """都道府県エントリから市区町村マップを取り出す。該当キーがなければ None。"""
    if not isinstance(value, dict):
        return None
    for key in CITIES_KEYS:
        cities = value.get(key)
        if isinstance(cities, dict):
            return cities
    return None


def flatten(hierarchical: HierarchicalMaster) -> FlatMaster:
    # 全都道府県・全市区町村を走査して 名称 -> 団体コード の逆引きマップを作る
    flat: FlatMaster = {}
    for prefecture in hierarchical.values():
        for city in prefecture.cities.values():
            if city.name:
                flat[city.name] = city.code
    return flat


def hierarchical_to_dict(hierarchical: HierarchicalMaster) -> dict:
    return {code: pref.to_dict() for code, pref in hierarchical.items()}


def hierarchical_from_dict(data: dict) -> HierarchicalMaster:
    hierarchical: HierarchicalMaster = {}
    for pref_code, value in data.items():
        cities = nested_cities(value) or {}
        hierarchical[pref_code] = Prefecture(
            name=str(value.get("name", "")) if isinstance(value, dict) else "",
            code=str(value.get("code", pref_code)) if isinstance(value, dict) else pref_code,
            cities={
                city_code: MunicipalityRecord.from_dict(city)
                for city_code, city in cities.items()
                if isinstance(city, dict)
            },
        )
    return hierarchical
