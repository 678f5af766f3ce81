# -*- coding: utf-8 -*-
import pytest

from mst_logic import citycode_loader
from mst_logic.errors import MasterParseError, NotFoundError, UnsupportedFormatError

HIERARCHICAL = {
    "01": {
        "name": "北海道",
        "code": "01",
        "cities": {
            "1002": {"code": "011002", "name": "北海道札幌市", "cityName": "札幌市"},
            "2025": {"code": "012025", "name": "北海道函館市", "cityName": "函館市"},
        },
    },
    "13": {
        "name": "東京都",
        "code": "13",
        "cities": {"1016": {"code": "131016", "name": "東京都千代田区", "cityName": "千代田区"}},
    },
}


def test_load_hierarchical_json(write_json_file):
    path = write_json_file("code-to-city.json", HIERARCHICAL)
    assert citycode_loader.load_city_code_master(path) == {
        "北海道札幌市": "011002",
        "北海道函館市": "012025",
        "東京都千代田区": "131016",
    }


def test_load_flat_json(write_json_file):
    flat = {"北海道札幌市": "011002", "群馬県": "100005"}
    path = write_json_file("city-to-code.json", flat)
    assert citycode_loader.load(path) == flat


def test_uppercase_extension_is_recognized(write_json_file):
    path = write_json_file("CITY.JSON", {"北海道札幌市": "011002"})
    assert citycode_loader.load(path) == {"北海道札幌市": "011002"}


def test_empty_json_is_rejected(write_json_file):
    path = write_json_file("empty.json", {})
    with pytest.raises(MasterParseError):
        citycode_loader.load(path)


def test_non_object_json_is_rejected(write_json_file):
    path = write_json_file("list.json", [["011002", "北海道札幌市"]])
    with pytest.raises(MasterParseError):
        citycode_loader.load(path)


def test_flat_json_with_non_string_values_is_rejected(write_json_file):
    path = write_json_file("bad.json", {"北海道札幌市": 11002})
    with pytest.raises(MasterParseError):
        citycode_loader.load(path)


def test_malformed_json_is_parse_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(MasterParseError):
        citycode_loader.load(path)


def test_missing_file_is_not_found(tmp_path):
    with pytest.raises(NotFoundError):
        citycode_loader.load(tmp_path / "missing.json")


def test_unsupported_extension(tmp_path):
    path = tmp_path / "master.txt"
    path.write_text("011002,北海道札幌市", encoding="utf-8")
    with pytest.raises(UnsupportedFormatError):
        citycode_loader.load(path)


def test_load_xlsx_uses_first_sheet_and_skips_header(write_xlsx):
    path = write_xlsx("master.xlsx", {
        "first": [
            ["団体コード", "都道府県名及び市町村名"],
            ["011002", "北海道札幌市"],
            ["", "北海道函館市"],
            ["012033", " "],
            ["011002", "北海道札幌市 "],
            ["011011", "北海道札幌市"],
        ],
        "second": [["header", "header"], ["131016", "東京都千代田区"]],
    })
    assert citycode_loader.load(path) == {"北海道札幌市": "011011"}


def test_load_csv(tmp_path):
    path = tmp_path / "master.csv"
    path.write_text("code,name\n011002,北海道札幌市\n131016,東京都千代田区\n", encoding="utf-8-sig")
    assert citycode_loader.load(path) == {"北海道札幌市": "011002", "東京都千代田区": "131016"}


def test_flat_master_from_rows_needs_two_columns():
    rows = [["code", "name"], ["011002"], ["131016", "東京都千代田区"]]
    assert citycode_loader.flat_master_from_rows(rows) == {"東京都千代田区": "131016"}
