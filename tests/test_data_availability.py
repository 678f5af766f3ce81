# -*- coding: utf-8 -*-
from geo_logic import data_availability as availability


def touch(directory, code):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / f"{code}.json").write_text("{}", encoding="utf-8")


def test_single_city_missing_emergency(tmp_path):
    evac, emerg = tmp_path / "evacuation", tmp_path / "emergency"
    touch(evac, "010006")
    emerg.mkdir()

    report = availability.check_data_availability({"Test Pref TestCity": "010006"}, evac, emerg)
    summary = report.to_dict()["summary"]

    assert summary["total"] == 1
    assert summary["available"] == 1
    assert summary["unavailable"] == 0
    assert summary["evacuationMissing"] == 0
    assert summary["emergencyMissing"] == 1
    assert summary["bothMissing"] == 0
    assert report.emergency_only[0].to_dict() == {
        "code": "010006", "name": "Test Pref TestCity", "evacuation": True, "emergency": False,
    }


def test_prefecture_only_entries_are_excluded(tmp_path):
    evac, emerg = tmp_path / "evacuation", tmp_path / "emergency"
    touch(evac, "100005")
    touch(emerg, "100005")
    master = {"群馬県": "100005", "北海道": "010006", "群馬県前橋市": "102016"}

    report = availability.check_data_availability(master, evac, emerg)

    assert report.total == 1
    assert [c.name for c in report.both] == ["群馬県前橋市"]
    assert report.evacuation_total == 0


def test_buckets_are_exclusive_and_counts_add_up(tmp_path):
    evac, emerg = tmp_path / "evacuation", tmp_path / "emergency"
    master = {
        "A県a市": "010001",  # 両方あり
        "A県b市": "010002",  # 指定避難所のみあり
        "A県c市": "010003",  # 緊急避難場所のみあり
        "A県d市": "010004",  # 両方なし
        "A県e町": "010005",  # 両方なし
    }
    for code in ("010001", "010002"):
        touch(evac, code)
    for code in ("010001", "010003"):
        touch(emerg, code)

    report = availability.check_data_availability(master, evac, emerg)

    assert [c.code for c in report.both] == ["010004", "010005"]
    assert [c.code for c in report.evacuation_only] == ["010003"]
    assert [c.code for c in report.emergency_only] == ["010002"]
    codes = [c.code for c in report.both + report.evacuation_only + report.emergency_only]
    assert len(codes) == len(set(codes))
    assert report.available + report.unavailable == report.total == 5
    assert report.evacuation_total == 2
    assert report.emergency_total == 2


def test_missing_directories_count_as_absent(tmp_path):
    report = availability.check_data_availability({"A県a市": "010001"}, tmp_path / "x", tmp_path / "y")
    assert report.unavailable == 1
    assert len(report.both) == 1


def test_run_writes_report(tmp_path, write_json_file, read_json_file, capsys):
    base = tmp_path / "docs" / "api" / "v0"
    write_json_file("docs/api/v0/city-to-code.json", {"群馬県": "100005", "群馬県前橋市": "102016", "群馬県高崎市": "102024"})
    touch(base / "evacuation", "102024")
    (base / "emergency").mkdir()

    availability.run(base)

    data = read_json_file(base / "data-availability.json")
    assert data["summary"]["total"] == 2
    assert data["summary"]["available"] == 1
    assert data["unavailable"]["both"] == [
        {"code": "102016", "name": "群馬県前橋市", "evacuation": False, "emergency": False},
    ]
    assert set(data["unavailable"]) == {"both", "evacuationOnly", "emergencyOnly"}
    out = capsys.readouterr().out
    assert "総自治体数: 2" in out
    assert "群馬県前橋市 (102016)" in out


def test_main_with_base_dir(tmp_path, write_json_file):
    write_json_file("v0/city-to-code.json", {"A県a市": "010001"})
    assert availability.main(["--base-dir", str(tmp_path / "v0")]) == 0
    assert (tmp_path / "v0" / "data-availability.json").exists()


def test_main_missing_master_exits_1(tmp_path, capsys):
    assert availability.main(["--base-dir", str(tmp_path)]) == 1
    assert "city-to-code.json" in capsys.readouterr().err
    assert not (tmp_path / "data-availability.json").exists()
