# -*- coding: utf-8 -*-
import json

import pandas as pd
import pytest


@pytest.fixture
def write_json_file(tmp_path):
    def _write(name, data):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_xlsx(tmp_path):
    """{シート名: 行リスト} をヘッダーなしの生データとして xlsx に書き出す。"""

    def _write(name, sheets):
        path = tmp_path / name
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet_name, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
        return path

    return _write


@pytest.fixture
def read_json_file():
    def _read(path):
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    return _read
