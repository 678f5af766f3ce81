# -*- coding: utf-8 -*-
"""
CLI共通処理
- 引数不足は ArgumentError（argparse 標準の終了コード2ではなく1で終了させるため）
- 前提チェック→本処理の順で実行し、失敗時はメッセージを stderr に出して 1 を返す
"""
from __future__ import annotations

import argparse
import sys
from typing import Callable, Optional, Sequence

from .errors import ArgumentError, CityCodeError


class CliArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        raise ArgumentError(message)


def run_cli(
    parser: argparse.ArgumentParser,
    argv: Optional[Sequence[str]],
    validate: Callable[[argparse.Namespace], None],
    body: Callable[[argparse.Namespace], object],
) -> int:
    try:
        args = parser.parse_args(argv)
        validate(args)
    except CityCodeError as exc:
        print(f"エラー: {exc}", file=sys.stderr)
        return 1

    try:
        body(args)
    except Exception as exc:
        print(f"エラーが発生しました: {exc}", file=sys.stderr)
        return 1
    return 0
