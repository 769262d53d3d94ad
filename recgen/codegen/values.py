"""
値フォーマッタ — 汎用値を Python リテラル・引数リストに変換

主な機能:
  - format_value: bool / None / str / 数値 / list / dict をリテラル表記に変換
  - format_options: 設定辞書をキー昇順の ``key=value`` 引数列に変換
"""

from __future__ import annotations

import json
import math
from typing import Any, Mapping

from ..errors import UnsupportedValueError
from .strings import quote, to_snake_case


def format_value(value: Any) -> str:
    """値を Python のリテラル表記に変換する。

    変換ルール:
      - False / True → ``False`` / ``True``
      - None → ``None``
      - list → ``[a, b]``（要素ごとに再帰変換）
      - tuple → ``(a, b)``（要素 1 つの場合は ``(a,)``）
      - str → ダブルクォートのエスケープ済みリテラル
      - dict → JSON 形式の ``{"x":10,"y":20}``（値は再帰変換）
      - int / float → 数値表記（整数値の float は小数部を省略。inf / nan は不可）

    Args:
        value: 変換対象の値

    Returns:
        Python リテラル文字列

    Raises:
        UnsupportedValueError: 上記以外の型が渡された場合
    """
    # bool は int のサブクラスなので数値より先に判定する
    if value is False:
        return "False"
    if value is True:
        return "True"
    if value is None:
        return "None"
    if isinstance(value, list):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    if isinstance(value, tuple):
        elements = [format_value(item) for item in value]
        return "(" + ", ".join(elements) + ("," if len(elements) == 1 else "") + ")"
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, dict):
        items = (
            f"{json.dumps(str(key), ensure_ascii=False)}:{format_value(item)}"
            for key, item in value.items()
        )
        return "{" + ",".join(items) + "}"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # inf / nan は Python のリテラルで表せない
        if not math.isfinite(value):
            raise UnsupportedValueError(value)
        if value.is_integer():
            return str(int(value))
        return repr(value)
    raise UnsupportedValueError(value)


def format_options(
    value: Mapping[str, Any],
    has_arguments: bool,
    as_dict: bool = False,
    separator: str = ", ",
) -> str:
    """設定辞書をキーワード引数列（または辞書要素列）に変換する。

    値が None のキーは除外し、残りのキーを元のキー名の辞書順に並べる。
    キー名は snake_case に変換する。

    Args:
        value: キーと値の辞書
        has_arguments: 先行する引数があり、先頭に ``", "`` が必要な場合 True
        as_dict: ``"key": value`` 形式で出力する場合 True
        separator: 要素間の区切り（1 行 1 要素にする場合はカンマ + 改行）

    Returns:
        引数列の文字列。有効なキーが無い場合は空文字列
    """
    keys = sorted(key for key, item in value.items() if item is not None)
    if not keys:
        return ""
    if as_dict:
        parts = [f'"{to_snake_case(key)}": {format_value(value[key])}' for key in keys]
    else:
        parts = [f"{to_snake_case(key)}={format_value(value[key])}" for key in keys]
    return (", " if has_arguments else "") + separator.join(parts)
