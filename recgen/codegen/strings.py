"""
文字列ユーティリティ — 文字列リテラルのエスケープと識別子の命名変換

主な機能:
  - escape_with_quotes: JSON 互換のエスケープを施した引用符付きリテラル生成
  - to_snake_case: camelCase → snake_case 変換（clickCount → click_count）
"""

from __future__ import annotations

import json
import re

_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_UPPER_UPPER_LOWER = re.compile(r"([A-Z])([A-Z][a-z])")


def escape_with_quotes(text: str, char: str = "'") -> str:
    """文字列をエスケープし、指定の引用符で囲んだリテラルを返す。

    バックスラッシュ・制御文字は JSON と同じ規則でエスケープし、
    囲み文字と同じ引用符のみバックスラッシュで退避する。
    非 ASCII 文字はそのまま残す。

    Args:
        text: エスケープ対象の文字列
        char: 囲み文字（' / " / `）

    Returns:
        引用符付きのリテラル文字列

    Raises:
        ValueError: 未対応の囲み文字が指定された場合
    """
    stringified = json.dumps(text, ensure_ascii=False)
    escaped = stringified[1:-1].replace('\\"', '"')
    if char == "'":
        return char + escaped.replace("'", "\\'") + char
    if char == '"':
        return char + escaped.replace('"', '\\"') + char
    if char == "`":
        return char + escaped.replace("`", "\\`") + char
    raise ValueError(f"未対応の囲み文字です: {char!r}")


def to_snake_case(name: str) -> str:
    """camelCase の識別子を snake_case に変換する。

    例: ``clickCount`` → ``click_count``、``ignoreHTTPSErrors`` → ``ignore_https_errors``
    """
    name = _LOWER_UPPER.sub(r"\1_\2", name)
    name = _UPPER_UPPER_LOWER.sub(r"\1_\2", name)
    return name.lower()


def quote(text: str) -> str:
    """Python 向けにダブルクォートで囲んだ文字列リテラルを返す。"""
    return escape_with_quotes(text, '"')
