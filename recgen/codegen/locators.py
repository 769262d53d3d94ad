"""
ロケータアダプタ — レコーダーのセレクタ文字列を Playwright ロケータ式に変換

レコーダーが出力する内部セレクタ（``internal:role=button[name="OK"i]`` 等）を
Python の Playwright API 呼び出し列（``get_by_role("button", name="OK")`` 等）に変換する。
コード生成器はアダプタを差し替え可能な協調オブジェクトとして扱う。

対応する内部セレクタ:
  - internal:role=ROLE[attr=value]... → get_by_role
  - internal:testid=[data-testid="x"s] → get_by_test_id
  - internal:label / internal:text → get_by_label / get_by_text
  - internal:attr=[placeholder|alt|title="x"] → get_by_placeholder / get_by_alt_text / get_by_title
  - internal:has-text="x" → filter(has_text=...)
  - nth=N → first / last / nth(N)
  - それ以外 → locator(...)

値が ``/pattern/flags`` 形式の場合は ``re.compile(r"pattern", re.IGNORECASE)`` として出力する。
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional, Protocol, runtime_checkable

from .strings import quote

logger = logging.getLogger(__name__)

# 引用符付きの値 + 大文字小文字フラグ（i: 部分一致, s: 完全一致）
_QUOTED_VALUE = re.compile(r'^"((?:[^"\\]|\\.)*)"([is]?)$')
_ROLE_ATTR = re.compile(r'\[([\w-]+)=("(?:[^"\\]|\\.)*"[is]?|[^\]]*)\]')
_ATTR_BODY = re.compile(r'^\[([\w-]+)=("(?:[^"\\]|\\.)*"[is]?|/.*/[dgimsuy]*)\]$')
# /pattern/flags 形式の正規表現値
_REGEX_BODY = re.compile(r"^/(.*)/([dgimsuy]*)$", re.DOTALL)

_ATTR_METHODS = {
    "data-testid": "get_by_test_id",
    "placeholder": "get_by_placeholder",
    "alt": "get_by_alt_text",
    "title": "get_by_title",
}


# ---------------------------------------------------------------------------
# アダプタ Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class LocatorAdapter(Protocol):
    """セレクタ文字列をターゲット言語のロケータ式に変換する協調オブジェクト。"""

    def to_locator(self, language: str, selector: str) -> str:
        """セレクタを決定的にロケータ式へ変換する。

        Args:
            language: ターゲット言語（"python" 等）
            selector: レコーダーが出力したセレクタ文字列

        Returns:
            ロケータ式（例: ``get_by_role("button", name="OK")``）
        """
        ...


# ---------------------------------------------------------------------------
# 標準アダプタ
# ---------------------------------------------------------------------------

class PlaywrightLocatorAdapter:
    """Playwright の内部セレクタを Python ロケータ式に変換する標準アダプタ。"""

    def to_locator(self, language: str, selector: str) -> str:
        if language != "python":
            raise ValueError(f"未対応の言語です: {language}")

        parts = _split_chain(selector)
        tokens: list[str] = []
        for part in parts:
            tokens.append(self._convert_part(part))
        locator = ".".join(tokens)
        logger.debug("セレクタを変換しました: %s → %s", selector, locator)
        return locator

    def _convert_part(self, part: str) -> str:
        """` >> ` で区切られた 1 要素をロケータ呼び出しに変換する。"""
        if part.startswith("nth="):
            index = part[len("nth="):]
            if index == "0":
                return "first"
            if index == "-1":
                return "last"
            return f"nth({index})"

        engine, _, body = part.partition("=")
        if engine == "internal:role":
            return _role_locator(body)
        if engine in ("internal:text", "internal:label"):
            text, exact = _text_argument(body)
            method = "get_by_text" if engine == "internal:text" else "get_by_label"
            return f"{method}({text}{', exact=True' if exact else ''})"
        if engine in ("internal:testid", "internal:attr"):
            match = _ATTR_BODY.match(body)
            if match and match.group(1) in _ATTR_METHODS:
                text, exact = _text_argument(match.group(2))
                method = _ATTR_METHODS[match.group(1)]
                if method == "get_by_test_id":
                    return f"{method}({text})"
                return f"{method}({text}{', exact=True' if exact else ''})"
        if engine == "internal:has-text":
            text, _ = _text_argument(body)
            return f"filter(has_text={text})"
        if engine == "internal:has-not-text":
            text, _ = _text_argument(body)
            return f"filter(has_not_text={text})"

        return f"locator({quote(part)})"


# ---------------------------------------------------------------------------
# 内部ヘルパー
# ---------------------------------------------------------------------------

def _split_chain(selector: str) -> list[str]:
    """セレクタを引用符の外側にある `` >> `` で分割する。"""
    parts: list[str] = []
    current: list[str] = []
    quote_char: Optional[str] = None
    i = 0
    while i < len(selector):
        ch = selector[i]
        if quote_char:
            current.append(ch)
            if ch == "\\" and i + 1 < len(selector):
                current.append(selector[i + 1])
                i += 1
            elif ch == quote_char:
                quote_char = None
        elif ch in ("'", '"'):
            quote_char = ch
            current.append(ch)
        elif selector.startswith(" >> ", i):
            parts.append("".join(current).strip())
            current = []
            i += len(" >> ")
            continue
        else:
            current.append(ch)
        i += 1
    parts.append("".join(current).strip())
    return [part for part in parts if part]


def _parse_quoted(body: str) -> tuple[str, bool]:
    """``"text"s`` 形式の値を (テキスト, 完全一致か) に分解する。

    引用符で囲まれていない値はそのまま部分一致として扱う。
    """
    match = _QUOTED_VALUE.match(body)
    if not match:
        return body, False
    return json.loads(f'"{match.group(1)}"'), match.group(2) == "s"


def _regex_literal(body: str) -> Optional[str]:
    """``/pattern/flags`` 形式の値を ``re.compile(...)`` 式に変換する。

    正規表現の形式でなければ None を返す。フラグは i（IGNORECASE）のみ反映する。
    """
    match = _REGEX_BODY.match(body)
    if not match:
        return None
    pattern = match.group(1).replace("\\/", "/").replace('"', '\\"')
    suffix = ", re.IGNORECASE" if "i" in match.group(2) else ""
    return f're.compile(r"{pattern}"{suffix})'


def _text_argument(body: str) -> tuple[str, bool]:
    """テキスト系セレクタの値を (引数の式, 完全一致か) に変換する。"""
    regex = _regex_literal(body)
    if regex is not None:
        return regex, False
    text, exact = _parse_quoted(body)
    return quote(text), exact


def _role_literal(raw: str) -> Any:
    """role 属性値を Python の値に変換する。"""
    if raw in ("true", "false"):
        return raw == "true"
    if raw.lstrip("-").isdigit():
        return int(raw)
    return raw


def _role_locator(body: str) -> str:
    """``button[name="OK"i][pressed=true]`` を get_by_role 呼び出しに変換する。"""
    role, _, _ = body.partition("[")
    args = [quote(role)]
    for name, raw in _ROLE_ATTR.findall(body):
        if raw.startswith('"'):
            text, exact = _parse_quoted(raw)
            args.append(f"{name.replace('-', '_')}={quote(text)}")
            if exact:
                args.append("exact=True")
            continue
        regex = _regex_literal(raw)
        if regex is not None:
            args.append(f"{name.replace('-', '_')}={regex}")
            continue
        value = _role_literal(raw)
        literal = quote(value) if isinstance(value, str) else str(value)
        args.append(f"{name.replace('-', '_')}={literal}")
    return f"get_by_role({', '.join(args)})"
