"""
言語ジェネレータ基盤 — 記録アクションを Python コード断片に変換

ターゲット言語ごとのジェネレータが満たすべき LanguageGenerator Protocol と、
Python 系ジェネレータで共通のアクション変換処理（PythonActionGenerator）を定義する。

生成手順（generate_action）:
  1. openPage は URL があれば goto を 1 行出力して終了
  2. 呼び出し対象（subject）をフレーム情報から決定
     （メインフレーム → selectorsChain → name → url の優先順位）
  3. アクション種別ごとのメソッド呼び出しを subject に連結
  4. シグナルに応じてダイアログ待ち受け・expect_popup / expect_download ブロックを付与
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Protocol, runtime_checkable

from ..actions.schema import (
    ActionBase,
    ActionInContext,
    ClickAction,
    FrameDescription,
    PressAction,
    SelectAction,
    SetInputFilesAction,
    to_signal_map,
)
from ..codegen.formatter import Block, Line, Node, PythonFormatter
from ..codegen.locators import LocatorAdapter, PlaywrightLocatorAdapter
from ..codegen.strings import quote
from ..codegen.values import format_options, format_value
from ..errors import InvariantViolation, UnsupportedActionError

logger = logging.getLogger(__name__)

LocatorStyle = Literal["locator", "selector"]

# goto を出力しない初期ページの URL
_BLANK_PAGE_URLS = frozenset({"about:blank", "chrome://newtab/"})


# ---------------------------------------------------------------------------
# ヘッダオプション
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HeaderOptions:
    """generate_header に渡すスクリプト全体の設定。

    Attributes:
        browser_name: ブラウザエンジン（chromium / firefox / webkit）
        channel: ブラウザチャンネル（chrome, msedge 等。None で既定）
        headless: ヘッドレスで起動するか
        screenshot: スクリーンショット取得方針（robocorp の configure に渡す値）
        viewport: ビューポートサイズ（幅, 高さ）。None で既定
    """

    browser_name: str = "chromium"
    channel: Optional[str] = None
    headless: bool = True
    screenshot: str = "only-on-failure"
    viewport: Optional[tuple[int, int]] = None


# ---------------------------------------------------------------------------
# LanguageGenerator Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class LanguageGenerator(Protocol):
    """ターゲット言語ごとのコードジェネレータの共通インターフェース。

    Attributes:
        id: レジストリ登録名（CLI の --language で指定する値）
        group_name: 表示用の言語グループ名
        name: 表示名
        highlighter: シンタックスハイライトの言語名
    """

    id: str
    group_name: str
    name: str
    highlighter: str

    def generate_action(self, action_in_context: ActionInContext) -> str:
        """アクション 1 件をコード断片に変換する。"""
        ...

    def generate_header(self, options: HeaderOptions) -> str:
        """スクリプト先頭の定型部分を返す。"""
        ...

    def generate_footer(self, save_storage: Optional[str]) -> str:
        """スクリプト末尾の定型部分を返す。"""
        ...


# ---------------------------------------------------------------------------
# Python 系ジェネレータ共通処理
# ---------------------------------------------------------------------------

class PythonActionGenerator:
    """Playwright の Python API 呼び出しを生成するジェネレータの共通基底。

    ヘッダ・フッタはサブクラスが実装する。
    アクションはタスク本体（関数内）に置かれるため、action_offset 分だけ字下げする。
    """

    group_name = "Python"
    highlighter = "python"
    language = "python"
    action_offset = 4

    def __init__(
        self,
        locator_adapter: Optional[LocatorAdapter] = None,
        locator_style: LocatorStyle = "locator",
    ) -> None:
        """ジェネレータを初期化する。

        Args:
            locator_adapter: セレクタをロケータ式に変換するアダプタ
            locator_style: "locator" は ``page.locator("#id").click()`` 形式、
                "selector" は ``page.click("#id")`` 形式で出力する
        """
        if locator_style not in ("locator", "selector"):
            raise ValueError(
                f"locator_style は 'locator' または 'selector' を指定してください: {locator_style}"
            )
        self._locator_adapter = locator_adapter or PlaywrightLocatorAdapter()
        self._locator_style = locator_style
        self._action_calls: dict[str, Callable[[ActionBase], str]] = {
            "closePage": self._close_page_call,
            "click": self._click_call,
            "check": self._check_call,
            "uncheck": self._uncheck_call,
            "fill": self._fill_call,
            "setInputFiles": self._set_input_files_call,
            "press": self._press_call,
            "navigate": self._navigate_call,
            "select": self._select_call,
        }

    # -------------------------------------------------------------------
    # パブリック API
    # -------------------------------------------------------------------

    def generate_action(self, action_in_context: ActionInContext) -> str:
        """アクション 1 件をインデント済みのコード断片に変換する。

        Args:
            action_in_context: アクションとフレーム情報の組

        Returns:
            コード断片（openPage で出力不要の場合は空文字列）

        Raises:
            UnsupportedActionError: 生成ルールのないアクション種別の場合
            UnsupportedValueError: リテラル化できない値が含まれる場合
            InvariantViolation: フレーム情報がどの指定方式にも該当しない場合
        """
        action = action_in_context.action
        page_alias = action_in_context.frame.pageAlias
        formatter = PythonFormatter(self.action_offset)

        if action.name == "openPage":
            url = action.url.strip()
            if url and url not in _BLANK_PAGE_URLS:
                formatter.add(Line(f"{page_alias}.goto({quote(url)})"))
            return formatter.format()

        subject = self._subject(action_in_context.frame, action)
        call = self._generate_action_call(action)
        signals = to_signal_map(action)

        body: list[Node] = [Line(f"{subject}.{call}")]

        if signals.popup:
            alias = signals.popup.popupAlias
            body = [
                Block(f"with {page_alias}.expect_popup() as {alias}_info:", body),
                Line(f"{alias} = {alias}_info.value"),
            ]

        if signals.download:
            alias = f"download{signals.download.downloadAlias}"
            body = [
                Block(f"with {page_alias}.expect_download() as {alias}_info:", body),
                Line(f"{alias} = {alias}_info.value"),
            ]

        for node in body:
            formatter.add(node)

        if signals.dialog:
            formatter.prepend(
                Line(f'{page_alias}.once("dialog", lambda dialog: dialog.dismiss())')
            )

        logger.debug("アクションを変換しました: %s (%s)", action.name, subject)
        return formatter.format()

    # -------------------------------------------------------------------
    # 呼び出し対象の決定
    # -------------------------------------------------------------------

    def _subject(self, frame: FrameDescription, action: ActionBase) -> str:
        """フレーム情報から呼び出し対象の式を決定する。

        Raises:
            InvariantViolation: どの指定方式にも該当しない場合
        """
        page_alias = frame.pageAlias
        if frame.isMainFrame:
            return page_alias
        if frame.selectorsChain and action.name != "navigate":
            locators = "".join(
                f".frame_locator({quote(selector)})" for selector in frame.selectorsChain
            )
            return f"{page_alias}{locators}"
        if frame.name:
            return f"{page_alias}.frame({format_options({'name': frame.name}, False)})"
        if frame.url:
            return f"{page_alias}.frame({format_options({'url': frame.url}, False)})"
        raise InvariantViolation(
            f"フレーム情報からアドレス指定方式を決定できません: {frame!r}"
        )

    # -------------------------------------------------------------------
    # アクション種別ごとの呼び出し生成
    # -------------------------------------------------------------------

    def _generate_action_call(self, action: ActionBase) -> str:
        """アクション種別に対応するメソッド呼び出し文字列を返す。

        Raises:
            InvariantViolation: openPage が渡された場合
            UnsupportedActionError: 未知のアクション種別の場合
        """
        if action.name == "openPage":
            raise InvariantViolation("openPage はメソッド呼び出しに変換しません")
        handler = self._action_calls.get(action.name)
        if handler is None:
            raise UnsupportedActionError(action.name)
        return handler(action)

    def _selector_call(self, selector: str, method: str, args: str = "") -> str:
        """セレクタ付きのメソッド呼び出しを locator_style に従って組み立てる。"""
        if self._locator_style == "selector":
            return f"{method}({quote(selector)}{', ' + args if args else ''})"
        locator = self._locator_adapter.to_locator(self.language, selector)
        return f"{locator}.{method}({args})"

    def _close_page_call(self, action: ActionBase) -> str:
        return "close()"

    def _click_call(self, action: ClickAction) -> str:
        method = "dblclick" if action.clickCount == 2 else "click"
        options: dict = {}
        if action.button != "left":
            options["button"] = action.button
        if action.modifiers:
            options["modifiers"] = list(action.modifiers)
        if action.clickCount > 2:
            options["clickCount"] = action.clickCount
        if action.position is not None:
            options["position"] = action.position.model_dump()
        return self._selector_call(action.selector, method, format_options(options, False))

    def _check_call(self, action) -> str:
        return self._selector_call(action.selector, "check")

    def _uncheck_call(self, action) -> str:
        return self._selector_call(action.selector, "uncheck")

    def _fill_call(self, action) -> str:
        return self._selector_call(action.selector, "fill", quote(action.text))

    def _set_input_files_call(self, action: SetInputFilesAction) -> str:
        files = action.files[0] if len(action.files) == 1 else action.files
        return self._selector_call(action.selector, "set_input_files", format_value(files))

    def _press_call(self, action: PressAction) -> str:
        shortcut = "+".join([*action.modifiers, action.key])
        return self._selector_call(action.selector, "press", quote(shortcut))

    def _navigate_call(self, action) -> str:
        return f"goto({quote(action.url)})"

    def _select_call(self, action: SelectAction) -> str:
        options = action.options[0] if len(action.options) == 1 else action.options
        return self._selector_call(action.selector, "select_option", format_value(options))
