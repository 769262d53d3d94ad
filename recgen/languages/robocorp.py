"""
Robocorp ジェネレータ — robocorp.tasks / robocorp.browser 形式のタスクスクリプトを生成

アクションは ``@task def automate():`` の本体に並ぶ。
ブラウザは ``browser.configure(...)`` で設定し、``browser.page()`` で取得する。
"""

from __future__ import annotations

import logging
from typing import Optional

from ..codegen.formatter import Line, PythonFormatter
from ..codegen.strings import quote
from ..codegen.values import format_options
from .base import HeaderOptions, PythonActionGenerator

logger = logging.getLogger(__name__)

_HEADER_TEMPLATE = """
import re
from robocorp.tasks import task
from robocorp import browser

def init_browser(): {
    # Configure may be used to set the basic robocorp.browser settings.
    # It must be called prior to calling APIs which create playwright objects.
    browser.configure( {
        %(configure_options)s
    }
    )
}

@task
def automate(): {
    init_browser()
    # APIs in robocorp.browser return the same browser instance, which is
    # automatically closed when the task finishes.
    page = browser.page()
    # --------------------- Generated Code:
"""


class RobocorpLanguageGenerator(PythonActionGenerator):
    """robocorp.browser を使うタスクスクリプトのジェネレータ。"""

    id = "robocorp"
    name = "Robocorp Library"

    def generate_header(self, options: HeaderOptions) -> str:
        """インポート・ブラウザ設定・タスク関数の先頭までを返す。

        タスク関数のブロックは閉じずに終わり、続くアクションとフッタがその本体になる。
        configure の引数は 1 行に 1 つ、キー名の辞書順で出力する。
        """
        configure = {
            "browserEngine": self._browser_engine(options),
            "headless": options.headless,
            "screenshot": options.screenshot,
            "viewportSize": options.viewport,
        }
        configure_options = format_options(configure, False, separator=",\n") + ","
        formatter = PythonFormatter()
        formatter.add(_HEADER_TEMPLATE % {"configure_options": configure_options})
        return formatter.format()

    @staticmethod
    def _browser_engine(options: HeaderOptions) -> Optional[str]:
        """configure の browser_engine に渡す値を決める。

        robocorp.browser ではチャンネル（chrome, msedge 等）もエンジン名として指定する。
        チャンネルは chromium 系でのみ有効なため、他のエンジンでは無視する。
        """
        if options.browser_name != "chromium":
            if options.channel:
                logger.warning(
                    "チャンネル %s は %s では使用できないため無視しました",
                    options.channel, options.browser_name,
                )
            return options.browser_name
        return options.channel

    def generate_footer(self, save_storage: Optional[str]) -> str:
        """生成コード区間の終端マーカーを返す。

        save_storage が指定された場合はストレージ状態の保存処理を先に出力する。
        """
        formatter = PythonFormatter(self.action_offset)
        formatter.new_line()
        if save_storage:
            formatter.add(Line(f"browser.context().storage_state(path={quote(save_storage)})"))
        formatter.add(Line("# ---------------------"))
        return formatter.format()
