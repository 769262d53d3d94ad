"""
Playwright Python ジェネレータ — playwright.sync_api 形式のスクリプトを生成

Playwright codegen の Python 出力と同じ構成（``def run(playwright)`` と
``with sync_playwright()`` による起動）のスクリプトを生成する。
"""

from __future__ import annotations

from typing import Optional

from ..codegen.formatter import Block, Line, PythonFormatter
from ..codegen.strings import quote
from ..codegen.values import format_options
from .base import HeaderOptions, PythonActionGenerator


class PlaywrightPythonGenerator(PythonActionGenerator):
    """playwright.sync_api を直接使うスクリプトのジェネレータ。"""

    id = "python"
    name = "Library"

    def generate_header(self, options: HeaderOptions) -> str:
        launch_options = format_options(
            {"channel": options.channel, "headless": options.headless}, False,
        )
        context_options = ""
        if options.viewport is not None:
            width, height = options.viewport
            context_options = format_options(
                {"viewport": {"width": width, "height": height}}, False,
            )

        formatter = PythonFormatter()
        formatter.add("import re")
        formatter.add("from playwright.sync_api import Playwright, sync_playwright, expect")
        formatter.new_line()
        formatter.new_line()
        formatter.add(Block(
            "def run(playwright: Playwright) -> None:",
            [
                Line(f"browser = playwright.{options.browser_name}.launch({launch_options})"),
                Line(f"context = browser.new_context({context_options})"),
                Line("page = context.new_page()"),
            ],
        ))
        return formatter.format()

    def generate_footer(self, save_storage: Optional[str]) -> str:
        body = PythonFormatter(self.action_offset)
        body.new_line()
        body.add(Line("# ---------------------"))
        if save_storage:
            body.add(Line(f"context.storage_state(path={quote(save_storage)})"))
        body.add(Line("context.close()"))
        body.add(Line("browser.close()"))

        runner = PythonFormatter()
        runner.new_line()
        runner.new_line()
        runner.add(Block("with sync_playwright() as playwright:", [Line("run(playwright)")]))
        return body.format() + "\n" + runner.format() + "\n"
