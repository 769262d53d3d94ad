# コード生成の共通部品
# リテラル整形、オプション整形、ブロックフォーマッタ、ロケータ変換を提供

from .formatter import Block, Line, PythonFormatter, render_nodes
from .locators import LocatorAdapter, PlaywrightLocatorAdapter
from .strings import escape_with_quotes, quote, to_snake_case
from .values import format_options, format_value

__all__ = [
    "Block",
    "Line",
    "LocatorAdapter",
    "PlaywrightLocatorAdapter",
    "PythonFormatter",
    "escape_with_quotes",
    "format_options",
    "format_value",
    "quote",
    "render_nodes",
    "to_snake_case",
]
