"""
ブロックフォーマッタ — 入れ子構造のテキストをインデント付きで整形

生成コードのブロック構造（with / def の本体など）をノードの木として保持し、
1 回の再帰走査でインデントを付与して出力する。

ノード:
  - Line: 1 行のテキスト（空文字列は空行）
  - Block: ヘッダ行と、1 段深くインデントされる子ノード列

PythonFormatter は木を直接受け取るほか、テンプレート記述用の簡易記法も受け付ける:
  - 行末が ``{`` の行: ``{`` を除去して出力し、以降を 1 段深くする
  - ``}`` のみの行: 出力せず、インデントを 1 段戻す
  - 空行: インデントもオフセットも付けずにそのまま出力する
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

from ..errors import InvariantViolation

_INDENT_UNIT = 4
_BLOCK_OPEN = "{"
_BLOCK_CLOSE = "}"


# ---------------------------------------------------------------------------
# ノード定義
# ---------------------------------------------------------------------------

@dataclass
class Line:
    """1 行のテキストノード。"""

    text: str


@dataclass
class Block:
    """ヘッダ行と、その配下にインデントされる子ノードからなるブロック。

    Attributes:
        header: ブロックの先頭行（例: ``with page.expect_popup() as page1_info:``）
        children: ヘッダより 1 段深く出力されるノード列
    """

    header: str
    children: list[Node] = field(default_factory=list)


Node = Union[Line, Block]


def render_nodes(nodes: Iterable[Node], offset: str = "", depth: int = 0) -> list[str]:
    """ノード列をインデント付きの行リストに変換する。

    Args:
        nodes: 出力対象のノード列
        offset: 全ての非空行の先頭に付与する固定オフセット
        depth: 開始時のインデント段数

    Returns:
        整形済みの行リスト
    """
    lines: list[str] = []
    indent = " " * (_INDENT_UNIT * depth)
    for node in nodes:
        if isinstance(node, Block):
            lines.append(offset + indent + node.header if node.header else "")
            lines.extend(render_nodes(node.children, offset, depth + 1))
        elif node.text == "":
            lines.append("")
        else:
            lines.append(offset + indent + node.text)
    return lines


# ---------------------------------------------------------------------------
# PythonFormatter 本体
# ---------------------------------------------------------------------------

class PythonFormatter:
    """生成コードの行を蓄積し、インデント付きテキストに整形するフォーマッタ。

    生成呼び出しごとに新しいインスタンスを作成して使い捨てる。

    使用例::

        formatter = PythonFormatter(offset=4)
        formatter.add(Block("with page.expect_popup() as page1_info:", [Line("page.click()")]))
        formatter.add("page1 = page1_info.value")
        text = formatter.format()
    """

    def __init__(self, offset: int = 0) -> None:
        """PythonFormatter を初期化する。

        Args:
            offset: 全ての非空行に付与する固定オフセット（スペース数）
        """
        self._base_offset = " " * offset
        self._entries: list[Union[str, Node]] = []

    def add(self, text: Union[str, Node]) -> None:
        """テキスト（簡易記法）またはノードを末尾に追加する。"""
        self._entries.extend(_to_entries(text))

    def prepend(self, text: Union[str, Node]) -> None:
        """テキスト（簡易記法）またはノードを先頭に挿入する。"""
        self._entries[:0] = _to_entries(text)

    def new_line(self) -> None:
        """空行を追加する。"""
        self._entries.append("")

    def build(self) -> list[Node]:
        """蓄積した内容をノードの木に変換する。

        末尾まで閉じられなかったブロックは暗黙に閉じる。

        Returns:
            最上位のノード列

        Raises:
            InvariantViolation: 対応する開始行のない ``}`` が現れた場合
        """
        root: list[Node] = []
        stack: list[list[Node]] = [root]
        for entry in self._entries:
            if not isinstance(entry, str):
                stack[-1].append(entry)
            elif entry == _BLOCK_CLOSE:
                if len(stack) == 1:
                    raise InvariantViolation("対応するブロック開始のない '}' があります")
                stack.pop()
            elif entry.endswith(_BLOCK_OPEN):
                block = Block(entry[: -len(_BLOCK_OPEN)].rstrip())
                stack[-1].append(block)
                stack.append(block.children)
            else:
                stack[-1].append(Line(entry))
        return root

    def format(self) -> str:
        """インデントを適用したテキストを返す。"""
        return "\n".join(render_nodes(self.build(), self._base_offset))


def _to_entries(text: Union[str, Node]) -> list[Union[str, Node]]:
    """add / prepend の引数を内部エントリのリストに変換する。"""
    if isinstance(text, (Line, Block)):
        return [text]
    return [line.strip() for line in text.strip().split("\n")]
