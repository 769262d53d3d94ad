"""
スクリプト組み立て — ヘッダ・アクション断片・フッタを連結して完成したスクリプトを生成

記録順にアクションを 1 件ずつジェネレータに渡し、結果を改行で連結する。
出力が空になるアクション（about:blank の openPage 等）は連結しない。
生成に失敗した場合は、失敗したアクションの位置を付けて例外を送出し直す。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from .actions.schema import ActionInContext
from .errors import UnsupportedActionError, UnsupportedValueError
from .languages.base import HeaderOptions, LanguageGenerator

logger = logging.getLogger(__name__)


def generate_script(
    generator: LanguageGenerator,
    actions: Iterable[ActionInContext],
    options: Optional[HeaderOptions] = None,
    save_storage: Optional[str] = None,
) -> str:
    """記録アクション列から完成したスクリプトを生成する。

    Args:
        generator: ターゲット言語のジェネレータ
        actions: 記録順の ActionInContext
        options: ヘッダ設定（None の場合は既定値）
        save_storage: ストレージ状態の保存先パス（None の場合は保存しない）

    Returns:
        スクリプト全文

    Raises:
        UnsupportedActionError: 生成ルールのないアクションがあった場合（index 付き）
        UnsupportedValueError: リテラル化できない値があった場合（index 付き）
    """
    parts = [generator.generate_header(options or HeaderOptions())]
    count = 0
    for index, action_in_context in enumerate(actions):
        try:
            text = generator.generate_action(action_in_context)
        except UnsupportedActionError as exc:
            raise UnsupportedActionError(exc.kind, index=index) from exc
        except UnsupportedValueError as exc:
            raise UnsupportedValueError(exc.value, index=index) from exc
        if text:
            parts.append(text)
        count += 1
    parts.append(generator.generate_footer(save_storage))
    logger.debug("スクリプトを生成しました: %s（%d 件）", generator.id, count)
    return "\n".join(parts)


def write_script(script: str, output_path: Path) -> None:
    """生成したスクリプトをファイルに書き出す。"""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(script, encoding="utf-8")
    logger.info("スクリプトを書き出しました: %s", output_path)
