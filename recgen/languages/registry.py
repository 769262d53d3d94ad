"""
言語レジストリ — ターゲット言語ジェネレータの登録・検索・一覧

LanguageGenerator Protocol を満たすジェネレータを id で登録し、
CLI やスクリプト組み立て処理から id で引けるようにする。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .base import LanguageGenerator

logger = logging.getLogger(__name__)


@dataclass
class LanguageInfo:
    """ジェネレータのメタ情報。

    Attributes:
        id: レジストリ登録名
        group_name: 言語グループ名
        name: 表示名
    """

    id: str
    group_name: str
    name: str


class LanguageRegistry:
    """ターゲット言語ジェネレータのレジストリ。"""

    def __init__(self) -> None:
        self._generators: dict[str, LanguageGenerator] = {}

    def register(self, generator: LanguageGenerator) -> None:
        """ジェネレータを登録する。

        Raises:
            TypeError: LanguageGenerator Protocol を満たさない場合
            ValueError: 同じ id が登録済みの場合
        """
        if not isinstance(generator, LanguageGenerator):
            raise TypeError(
                f"LanguageGenerator Protocol を満たしていません: {type(generator).__name__}"
            )
        if generator.id in self._generators:
            raise ValueError(f"言語 '{generator.id}' は既に登録されています")
        self._generators[generator.id] = generator
        logger.debug("言語ジェネレータを登録しました: %s", generator.id)

    def get(self, language_id: str) -> LanguageGenerator:
        """id に対応するジェネレータを返す。

        Raises:
            KeyError: 未登録の id の場合
        """
        if language_id not in self._generators:
            available = ", ".join(sorted(self._generators)) or "(なし)"
            raise KeyError(f"未登録の言語です: {language_id}（利用可能: {available}）")
        return self._generators[language_id]

    def has(self, language_id: str) -> bool:
        return language_id in self._generators

    def list_all(self) -> list[LanguageInfo]:
        """登録済みジェネレータのメタ情報を id 順に返す。"""
        return [
            LanguageInfo(id=gen.id, group_name=gen.group_name, name=gen.name)
            for _, gen in sorted(self._generators.items())
        ]
