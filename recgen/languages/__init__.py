"""
言語ジェネレータモジュール

記録アクションをターゲット言語のスクリプトに変換するジェネレータを提供する。

主要エクスポート:
  - LanguageGenerator: ジェネレータの共通 Protocol
  - HeaderOptions: generate_header に渡す設定
  - LanguageRegistry: ジェネレータの登録・検索・一覧
  - RobocorpLanguageGenerator / PlaywrightPythonGenerator: 標準ジェネレータ
  - create_default_registry: 標準ジェネレータ登録済みレジストリの生成
"""

from __future__ import annotations

from typing import Optional

from ..codegen.locators import LocatorAdapter
from .base import HeaderOptions, LanguageGenerator, LocatorStyle, PythonActionGenerator
from .playwright_sync import PlaywrightPythonGenerator
from .registry import LanguageInfo, LanguageRegistry
from .robocorp import RobocorpLanguageGenerator

__all__ = [
    "HeaderOptions",
    "LanguageGenerator",
    "LanguageInfo",
    "LanguageRegistry",
    "PlaywrightPythonGenerator",
    "PythonActionGenerator",
    "RobocorpLanguageGenerator",
    "create_default_registry",
]


def create_default_registry(
    locator_adapter: Optional[LocatorAdapter] = None,
    locator_style: LocatorStyle = "locator",
) -> LanguageRegistry:
    """標準ジェネレータが全て登録された LanguageRegistry を生成する。

    Args:
        locator_adapter: 各ジェネレータに渡すロケータアダプタ
        locator_style: 各ジェネレータに渡すロケータ出力形式

    Returns:
        robocorp / python が登録されたレジストリ
    """
    registry = LanguageRegistry()
    registry.register(RobocorpLanguageGenerator(locator_adapter, locator_style))
    registry.register(PlaywrightPythonGenerator(locator_adapter, locator_style))
    return registry
