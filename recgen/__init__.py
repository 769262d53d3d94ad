"""
recgen — 記録したブラウザ操作から Python 自動化スクリプトを生成する

レコーダーが出力したアクション列（click, fill, navigate 等）を、
実行するとその操作を再現する Python ソースコードに変換する。

主要エクスポート:
  - generate_script: ヘッダ + アクション断片 + フッタの連結
  - create_default_registry: 標準ジェネレータ登録済みレジストリの生成
  - ActionInContext / FrameDescription: 入力データモデル
"""

from __future__ import annotations

from .actions.schema import ActionInContext, FrameDescription
from .errors import (
    InvariantViolation,
    RecgenError,
    RecordingLoadError,
    UnsupportedActionError,
    UnsupportedValueError,
)
from .languages import HeaderOptions, create_default_registry
from .script import generate_script

__all__ = [
    "ActionInContext",
    "FrameDescription",
    "HeaderOptions",
    "InvariantViolation",
    "RecgenError",
    "RecordingLoadError",
    "UnsupportedActionError",
    "UnsupportedValueError",
    "create_default_registry",
    "generate_script",
]
