"""
エラー定義 — コード生成で発生する例外の分類

主な例外:
  - RecgenError: 全例外の基底クラス
  - UnsupportedActionError: 生成ルールのないアクション種別
  - UnsupportedValueError: リテラルとして表現できない値
  - RecordingLoadError: 記録ファイルの読み込み・スキーマ検証失敗
  - InvariantViolation: 内部不変条件の違反（致命的）
"""

from __future__ import annotations

from typing import Any, Optional


class RecgenError(Exception):
    """recgen が送出する回復可能なエラーの基底クラス。"""


class UnsupportedActionError(RecgenError):
    """アクション種別に対応するコード生成ルールが存在しない場合のエラー。

    Attributes:
        kind: 問題のアクション種別名
        index: 記録内でのアクション位置（0始まり、判明している場合）
    """

    def __init__(self, kind: str, index: Optional[int] = None) -> None:
        self.kind = kind
        self.index = index
        location = f"（{index} 番目のアクション）" if index is not None else ""
        super().__init__(f"未対応のアクション種別です: {kind!r}{location}")


class UnsupportedValueError(RecgenError, TypeError):
    """値をターゲット言語のリテラルに変換できない場合のエラー。

    Attributes:
        value: 変換できなかった値
        index: 記録内でのアクション位置（0始まり、判明している場合）
    """

    def __init__(self, value: Any, index: Optional[int] = None) -> None:
        self.value = value
        self.index = index
        location = f"（{index} 番目のアクション）" if index is not None else ""
        super().__init__(
            f"リテラルに変換できない値です: {type(value).__name__} {value!r}{location}"
        )


class RecordingLoadError(RecgenError):
    """記録ファイルの読み込み、またはスキーマ検証に失敗した場合のエラー。"""


class InvariantViolation(AssertionError):
    """内部不変条件の違反。

    上流から壊れたフレーム情報が渡された場合や、生成処理の内部で
    到達しないはずの分岐に到達した場合に送出する。推測でコードを
    生成せず、その場で生成を中断する。
    """
