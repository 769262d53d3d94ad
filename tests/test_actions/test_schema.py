"""
アクションスキーマのユニットテスト

Pydantic モデルの判別・修飾キーの正規化・不変性・シグナルマップを検証する。
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from recgen.actions.schema import (
    ActionInContext,
    ClickAction,
    DownloadSignal,
    FillAction,
    NavigateAction,
    PopupSignal,
    to_modifiers,
    to_signal_map,
)


# ---------------------------------------------------------------------------
# to_modifiers
# ---------------------------------------------------------------------------

class TestToModifiers:
    """修飾キー正規化のテスト。"""

    @pytest.mark.parametrize(
        ("mask", "expected"),
        [
            (0, []),
            (1, ["Alt"]),
            (2, ["Control"]),
            (4, ["Meta"]),
            (8, ["Shift"]),
            (15, ["Alt", "Control", "Meta", "Shift"]),
        ],
    )
    def test_bitmask(self, mask: int, expected: list[str]):
        """ビットマスクが対応する名前のリストになること。"""
        assert to_modifiers(mask) == expected

    def test_list_is_reordered(self):
        """名前のリストが Alt, Control, Meta, Shift の順に並べ替えられること。"""
        assert to_modifiers(["Shift", "Alt"]) == ["Alt", "Shift"]

    def test_unknown_name(self):
        """未知の修飾キー名で ValueError になること。"""
        with pytest.raises(ValueError):
            to_modifiers(["Hyper"])


# ---------------------------------------------------------------------------
# アクションモデル
# ---------------------------------------------------------------------------

class TestActionModels:
    """アクションモデルの検証テスト。"""

    def test_discriminated_by_name(self):
        """name の値に応じたモデルに変換されること。"""
        ctx = ActionInContext.model_validate({
            "frame": {"pageAlias": "page"},
            "action": {"name": "fill", "selector": "#q", "text": "hi"},
        })
        assert isinstance(ctx.action, FillAction)

    def test_click_defaults(self):
        """click の既定値が left / 修飾なし / 1 回 / 位置なしであること。"""
        action = ClickAction(selector="#a")
        assert action.button == "left"
        assert action.modifiers == []
        assert action.clickCount == 1
        assert action.position is None

    def test_click_modifiers_from_mask(self):
        """click の modifiers にビットマスクを渡せること。"""
        assert ClickAction(selector="#a", modifiers=6).modifiers == ["Control", "Meta"]

    def test_invalid_modifier_name(self):
        """未知の修飾キー名で ValidationError になること。"""
        with pytest.raises(ValidationError):
            ClickAction(selector="#a", modifiers=["Hyper"])

    def test_invalid_button(self):
        """未知のボタン名で ValidationError になること。"""
        with pytest.raises(ValidationError):
            ClickAction(selector="#a", button="back")

    def test_click_count_must_be_positive(self):
        """clickCount が 0 の場合 ValidationError になること。"""
        with pytest.raises(ValidationError):
            ClickAction(selector="#a", clickCount=0)

    def test_missing_required_field(self):
        """必須フィールド欠落で ValidationError になること。"""
        with pytest.raises(ValidationError):
            FillAction(selector="#q")

    def test_models_are_frozen(self):
        """アクションは変更できないこと。"""
        action = NavigateAction(url="https://example.com")
        with pytest.raises(ValidationError):
            action.url = "https://other.example.com"

    def test_frame_defaults(self):
        """フレーム情報の既定値がメインフレーム・空の selectorsChain であること。"""
        ctx = ActionInContext.model_validate({
            "frame": {"pageAlias": "page"},
            "action": {"name": "closePage"},
        })
        assert ctx.frame.isMainFrame is True
        assert ctx.frame.selectorsChain == []
        assert ctx.frame.name is None


# ---------------------------------------------------------------------------
# to_signal_map
# ---------------------------------------------------------------------------

class TestSignalMap:
    """signals リストから SignalMap への変換テスト。"""

    def test_empty(self):
        """シグナルがない場合は全て None になること。"""
        signals = to_signal_map(ClickAction(selector="#a"))
        assert signals.dialog is None
        assert signals.popup is None
        assert signals.download is None

    def test_collects_each_kind(self):
        """種別ごとに振り分けられること。"""
        action = ClickAction(
            selector="#a",
            signals=[
                {"name": "navigation", "url": "https://example.com"},
                {"name": "popup", "popupAlias": "page1"},
                {"name": "download", "downloadAlias": "2"},
                {"name": "dialog", "dialogAlias": ""},
            ],
        )
        signals = to_signal_map(action)
        assert signals.popup == PopupSignal(popupAlias="page1")
        assert signals.download == DownloadSignal(downloadAlias="2")
        assert signals.dialog is not None

    def test_first_signal_of_kind_wins(self):
        """同じ種別が複数ある場合は最初のものが採用されること。"""
        action = ClickAction(
            selector="#a",
            signals=[
                {"name": "popup", "popupAlias": "page1"},
                {"name": "popup", "popupAlias": "page2"},
            ],
        )
        assert to_signal_map(action).popup.popupAlias == "page1"

    def test_unknown_signal_rejected(self):
        """未知のシグナル種別で ValidationError になること。"""
        with pytest.raises(ValidationError):
            ClickAction(selector="#a", signals=[{"name": "beep"}])
