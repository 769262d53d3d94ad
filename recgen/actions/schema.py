"""
アクションスキーマ — 記録されたブラウザ操作の Pydantic v2 モデル

レコーダーが出力する操作（アクション）・フレーム情報・シグナルを表現する。
全モデルは不変（frozen）で、コード生成器からは読み取り専用で参照される。

主な構成:
  - Action: name で判別されるアクションの Union 型（openPage, click, fill 等）
  - FrameDescription: 操作が行われたページ・フレームの位置情報
  - ActionInContext: アクションとフレーム情報の組（生成の処理単位）
  - Signal / SignalMap: ポップアップ・ダウンロード・ダイアログの付随情報
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# 修飾キーのビットマスク（レコーダーの表現）と名前の対応。出力順もこの順
_MODIFIER_BITS = (
    (1, "Alt"),
    (2, "Control"),
    (4, "Meta"),
    (8, "Shift"),
)
_MODIFIER_NAMES = tuple(name for _, name in _MODIFIER_BITS)


def to_modifiers(modifiers: Union[int, list[str], tuple[str, ...]]) -> list[str]:
    """修飾キーのビットマスク、または名前のリストを正規化したリストに変換する。

    Args:
        modifiers: ビットマスク（1=Alt, 2=Control, 4=Meta, 8=Shift）または名前のリスト

    Returns:
        Alt, Control, Meta, Shift の順に並んだ修飾キー名のリスト

    Raises:
        ValueError: 未知の修飾キー名が含まれる場合
    """
    if isinstance(modifiers, int):
        return [name for bit, name in _MODIFIER_BITS if modifiers & bit]
    unknown = [name for name in modifiers if name not in _MODIFIER_NAMES]
    if unknown:
        raise ValueError(f"未知の修飾キーです: {', '.join(unknown)}")
    return [name for name in _MODIFIER_NAMES if name in modifiers]


# ---------------------------------------------------------------------------
# シグナル定義
# ---------------------------------------------------------------------------

class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class DialogSignal(_Frozen):
    """操作によってダイアログが表示されたことを示すシグナル。"""

    name: Literal["dialog"] = "dialog"
    dialogAlias: str = Field(default="", description="ダイアログの識別子")


class PopupSignal(_Frozen):
    """操作によってポップアップ（新しいページ）が開いたことを示すシグナル。"""

    name: Literal["popup"] = "popup"
    popupAlias: str = Field(..., description="開いたページに割り当てられた変数名")


class DownloadSignal(_Frozen):
    """操作によってダウンロードが開始されたことを示すシグナル。

    downloadAlias は ``download`` に連結される接尾辞（1 件目は空文字列）。
    """

    name: Literal["download"] = "download"
    downloadAlias: str = Field(default="", description="ダウンロード変数名の接尾辞")


class NavigationSignal(_Frozen):
    """操作によってページ遷移が発生したことを示すシグナル（生成では使用しない）。"""

    name: Literal["navigation"] = "navigation"
    url: str = Field(default="", description="遷移先 URL")


Signal = Annotated[
    Union[DialogSignal, PopupSignal, DownloadSignal, NavigationSignal],
    Field(discriminator="name"),
]


# ---------------------------------------------------------------------------
# アクション定義
# ---------------------------------------------------------------------------

class Point(_Frozen):
    """要素内のクリック位置。"""

    x: float
    y: float


class ActionBase(_Frozen):
    """全アクション共通の基底モデル。"""

    name: str
    signals: list[Signal] = Field(default_factory=list, description="操作に付随するシグナル")


class OpenPageAction(ActionBase):
    """新しいページ（タブ）を開く操作。"""

    name: Literal["openPage"] = "openPage"
    url: str = Field(default="", description="開いた時点の URL")


class ClosePageAction(ActionBase):
    """ページを閉じる操作。"""

    name: Literal["closePage"] = "closePage"


class ClickAction(ActionBase):
    """要素のクリック（ダブルクリックを含む）。"""

    name: Literal["click"] = "click"
    selector: str
    button: Literal["left", "middle", "right"] = "left"
    modifiers: list[str] = Field(default_factory=list)
    clickCount: int = Field(default=1, ge=1)
    position: Optional[Point] = None

    @field_validator("modifiers", mode="before")
    @classmethod
    def _normalize_modifiers(cls, value):
        return to_modifiers(value)


class CheckAction(ActionBase):
    """チェックボックスをオンにする操作。"""

    name: Literal["check"] = "check"
    selector: str


class UncheckAction(ActionBase):
    """チェックボックスをオフにする操作。"""

    name: Literal["uncheck"] = "uncheck"
    selector: str


class FillAction(ActionBase):
    """入力欄へのテキスト入力。"""

    name: Literal["fill"] = "fill"
    selector: str
    text: str


class SetInputFilesAction(ActionBase):
    """ファイル入力欄へのファイル指定。"""

    name: Literal["setInputFiles"] = "setInputFiles"
    selector: str
    files: list[str] = Field(default_factory=list)


class PressAction(ActionBase):
    """キー押下（修飾キーとの組み合わせを含む）。"""

    name: Literal["press"] = "press"
    selector: str
    key: str
    modifiers: list[str] = Field(default_factory=list)

    @field_validator("modifiers", mode="before")
    @classmethod
    def _normalize_modifiers(cls, value):
        return to_modifiers(value)


class NavigateAction(ActionBase):
    """アドレスバー等からのページ遷移。"""

    name: Literal["navigate"] = "navigate"
    url: str


class SelectAction(ActionBase):
    """select 要素の選択肢の選択。"""

    name: Literal["select"] = "select"
    selector: str
    options: list[str] = Field(default_factory=list)


Action = Annotated[
    Union[
        OpenPageAction,
        ClosePageAction,
        ClickAction,
        CheckAction,
        UncheckAction,
        FillAction,
        SetInputFilesAction,
        PressAction,
        NavigateAction,
        SelectAction,
    ],
    Field(discriminator="name"),
]
"""全アクション種別の Union 型（name で判別）。"""

ACTION_MODELS: dict[str, type[ActionBase]] = {
    "openPage": OpenPageAction,
    "closePage": ClosePageAction,
    "click": ClickAction,
    "check": CheckAction,
    "uncheck": UncheckAction,
    "fill": FillAction,
    "setInputFiles": SetInputFilesAction,
    "press": PressAction,
    "navigate": NavigateAction,
    "select": SelectAction,
}


# ---------------------------------------------------------------------------
# フレーム情報・処理単位
# ---------------------------------------------------------------------------

class FrameDescription(_Frozen):
    """操作が行われたページ・フレームの位置情報。

    コード生成では次の優先順位で 1 つのアドレス指定方式を選ぶ:
    メインフレーム → selectorsChain → name → url
    """

    pageAlias: str = Field(..., description="ページに割り当てられた変数名（page, page1 等）")
    isMainFrame: bool = Field(default=True, description="メインフレームでの操作か")
    selectorsChain: list[str] = Field(
        default_factory=list,
        description="入れ子の iframe を特定するセレクタ列（外側から順）",
    )
    name: Optional[str] = Field(default=None, description="フレーム名")
    url: Optional[str] = Field(default=None, description="フレーム URL")


class ActionInContext(_Frozen):
    """アクションとフレーム情報の組。"""

    frame: FrameDescription
    action: Action


# ---------------------------------------------------------------------------
# シグナルマップ
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SignalMap:
    """アクション 1 件に付随するシグナルを種別ごとに引けるようにしたもの。

    Attributes:
        dialog: ダイアログシグナル
        popup: ポップアップシグナル
        download: ダウンロードシグナル
    """

    dialog: Optional[DialogSignal] = None
    popup: Optional[PopupSignal] = None
    download: Optional[DownloadSignal] = None


def to_signal_map(action: ActionBase) -> SignalMap:
    """アクションの signals リストから SignalMap を作る。

    同じ種別のシグナルが複数ある場合は最初のものを採用する。
    navigation シグナルはコード生成に影響しないため無視する。
    """
    found: dict[str, object] = {}
    for signal in action.signals:
        if signal.name in ("dialog", "popup", "download"):
            found.setdefault(signal.name, signal)
    return SignalMap(**found)  # type: ignore[arg-type]
