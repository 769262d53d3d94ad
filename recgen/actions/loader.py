"""
記録ファイルローダー — JSON / YAML の記録を ActionInContext リストに変換

記録ファイルは ``{"action": {...}, "frame": {...}}`` のリスト形式。
``.json`` は json モジュール、``.yaml`` / ``.yml`` は ruamel.yaml で読み込む。
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import RecordingLoadError, UnsupportedActionError
from .schema import ACTION_MODELS, ActionInContext

logger = logging.getLogger(__name__)


def load_recording(path: Path) -> list[ActionInContext]:
    """記録ファイルを読み込み、ActionInContext のリストを返す。

    Args:
        path: 記録ファイルのパス（.json / .yaml / .yml）

    Returns:
        記録順の ActionInContext リスト

    Raises:
        RecordingLoadError: ファイルの読み込み・パース・スキーマ検証に失敗した場合
        UnsupportedActionError: 未知のアクション種別が含まれる場合
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RecordingLoadError(f"記録ファイルを読み込めません: {path} — {exc}") from exc

    try:
        if path.suffix in (".yaml", ".yml"):
            data = YAML(typ="safe").load(text)
        else:
            data = json.loads(text)
    except (YAMLError, json.JSONDecodeError) as exc:
        raise RecordingLoadError(f"記録ファイルのパースに失敗しました: {path} — {exc}") from exc

    actions = parse_recording(data)
    logger.info("記録を読み込みました: %s（%d 件）", path, len(actions))
    return actions


def parse_recording(data: Any) -> list[ActionInContext]:
    """パース済みの記録データを検証し、ActionInContext のリストに変換する。

    Args:
        data: ``{"action": ..., "frame": ...}`` のリスト

    Returns:
        記録順の ActionInContext リスト

    Raises:
        RecordingLoadError: データ構造がスキーマに違反している場合
        UnsupportedActionError: 未知のアクション種別が含まれる場合
    """
    if not isinstance(data, list):
        raise RecordingLoadError(
            f"記録はアクションのリストである必要があります: {type(data).__name__}"
        )

    result: list[ActionInContext] = []
    for index, entry in enumerate(data):
        action = entry.get("action") if isinstance(entry, dict) else None
        kind = action.get("name") if isinstance(action, dict) else None
        if not isinstance(kind, str):
            raise RecordingLoadError(f"{index} 番目の要素に action.name がありません")
        if kind not in ACTION_MODELS:
            raise UnsupportedActionError(kind, index=index)

        try:
            result.append(ActionInContext.model_validate(entry))
        except PydanticValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            raise RecordingLoadError(
                f"{index} 番目のアクション（{kind}）がスキーマに違反しています: {details}"
            ) from exc
    return result
