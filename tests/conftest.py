"""
テスト共通フィクスチャ

全テストモジュールで共有するジェネレータ・記録データ・ActionInContext 生成ヘルパーを提供する。
"""

import json
from pathlib import Path

import pytest

from recgen.actions.schema import ActionInContext
from recgen.languages import PlaywrightPythonGenerator, RobocorpLanguageGenerator


# ---------------------------------------------------------------------------
# ActionInContext 生成ヘルパー
# ---------------------------------------------------------------------------

def _in_main_frame(action: dict, page_alias: str = "page") -> ActionInContext:
    return ActionInContext.model_validate({
        "frame": {"pageAlias": page_alias, "isMainFrame": True},
        "action": action,
    })


def _in_frame(action: dict, **frame) -> ActionInContext:
    frame.setdefault("pageAlias", "page")
    frame.setdefault("isMainFrame", False)
    return ActionInContext.model_validate({"frame": frame, "action": action})


@pytest.fixture
def in_main_frame():
    """アクション辞書をメインフレームの ActionInContext に変換する関数を提供する。"""
    return _in_main_frame


@pytest.fixture
def in_frame():
    """アクション辞書を任意のフレーム情報の ActionInContext に変換する関数を提供する。"""
    return _in_frame


# ---------------------------------------------------------------------------
# ジェネレータ
# ---------------------------------------------------------------------------

@pytest.fixture
def robocorp() -> RobocorpLanguageGenerator:
    """locator 形式の Robocorp ジェネレータ。"""
    return RobocorpLanguageGenerator()


@pytest.fixture
def robocorp_selector_style() -> RobocorpLanguageGenerator:
    """selector 形式（page.click("#id")）の Robocorp ジェネレータ。"""
    return RobocorpLanguageGenerator(locator_style="selector")


@pytest.fixture
def playwright_python() -> PlaywrightPythonGenerator:
    """Playwright Python ジェネレータ。"""
    return PlaywrightPythonGenerator()


# ---------------------------------------------------------------------------
# 記録データ
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_recording() -> list[dict]:
    """空ページを開き、ログインしてポップアップを開く一連の記録データ。"""
    return [
        {
            "frame": {"pageAlias": "page", "isMainFrame": True, "url": "about:blank"},
            "action": {"name": "openPage", "url": "about:blank", "signals": []},
        },
        {
            "frame": {"pageAlias": "page", "isMainFrame": True, "url": "about:blank"},
            "action": {"name": "navigate", "url": "https://example.com/login", "signals": []},
        },
        {
            "frame": {"pageAlias": "page", "isMainFrame": True},
            "action": {"name": "fill", "selector": "#email", "text": "user@example.com"},
        },
        {
            "frame": {"pageAlias": "page", "isMainFrame": True},
            "action": {
                "name": "click",
                "selector": 'internal:role=button[name="Login"i]',
                "button": "left",
                "modifiers": 0,
                "clickCount": 1,
                "signals": [{"name": "popup", "popupAlias": "page1"}],
            },
        },
    ]


@pytest.fixture
def recording_file(tmp_path: Path, sample_recording: list[dict]) -> Path:
    """sample_recording を書き出した JSON ファイル。"""
    path = tmp_path / "recording.json"
    path.write_text(json.dumps(sample_recording, ensure_ascii=False), encoding="utf-8")
    return path
