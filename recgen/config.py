"""
ジェネレータ設定 — 設定ファイル・環境変数・CLI 引数からの設定読み込み

CLI 引数 > 環境変数 > 設定ファイル（recgen.yaml）> デフォルト値 の優先順位で適用される。

環境変数一覧:
  RECGEN_LANGUAGE        : ターゲット言語（robocorp / python, デフォルト: robocorp）
  RECGEN_LOCATOR_STYLE   : ロケータ出力形式（locator / selector, デフォルト: locator）
  RECGEN_HEADLESS        : ヘッドレス起動（true/false, デフォルト: true）
  RECGEN_SCREENSHOT      : スクリーンショット方針（デフォルト: only-on-failure）
  RECGEN_BROWSER         : ブラウザエンジン（chromium / firefox / webkit, デフォルト: chromium）
  RECGEN_VIEWPORT_WIDTH  : ビューポート幅（デフォルト: 未指定）
  RECGEN_VIEWPORT_HEIGHT : ビューポート高さ（デフォルト: 未指定）
  RECGEN_SAVE_STORAGE    : ストレージ状態の保存先（デフォルト: 未指定）
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import RecgenError
from .languages.base import HeaderOptions

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "recgen.yaml"

# ---------------------------------------------------------------------------
# 環境変数キー定数
# ---------------------------------------------------------------------------

_ENV_LANGUAGE = "RECGEN_LANGUAGE"
_ENV_LOCATOR_STYLE = "RECGEN_LOCATOR_STYLE"
_ENV_HEADLESS = "RECGEN_HEADLESS"
_ENV_SCREENSHOT = "RECGEN_SCREENSHOT"
_ENV_BROWSER = "RECGEN_BROWSER"
_ENV_VIEWPORT_WIDTH = "RECGEN_VIEWPORT_WIDTH"
_ENV_VIEWPORT_HEIGHT = "RECGEN_VIEWPORT_HEIGHT"
_ENV_SAVE_STORAGE = "RECGEN_SAVE_STORAGE"

_LOCATOR_STYLES = ("locator", "selector")
_BROWSERS = ("chromium", "firefox", "webkit")
_OPTIONAL_KEYS = ("channel", "viewport_width", "viewport_height", "save_storage")


# ---------------------------------------------------------------------------
# 設定データクラス
# ---------------------------------------------------------------------------

@dataclass
class GeneratorConfig:
    """コード生成の実行時設定。

    Attributes:
        language: ターゲット言語ジェネレータの id
        locator_style: ロケータ出力形式（locator / selector）
        headless: 生成スクリプトでブラウザをヘッドレス起動するか
        screenshot: スクリーンショット方針
        browser: ブラウザエンジン
        channel: ブラウザチャンネル（chrome, msedge 等）
        viewport_width: ビューポート幅
        viewport_height: ビューポート高さ
        save_storage: ストレージ状態の保存先パス
    """

    language: str = "robocorp"
    locator_style: str = "locator"
    headless: bool = True
    screenshot: str = "only-on-failure"
    browser: str = "chromium"
    channel: Optional[str] = None
    viewport_width: Optional[int] = None
    viewport_height: Optional[int] = None
    save_storage: Optional[str] = None

    def to_header_options(self) -> HeaderOptions:
        """generate_header に渡す HeaderOptions を生成する。

        ビューポートは幅・高さの両方が指定されている場合のみ設定する。
        """
        viewport = None
        if self.viewport_width is not None and self.viewport_height is not None:
            viewport = (self.viewport_width, self.viewport_height)
        return HeaderOptions(
            browser_name=self.browser,
            channel=self.channel,
            headless=self.headless,
            screenshot=self.screenshot,
            viewport=viewport,
        )


# ---------------------------------------------------------------------------
# 値の変換
# ---------------------------------------------------------------------------

def _parse_bool(value: str) -> bool:
    """文字列を bool に変換する。

    Args:
        value: "true", "1", "yes" → True、それ以外 → False

    Returns:
        変換結果
    """
    return value.lower() in ("true", "1", "yes")


def _parse_int(name: str, value: str) -> Optional[int]:
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number <= 0:
        logger.warning("%s の値が不正です: %s", name, value)
        return None
    return number


def _is_valid_file_value(key: str, value: Any) -> bool:
    """設定ファイルの値が GeneratorConfig のフィールドとして妥当かを判定する。

    環境変数と同じく locator_style / browser は選択肢のいずれか、
    headless は bool、ビューポートは正の整数でなければならない。
    省略可能なフィールドは null（None）も受け付ける。
    """
    if value is None:
        return key in _OPTIONAL_KEYS
    if key == "locator_style":
        return value in _LOCATOR_STYLES
    if key == "browser":
        return value in _BROWSERS
    if key == "headless":
        return isinstance(value, bool)
    if key in ("viewport_width", "viewport_height"):
        # bool は int のサブクラスなので除外する
        return isinstance(value, int) and not isinstance(value, bool) and value > 0
    return isinstance(value, str)


# ---------------------------------------------------------------------------
# 設定ファイルからの読み込み
# ---------------------------------------------------------------------------

def load_config_file(path: Path, config: Optional[GeneratorConfig] = None) -> GeneratorConfig:
    """YAML 設定ファイルを読み込み、GeneratorConfig に適用する。

    未知のキー・不正な値は警告を出して無視する。

    Args:
        path: 設定ファイルのパス
        config: ベースとなる設定（None の場合はデフォルト値）

    Returns:
        設定ファイルの内容が適用された設定

    Raises:
        RecgenError: ファイルの読み込み・パースに失敗した場合
    """
    config = config or GeneratorConfig()
    try:
        data = YAML(typ="safe").load(Path(path).read_text(encoding="utf-8"))
    except (OSError, YAMLError) as exc:
        raise RecgenError(f"設定ファイルを読み込めません: {path} — {exc}") from exc

    if data is None:
        return config
    if not isinstance(data, dict):
        raise RecgenError(f"設定ファイルはマッピングである必要があります: {path}")

    known = {f.name for f in fields(GeneratorConfig)}
    for key, value in data.items():
        if key not in known:
            logger.warning("未知の設定キーを無視しました: %s", key)
            continue
        if not _is_valid_file_value(key, value):
            logger.warning("%s の %s の値が不正です: %r", path, key, value)
            continue
        setattr(config, key, value)

    logger.info("設定ファイルを読み込みました: %s", path)
    return config


# ---------------------------------------------------------------------------
# 環境変数からの読み込み
# ---------------------------------------------------------------------------

def load_config_from_env(config: Optional[GeneratorConfig] = None) -> GeneratorConfig:
    """環境変数を GeneratorConfig に適用する。

    設定されていない環境変数は既存の値を維持する。不正な値は警告を出して無視する。

    Args:
        config: ベースとなる設定（None の場合はデフォルト値）

    Returns:
        環境変数が適用された設定
    """
    config = config or GeneratorConfig()

    if _ENV_LANGUAGE in os.environ:
        config.language = os.environ[_ENV_LANGUAGE]

    if _ENV_LOCATOR_STYLE in os.environ:
        val = os.environ[_ENV_LOCATOR_STYLE]
        if val in _LOCATOR_STYLES:
            config.locator_style = val
        else:
            logger.warning("%s の値が不正です: %s", _ENV_LOCATOR_STYLE, val)

    if _ENV_HEADLESS in os.environ:
        config.headless = _parse_bool(os.environ[_ENV_HEADLESS])

    if _ENV_SCREENSHOT in os.environ:
        config.screenshot = os.environ[_ENV_SCREENSHOT]

    if _ENV_BROWSER in os.environ:
        val = os.environ[_ENV_BROWSER]
        if val in _BROWSERS:
            config.browser = val
        else:
            logger.warning("%s の値が不正です: %s", _ENV_BROWSER, val)

    if _ENV_VIEWPORT_WIDTH in os.environ:
        width = _parse_int(_ENV_VIEWPORT_WIDTH, os.environ[_ENV_VIEWPORT_WIDTH])
        if width is not None:
            config.viewport_width = width

    if _ENV_VIEWPORT_HEIGHT in os.environ:
        height = _parse_int(_ENV_VIEWPORT_HEIGHT, os.environ[_ENV_VIEWPORT_HEIGHT])
        if height is not None:
            config.viewport_height = height

    if _ENV_SAVE_STORAGE in os.environ:
        config.save_storage = os.environ[_ENV_SAVE_STORAGE]

    return config


# ---------------------------------------------------------------------------
# CLI 引数の適用
# ---------------------------------------------------------------------------

def apply_overrides(config: GeneratorConfig, **overrides: Any) -> GeneratorConfig:
    """CLI 引数を GeneratorConfig に適用する。

    None でない値のみ上書きする。

    Args:
        config: ベースとなる設定（ファイル・環境変数から読み込み済み）
        **overrides: GeneratorConfig のフィールド名と値

    Returns:
        CLI 引数が適用された設定

    Raises:
        TypeError: GeneratorConfig に存在しないフィールド名が渡された場合
    """
    known = {f.name for f in fields(GeneratorConfig)}
    for key, value in overrides.items():
        if key not in known:
            raise TypeError(f"未知の設定項目です: {key}")
        if value is not None:
            setattr(config, key, value)
    return config


def resolve_config(config_path: Optional[Path] = None, **overrides: Any) -> GeneratorConfig:
    """設定ファイル → 環境変数 → CLI 引数 の順に適用した設定を返す。

    config_path が None の場合、カレントディレクトリの recgen.yaml があれば読み込む。
    """
    config = GeneratorConfig()
    if config_path is None:
        default_path = Path(DEFAULT_CONFIG_FILE)
        if default_path.exists():
            config_path = default_path
    if config_path is not None:
        config = load_config_file(config_path, config)
    config = load_config_from_env(config)
    config = apply_overrides(config, **overrides)
    logger.debug("設定を確定しました: %s", config)
    return config
