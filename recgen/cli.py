"""
CLI エントリポイント — Typer ベースのコマンドラインインターフェース

recgen コマンドとして以下のサブコマンドを提供する:
  - generate: 記録ファイル（JSON / YAML）から Python スクリプトを生成
  - languages: 利用可能なターゲット言語の一覧
  - init: 設定ファイル（recgen.yaml）の雛形生成
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .actions.loader import load_recording
from .config import DEFAULT_CONFIG_FILE, resolve_config
from .errors import InvariantViolation, RecgenError
from .languages import create_default_registry
from .script import generate_script, write_script

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Typer アプリ定義
# ---------------------------------------------------------------------------

app = typer.Typer(
    help=(
        "recgen — 記録したブラウザ操作から Python スクリプトを生成するツール\n\n"
        "基本の流れ:\n"
        "  1. recgen init                 設定ファイルを作成\n"
        "  2. recgen generate rec.json    記録からスクリプトを生成\n\n"
        "詳しくは各コマンドに --help を付けてください。"
    ),
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="詳細ログを出力する",
    ),
) -> None:
    """recgen — 記録したブラウザ操作から Python スクリプトを生成する。"""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(message)s")


# ---------------------------------------------------------------------------
# generate コマンド
# ---------------------------------------------------------------------------

@app.command()
def generate(
    recording: Path = typer.Argument(..., help="記録ファイル（.json / .yaml）"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="出力先ファイルパス（省略時は標準出力）",
    ),
    language: Optional[str] = typer.Option(
        None, "--language", "-l", help="ターゲット言語（robocorp / python）",
    ),
    locator_style: Optional[str] = typer.Option(
        None, "--locator-style",
        help="ロケータ出力形式（locator: page.locator(...).click() / selector: page.click(...)）",
    ),
    save_storage: Optional[str] = typer.Option(
        None, "--save-storage", help="スクリプト終了時にストレージ状態を保存するパス",
    ),
    headed: bool = typer.Option(
        False, "--headed", help="生成スクリプトでブラウザを表示モードで起動する",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help=f"設定ファイル（省略時は ./{DEFAULT_CONFIG_FILE}）",
    ),
) -> None:
    """記録ファイルから Python スクリプトを生成する。"""
    try:
        config = resolve_config(
            config_path,
            language=language,
            locator_style=locator_style,
            save_storage=save_storage,
            headless=False if headed else None,
        )
        registry = create_default_registry(locator_style=config.locator_style)
        generator = registry.get(config.language)
        actions = load_recording(recording)
        script = generate_script(
            generator,
            actions,
            config.to_header_options(),
            config.save_storage,
        )
    except (RecgenError, InvariantViolation, KeyError, ValueError) as exc:
        typer.echo(f"エラー: {exc}", err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(script)
        return
    write_script(script, output)
    typer.echo(f"スクリプトを生成しました: {output}")


# ---------------------------------------------------------------------------
# languages コマンド
# ---------------------------------------------------------------------------

@app.command()
def languages() -> None:
    """利用可能なターゲット言語を一覧表示する。"""
    registry = create_default_registry()
    for info in registry.list_all():
        typer.echo(f"{info.id:<10} {info.group_name} / {info.name}")


# ---------------------------------------------------------------------------
# init コマンド
# ---------------------------------------------------------------------------

@app.command()
def init(
    project_dir: Path = typer.Argument(
        Path("."), help="プロジェクトディレクトリ（デフォルト: カレント）",
    ),
) -> None:
    """設定ファイルテンプレート（recgen.yaml）を生成する。"""
    try:
        project_dir.mkdir(parents=True, exist_ok=True)
        config_path = project_dir / DEFAULT_CONFIG_FILE
        if config_path.exists():
            typer.echo(f"設定ファイルは既に存在します: {config_path}")
            return
        config_path.write_text(
            "# recgen 設定\n"
            "# CLI 引数 > 環境変数 > このファイル の順に優先されます\n"
            "language: robocorp\n"
            "locator_style: locator\n"
            "headless: true\n"
            "screenshot: only-on-failure\n",
            encoding="utf-8",
        )
        typer.echo(f"設定ファイルを作成しました: {config_path.resolve()}")
    except OSError as exc:
        typer.echo(f"エラー: {exc}", err=True)
        raise typer.Exit(code=1)
