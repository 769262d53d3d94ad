"""
CLI テスト — typer.testing.CliRunner を使用した CLI コマンドのテスト

generate / languages / init の各コマンドの出力と終了コードを検証する。
"""

from __future__ import annotations

import ast
import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from recgen.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch):
    """RECGEN_* 環境変数と既存の recgen.yaml の影響を受けないようにする。"""
    monkeypatch.chdir(tmp_path)
    env = {k: v for k, v in os.environ.items() if not k.startswith("RECGEN_")}
    with patch.dict(os.environ, env, clear=True):
        yield


# ===========================================================================
# 1. generate コマンド
# ===========================================================================

class TestGenerateCommand:
    """generate コマンドのテスト。"""

    def test_generate_to_stdout(self, recording_file: Path) -> None:
        """出力先省略時はスクリプトが標準出力に出る。"""
        result = runner.invoke(app, ["generate", str(recording_file)])
        assert result.exit_code == 0
        assert "from robocorp import browser" in result.output
        assert 'page.goto("https://example.com/login")' in result.output
        ast.parse(result.output)

    def test_generate_to_file(self, recording_file: Path, tmp_path: Path) -> None:
        """-o 指定時はファイルに書き出し、完了メッセージを表示する。"""
        output = tmp_path / "out" / "task.py"
        result = runner.invoke(app, ["generate", str(recording_file), "-o", str(output)])
        assert result.exit_code == 0
        assert "スクリプトを生成しました" in result.output
        assert "@task" in output.read_text(encoding="utf-8")

    def test_generate_python_language(self, recording_file: Path) -> None:
        """--language python で Playwright Python のスクリプトになる。"""
        result = runner.invoke(app, ["generate", str(recording_file), "--language", "python"])
        assert result.exit_code == 0
        assert "with sync_playwright() as playwright:" in result.output

    def test_generate_selector_style(self, recording_file: Path) -> None:
        """--locator-style selector でセレクタ引数形式になる。"""
        result = runner.invoke(
            app, ["generate", str(recording_file), "--locator-style", "selector"],
        )
        assert result.exit_code == 0
        assert 'page.fill("#email", "user@example.com")' in result.output

    def test_generate_headed_and_save_storage(self, recording_file: Path) -> None:
        """--headed と --save-storage がヘッダ・フッタに反映される。"""
        result = runner.invoke(
            app, ["generate", str(recording_file), "--headed", "--save-storage", "state.json"],
        )
        assert result.exit_code == 0
        assert "headless=False," in result.output
        assert 'storage_state(path="state.json")' in result.output

    def test_generate_uses_config_file(self, recording_file: Path, tmp_path: Path) -> None:
        """カレントディレクトリの recgen.yaml が読み込まれる。"""
        (tmp_path / "recgen.yaml").write_text("language: python\n", encoding="utf-8")
        result = runner.invoke(app, ["generate", str(recording_file)])
        assert result.exit_code == 0
        assert "def run(playwright: Playwright) -> None:" in result.output

    def test_unknown_language(self, recording_file: Path) -> None:
        """未登録の言語で終了コード 1 になる。"""
        result = runner.invoke(app, ["generate", str(recording_file), "--language", "java"])
        assert result.exit_code == 1
        assert "エラー" in result.output

    def test_invalid_locator_style(self, recording_file: Path) -> None:
        """不正なロケータ出力形式で終了コード 1 になる。"""
        result = runner.invoke(
            app, ["generate", str(recording_file), "--locator-style", "xpath"],
        )
        assert result.exit_code == 1

    def test_unsupported_action(self, tmp_path: Path) -> None:
        """未対応のアクション種別を含む記録で終了コード 1 になる。"""
        path = tmp_path / "hover.json"
        path.write_text(json.dumps([
            {"frame": {"pageAlias": "page"}, "action": {"name": "hover", "selector": "#m"}},
        ]), encoding="utf-8")
        result = runner.invoke(app, ["generate", str(path)])
        assert result.exit_code == 1
        assert "hover" in result.output

    def test_missing_recording(self, tmp_path: Path) -> None:
        """存在しない記録ファイルで終了コード 1 になる。"""
        result = runner.invoke(app, ["generate", str(tmp_path / "missing.json")])
        assert result.exit_code == 1


# ===========================================================================
# 2. languages コマンド
# ===========================================================================

class TestLanguagesCommand:
    """languages コマンドのテスト。"""

    def test_lists_languages(self) -> None:
        """登録済みの言語が id 順に表示される。"""
        result = runner.invoke(app, ["languages"])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0].startswith("python")
        assert lines[1].startswith("robocorp")
        assert "Robocorp Library" in lines[1]


# ===========================================================================
# 3. init コマンド
# ===========================================================================

class TestInitCommand:
    """init コマンドのテスト。"""

    def test_init_creates_config_template(self, tmp_path: Path) -> None:
        """設定ファイルテンプレート（recgen.yaml）が生成される。"""
        result = runner.invoke(app, ["init", str(tmp_path / "project")])
        assert result.exit_code == 0
        content = (tmp_path / "project" / "recgen.yaml").read_text(encoding="utf-8")
        assert "language: robocorp" in content

    def test_init_does_not_overwrite_existing_config(self, tmp_path: Path) -> None:
        """既存の recgen.yaml を上書きしない。"""
        config_path = tmp_path / "recgen.yaml"
        config_path.write_text("language: python\n", encoding="utf-8")
        result = runner.invoke(app, ["init", str(tmp_path)])
        assert result.exit_code == 0
        assert "既に存在します" in result.output
        assert config_path.read_text(encoding="utf-8") == "language: python\n"
