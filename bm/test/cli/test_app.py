from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from bm import __version__
from bm.cli.app import app
from bm.core.errors import ErrorCode
from bm.core.workspace import ROOT_ENV_VAR

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # --root writes BM_ROOT straight into os.environ.
    monkeypatch.setenv(ROOT_ENV_VAR, "")
    monkeypatch.delenv(ROOT_ENV_VAR)


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == __version__


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help_lists_commands(flag: str) -> None:
    result = runner.invoke(app, [flag])
    assert result.exit_code == 0
    assert "build" in result.output
    assert "release" in result.output


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_release_help_describes_tag_requirement(flag: str) -> None:
    result = runner.invoke(app, ["release", flag])
    assert result.exit_code == 0
    assert "untagged" in result.output


def test_root_must_be_a_directory(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--root", str(tmp_path / "nope"), "build", "--dry-run"])
    assert result.exit_code == int(ErrorCode.ENV_ERROR)


def test_release_requires_git_checkout(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--root", str(tmp_path), "release", "--dry-run"])
    assert result.exit_code == int(ErrorCode.ENV_ERROR)


def test_build_dry_run_without_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")

    result = runner.invoke(app, ["--root", str(tmp_path), "build", "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "xcodebuild build -project osx/bubblemon.xcodeproj" in result.output
    assert "Build completed successfully!" in result.output
    assert not (tmp_path / "build").exists()


def test_broken_config_is_an_environment_error(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    (tmp_path / "bm.toml").write_text("build_dir = [", encoding="utf-8")

    result = runner.invoke(app, ["--root", str(tmp_path), "build", "--dry-run"])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)
