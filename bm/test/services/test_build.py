from __future__ import annotations

from pathlib import Path

import pytest

from bm.core.config import AppVariant, Config, VariantsConfig
from bm.core.result import Err, Ok, Result
from bm.core.workspace import Workspace
from bm.output.console import MockConsole
from bm.platform.process import ProcessError
from bm.services import build as build_mod
from bm.services.build import BuildService, parse_xcode_targets
from bm.services.build_errors import CompileFailed, OutputMissing, ToolMissing

LIST_OUTPUT = """Information about project "bubblemon":
    Targets:
        Bubblemon Menu Bar
        Bubblemon

    Build Configurations:
        Debug
        Release

    If no build configuration is specified and -scheme is not passed then "Release" is used.
"""

LIST_OUTPUT_NO_DOCK = """Information about project "bubblemon":
    Targets:
        Bubblemon Menu Bar

    Build Configurations:
        Release
"""


def _make_binary(build_dir: Path, target: str) -> Path:
    path = build_dir / f"{target}.app" / "Contents" / "MacOS" / target
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\xcf\xfa\xed\xfe")
    return path


class FakeXcode:
    """Stands in for xcodebuild and file.

    `produce` lists the targets whose build actually leaves a binary behind.
    """

    def __init__(
        self,
        build_dir: Path,
        *,
        list_output: str = LIST_OUTPUT,
        list_fails: bool = False,
        fail_target: str | None = None,
        produce: tuple[str, ...] = ("Bubblemon Menu Bar", "Bubblemon"),
    ) -> None:
        self.build_dir = build_dir
        self.list_output = list_output
        self.list_fails = list_fails
        self.fail_target = fail_target
        self.produce = produce
        self.built: list[str] = []
        self.commands: list[list[str]] = []

    def run(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        del cwd, timeout
        self.commands.append(cmd)
        if cmd[0] == "file":
            return Ok(f"{cmd[1]}: Mach-O 64-bit executable arm64\n")
        if self.list_fails:
            return Err(ProcessError(tuple(cmd), 66, "", "xcodebuild: error: no project"))
        return Ok(self.list_output)

    def run_silent(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        timeout: float | None = None,
    ) -> Result[None, ProcessError]:
        del cwd, timeout
        self.commands.append(cmd)
        target = cmd[cmd.index("-target") + 1]
        self.built.append(target)
        if target == self.fail_target:
            return Err(ProcessError(tuple(cmd), 65, "", ""))
        if target in self.produce:
            _make_binary(self.build_dir, target)
        return Ok(None)


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    (tmp_path / ".git").mkdir()
    return Workspace(root=tmp_path)


def _install(monkeypatch: pytest.MonkeyPatch, fake: FakeXcode, *, has_xcode: bool = True) -> None:
    monkeypatch.setattr(build_mod, "run_process", fake.run)
    monkeypatch.setattr(build_mod, "run_silent", fake.run_silent)
    monkeypatch.setattr(
        build_mod.shutil,
        "which",
        lambda name: f"/usr/bin/{name}" if has_xcode else None,
    )


def _service(
    workspace: Workspace, console: MockConsole, config: Config | None = None
) -> BuildService:
    return BuildService(workspace=workspace, config=config or Config(), console=console)


class TestParseXcodeTargets:
    def test_targets_section(self) -> None:
        assert parse_xcode_targets(LIST_OUTPUT) == ("Bubblemon Menu Bar", "Bubblemon")

    def test_no_targets_section(self) -> None:
        assert parse_xcode_targets("xcodebuild: error\n") == ()

    def test_does_not_leak_configurations(self) -> None:
        assert "Release" not in parse_xcode_targets(LIST_OUTPUT_NO_DOCK)


class TestBuildCommand:
    def test_fixed_flags(self, workspace: Workspace) -> None:
        svc = _service(workspace, MockConsole())
        cmd = svc.build_command(AppVariant("Bubblemon Menu Bar", "Bubblemon Menu Bar"))

        assert cmd[:2] == ["xcodebuild", "build"]
        assert cmd[cmd.index("-project") + 1] == "osx/bubblemon.xcodeproj"
        assert cmd[cmd.index("-configuration") + 1] == "Release"
        assert cmd[cmd.index("-target") + 1] == "Bubblemon Menu Bar"
        assert cmd[cmd.index("-arch") + 1] == "arm64"
        assert f"CONFIGURATION_BUILD_DIR={workspace.root / 'build'}" in cmd
        assert "ONLY_ACTIVE_ARCH=YES" in cmd
        assert "VALID_ARCHS=arm64" in cmd
        assert "ARCHS=arm64" in cmd
        assert "GCC_C_LANGUAGE_STANDARD=gnu99" in cmd
        assert "CLANG_WARN_DECLARATION_AFTER_STATEMENT=NO" in cmd
        assert "GCC_TREAT_WARNINGS_AS_ERRORS=NO" in cmd

    def test_build_dir_follows_config(self, workspace: Workspace) -> None:
        svc = _service(workspace, MockConsole(), Config(build_dir="out"))
        cmd = svc.build_command(AppVariant("Bubblemon", "Bubblemon Dock"))
        assert f"CONFIGURATION_BUILD_DIR={workspace.root / 'out'}" in cmd


class TestBuildAll:
    def test_builds_both_variants(
        self, workspace: Workspace, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake = FakeXcode(workspace.build_dir)
        _install(monkeypatch, fake)
        console = MockConsole()

        result = _service(workspace, console).build_all()

        assert isinstance(result, Ok)
        report = result.value
        assert fake.built == ["Bubblemon Menu Bar", "Bubblemon"]
        assert report.primary_binary.name == "Bubblemon Menu Bar"
        assert report.secondary_binary is not None
        assert report.skipped == ()
        assert workspace.include_dir.is_dir()
        assert console.find("Mach-O")

    def test_primary_is_built_before_probe(
        self, workspace: Workspace, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake = FakeXcode(workspace.build_dir)
        _install(monkeypatch, fake)

        _service(workspace, MockConsole()).build_all()

        assert fake.commands[0][:2] == ["xcodebuild", "build"]
        assert fake.commands[1][-1] == "-list"

    def test_missing_secondary_target_is_skipped(
        self, workspace: Workspace, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake = FakeXcode(workspace.build_dir, list_output=LIST_OUTPUT_NO_DOCK)
        _install(monkeypatch, fake)
        console = MockConsole()

        result = _service(workspace, console).build_all()

        assert isinstance(result, Ok)
        assert fake.built == ["Bubblemon Menu Bar"]
        assert result.value.skipped == ("Bubblemon",)
        assert result.value.secondary_binary is None
        assert console.find("target not found, skipping")
        assert not console.has_error()

    def test_list_failure_skips_secondary(
        self, workspace: Workspace, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake = FakeXcode(workspace.build_dir, list_fails=True)
        _install(monkeypatch, fake)
        console = MockConsole()

        result = _service(workspace, console).build_all()

        assert isinstance(result, Ok)
        assert fake.built == ["Bubblemon Menu Bar"]
        assert console.has_warning()

    def test_secondary_disabled_in_config(
        self, workspace: Workspace, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake = FakeXcode(workspace.build_dir)
        _install(monkeypatch, fake)
        config = Config(variants=VariantsConfig(secondary=None))

        result = _service(workspace, MockConsole(), config).build_all()

        assert isinstance(result, Ok)
        assert fake.built == ["Bubblemon Menu Bar"]
        assert not any(c[-1] == "-list" for c in fake.commands)

    def test_primary_failure_is_fatal(
        self, workspace: Workspace, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake = FakeXcode(workspace.build_dir, fail_target="Bubblemon Menu Bar")
        _install(monkeypatch, fake)

        result = _service(workspace, MockConsole()).build_all()

        assert result == Err(CompileFailed(target="Bubblemon Menu Bar", returncode=65))
        assert fake.built == ["Bubblemon Menu Bar"]

    def test_secondary_failure_is_fatal(
        self, workspace: Workspace, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake = FakeXcode(workspace.build_dir, fail_target="Bubblemon")
        _install(monkeypatch, fake)

        result = _service(workspace, MockConsole()).build_all()

        assert result == Err(CompileFailed(target="Bubblemon", returncode=65))

    def test_missing_primary_output(
        self, workspace: Workspace, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake = FakeXcode(workspace.build_dir, produce=("Bubblemon",))
        _install(monkeypatch, fake)

        result = _service(workspace, MockConsole()).build_all()

        assert isinstance(result, Err)
        assert isinstance(result.error, OutputMissing)
        assert result.error.path == (
            workspace.build_dir
            / "Bubblemon Menu Bar.app"
            / "Contents"
            / "MacOS"
            / "Bubblemon Menu Bar"
        )

    def test_missing_secondary_output_is_not_fatal(
        self, workspace: Workspace, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake = FakeXcode(workspace.build_dir, produce=("Bubblemon Menu Bar",))
        _install(monkeypatch, fake)
        console = MockConsole()

        result = _service(workspace, console).build_all()

        assert isinstance(result, Ok)
        assert result.value.secondary_binary is None
        assert console.has_warning()

    def test_xcodebuild_missing(
        self, workspace: Workspace, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake = FakeXcode(workspace.build_dir)
        _install(monkeypatch, fake, has_xcode=False)

        result = _service(workspace, MockConsole()).build_all()

        assert result == Err(ToolMissing(tool_id="xcodebuild"))
        assert fake.commands == []

    def test_dry_run_runs_nothing(
        self, workspace: Workspace, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake = FakeXcode(workspace.build_dir)
        _install(monkeypatch, fake, has_xcode=False)
        console = MockConsole()

        result = _service(workspace, console).build_all(dry_run=True)

        assert isinstance(result, Ok)
        assert fake.commands == []
        assert not workspace.build_dir.exists()
        assert console.find("-target Bubblemon Menu Bar")
