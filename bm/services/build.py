"""Build service for the Bubblemon Xcode targets.

Builds every application variant into one shared output directory:
- The primary variant (menu bar app) is required.
- The secondary variant (dock app) is built only if the Xcode project
  lists it, and its output is checked best-effort.

Any xcodebuild failure stops the run immediately; there is no retry.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from bm.core.config import AppVariant
from bm.core.result import Err, Ok, Result
from bm.output.console import Style
from bm.platform.process import ProcessError, run_silent
from bm.platform.process import run as run_process
from bm.services.base import BaseService
from bm.services.build_errors import BuildError, CompileFailed, OutputMissing, ToolMissing

_LIST_TIMEOUT_SECONDS = 60.0
_COMPILE_TIMEOUT_SECONDS = 30 * 60.0
_FILE_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class BuildReport:
    """Outcome of a successful build run.

    Attributes:
        primary_binary: Executable of the required variant.
        secondary_binary: Executable of the optional variant, None if it was
            skipped or its output is missing.
        skipped: Targets that were not built because the project lacks them.
    """

    primary_binary: Path
    secondary_binary: Path | None = None
    skipped: tuple[str, ...] = ()


def parse_xcode_targets(output: str) -> tuple[str, ...]:
    """Extract target names from `xcodebuild -list` output.

    The section looks like:

        Targets:
            Bubblemon Menu Bar
            Bubblemon

    and ends at the first blank line.
    """
    targets: list[str] = []
    in_targets = False
    for raw in output.splitlines():
        line = raw.strip()
        if not in_targets:
            in_targets = line == "Targets:"
            continue
        if not line:
            break
        targets.append(line)
    return tuple(targets)


class BuildService(BaseService):
    """Build service for Xcode application variants."""

    def build_command(self, variant: AppVariant) -> list[str]:
        """xcodebuild invocation for one target."""
        xcode = self._config.xcode
        return [
            "xcodebuild",
            "build",
            "-project",
            xcode.project,
            "-configuration",
            xcode.configuration,
            "-target",
            variant.target,
            "-arch",
            xcode.arch,
            f"CONFIGURATION_BUILD_DIR={self._workspace.build_dir}",
            "ONLY_ACTIVE_ARCH=YES",
            f"VALID_ARCHS={xcode.arch}",
            f"ARCHS={xcode.arch}",
            f"GCC_C_LANGUAGE_STANDARD={xcode.c_language_standard}",
            "CLANG_WARN_DECLARATION_AFTER_STATEMENT=NO",
            "GCC_TREAT_WARNINGS_AS_ERRORS=NO",
        ]

    def list_command(self) -> list[str]:
        return ["xcodebuild", "-project", self._config.xcode.project, "-list"]

    def list_targets(self) -> Result[tuple[str, ...], ProcessError]:
        """Ask xcodebuild which targets the project defines."""
        result = run_process(
            self.list_command(),
            cwd=self._workspace.root,
            timeout=_LIST_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return result
        return Ok(parse_xcode_targets(result.value))

    def build_target(
        self, variant: AppVariant, *, dry_run: bool = False
    ) -> Result[None, BuildError]:
        """Build one target into the shared output directory."""
        self._console.info(f"Building {variant.target}...")
        cmd = self.build_command(variant)
        self._console.print(" ".join(cmd), Style.DIM)
        if dry_run:
            return Ok(None)

        result = run_silent(cmd, cwd=self._workspace.root, timeout=_COMPILE_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return Err(CompileFailed(target=variant.target, returncode=result.error.returncode))
        return Ok(None)

    def build_all(self, *, dry_run: bool = False) -> Result[BuildReport, BuildError]:
        """Build all variants and verify their outputs.

        Returns:
            Ok(BuildReport) when the primary variant was built
            Err(BuildError) on the first failure
        """
        if shutil.which("xcodebuild") is None:
            if not dry_run:
                return Err(ToolMissing(tool_id="xcodebuild"))
            self._console.warning("xcodebuild not found (dry run continues)")

        self._console.info("Creating required directories...")
        if not dry_run:
            self._workspace.include_dir.mkdir(parents=True, exist_ok=True)

        variants = self._config.variants
        result = self.build_target(variants.primary, dry_run=dry_run)
        if isinstance(result, Err):
            return result

        skipped: list[str] = []
        secondary = variants.secondary
        if secondary is not None:
            if self._has_target(secondary.target, dry_run=dry_run):
                result = self.build_target(secondary, dry_run=dry_run)
                if isinstance(result, Err):
                    return result
            else:
                self._console.info(f"{secondary.label} target not found, skipping...")
                skipped.append(secondary.target)

        if dry_run:
            return Ok(
                BuildReport(
                    primary_binary=self._binary_path(variants.primary),
                    skipped=tuple(skipped),
                )
            )
        return self.verify(skipped=tuple(skipped))

    def verify(self, *, skipped: tuple[str, ...] = ()) -> Result[BuildReport, BuildError]:
        """Check that the expected executables exist.

        The primary binary is mandatory. The secondary binary is reported
        when present and otherwise ignored.
        """
        self._console.info("Verifying builds...")
        variants = self._config.variants

        primary_bin = self._binary_path(variants.primary)
        if not primary_bin.is_file():
            return Err(OutputMissing(target=variants.primary.target, path=primary_bin))
        self._console.success(f"{variants.primary.label} built successfully")
        self._describe_binary(primary_bin)

        secondary_bin: Path | None = None
        secondary = variants.secondary
        if secondary is not None and secondary.target not in skipped:
            candidate = self._binary_path(secondary)
            if candidate.is_file():
                secondary_bin = candidate
                self._console.success(f"{secondary.label} built successfully")
                self._describe_binary(candidate)
            else:
                self._console.warning(f"{secondary.label} output not found: {candidate}")

        return Ok(
            BuildReport(
                primary_binary=primary_bin,
                secondary_binary=secondary_bin,
                skipped=skipped,
            )
        )

    def _has_target(self, target: str, *, dry_run: bool) -> bool:
        self._console.print(" ".join(self.list_command()), Style.DIM)
        if dry_run:
            return True

        listed = self.list_targets()
        if isinstance(listed, Err):
            self._console.warning(f"could not list targets: {listed.error}")
            return False
        return target in listed.value

    def _binary_path(self, variant: AppVariant) -> Path:
        return self._workspace.build_dir / variant.binary_relpath

    def _describe_binary(self, path: Path) -> None:
        # `file` shows the architecture; purely informational.
        result = run_process(
            ["file", str(path)], cwd=self._workspace.root, timeout=_FILE_TIMEOUT_SECONDS
        )
        if isinstance(result, Ok) and result.value.strip():
            self._console.print(result.value.strip(), Style.DIM)
