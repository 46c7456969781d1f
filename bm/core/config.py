"""Typed configuration loading and access.

The repository root may carry an optional `bm.toml`. Every value has a
default matching the Bubblemon project layout, so the file only needs the
keys that differ:

    [xcode]
    project = "osx/bubblemon.xcodeproj"
    arch = "arm64"

    [variants]
    primary = "Bubblemon Menu Bar"
    secondary = "Bubblemon"

    [release]
    archive_name = "Bubblemon-macOS-ARM64.tar.gz"
    prerelease_keywords = ["alpha", "beta", "rc", "dev"]
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_tuple, get_table

__all__ = [
    "AppVariant",
    "Config",
    "ConfigError",
    "ReleaseConfig",
    "VariantsConfig",
    "XcodeConfig",
    "CONFIG_FILENAME",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "bm.toml"

DEFAULT_PROJECT = "osx/bubblemon.xcodeproj"
DEFAULT_PRIMARY_TARGET = "Bubblemon Menu Bar"
DEFAULT_SECONDARY_TARGET = "Bubblemon"
DEFAULT_ARCHIVE_NAME = "Bubblemon-macOS-ARM64.tar.gz"
DEFAULT_STAGING_NAME = "Bubblemon-macOS-Release"
DEFAULT_PRERELEASE_KEYWORDS = ("alpha", "beta", "rc", "dev")
DEFAULT_DOC_FILES = ("README.md", "COPYING")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class AppVariant:
    """An Xcode target that produces one application bundle.

    Attributes:
        target: Xcode target name, also the bundle and executable name.
        label: Human readable name used in console output.
    """

    target: str
    label: str

    @property
    def bundle_name(self) -> str:
        return f"{self.target}.app"

    @property
    def binary_relpath(self) -> Path:
        """Executable path relative to the build output directory."""
        return Path(self.bundle_name) / "Contents" / "MacOS" / self.target


@dataclass(frozen=True, slots=True)
class XcodeConfig:
    """Fixed xcodebuild settings applied to every target."""

    project: str = DEFAULT_PROJECT
    configuration: str = "Release"
    arch: str = "arm64"
    c_language_standard: str = "gnu99"


@dataclass(frozen=True, slots=True)
class VariantsConfig:
    primary: AppVariant = field(
        default_factory=lambda: AppVariant(DEFAULT_PRIMARY_TARGET, "Bubblemon Menu Bar")
    )
    secondary: AppVariant | None = field(
        default_factory=lambda: AppVariant(DEFAULT_SECONDARY_TARGET, "Bubblemon Dock")
    )


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    archive_name: str = DEFAULT_ARCHIVE_NAME
    staging_name: str = DEFAULT_STAGING_NAME
    title_prefix: str = "Bubblemon macOS"
    remote: str = "origin"
    doc_files: tuple[str, ...] = DEFAULT_DOC_FILES
    prerelease_keywords: tuple[str, ...] = DEFAULT_PRERELEASE_KEYWORDS


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    build_dir: str = "build"
    xcode: XcodeConfig = field(default_factory=XcodeConfig)
    variants: VariantsConfig = field(default_factory=VariantsConfig)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        build: StrDict = get_table(data, "build") or {}
        xcode: StrDict = get_table(data, "xcode") or {}
        variants: StrDict = get_table(data, "variants") or {}
        release: StrDict = get_table(data, "release") or {}

        primary_target = get_str(variants, "primary") or DEFAULT_PRIMARY_TARGET
        secondary: AppVariant | None
        if variants.get("secondary") is False:
            # `secondary = false` disables the optional variant entirely.
            secondary = None
        else:
            secondary_target = get_str(variants, "secondary") or DEFAULT_SECONDARY_TARGET
            secondary = AppVariant(
                secondary_target,
                get_str(variants, "secondary_label") or "Bubblemon Dock",
            )

        return cls(
            build_dir=get_str(build, "dir") or "build",
            xcode=XcodeConfig(
                project=get_str(xcode, "project") or DEFAULT_PROJECT,
                configuration=get_str(xcode, "configuration") or "Release",
                arch=get_str(xcode, "arch") or "arm64",
                c_language_standard=get_str(xcode, "c_language_standard") or "gnu99",
            ),
            variants=VariantsConfig(
                primary=AppVariant(
                    primary_target,
                    get_str(variants, "primary_label") or primary_target,
                ),
                secondary=secondary,
            ),
            release=ReleaseConfig(
                archive_name=get_str(release, "archive_name") or DEFAULT_ARCHIVE_NAME,
                staging_name=get_str(release, "staging_name") or DEFAULT_STAGING_NAME,
                title_prefix=get_str(release, "title_prefix") or "Bubblemon macOS",
                remote=get_str(release, "remote") or "origin",
                doc_files=get_str_tuple(release, "doc_files") or DEFAULT_DOC_FILES,
                prerelease_keywords=get_str_tuple(release, "prerelease_keywords")
                or DEFAULT_PRERELEASE_KEYWORDS,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to bm.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, otherwise return the defaults.

    A present but broken file is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
