"""Text shipped with a release: INSTALL.txt and the GitHub release notes."""

from __future__ import annotations

from datetime import UTC, datetime

from bm.core.config import VariantsConfig
from bm.git.remote import RepoSlug

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def render_install_text(slug: RepoSlug, variants: VariantsConfig) -> str:
    lines = [
        "Bubblemon for macOS - Installation Instructions",
        "",
        "1. Extract this archive to a temporary location",
        "2. Copy the desired application(s) to your Applications folder:",
        f"   - {variants.primary.bundle_name} - System monitor in menu bar",
    ]
    if variants.secondary is not None:
        lines.append(
            f"   - {variants.secondary.bundle_name} - System monitor in dock (if included)"
        )
    lines += [
        "3. Launch the application",
        "4. The system monitor will appear in your menu bar or dock",
        "",
        "System Requirements:",
        "- macOS 10.13 or later",
        "- Apple Silicon recommended (ARM64 native build)",
        "",
        "For support and source code, visit:",
        slug.url,
    ]
    return "\n".join(lines) + "\n"


def format_timestamp(moment: datetime | None = None) -> str:
    return (moment or datetime.now(UTC)).astimezone(UTC).strftime(TIMESTAMP_FORMAT)


def render_release_notes(
    *,
    version: str,
    commit: str,
    timestamp: str,
    archive_name: str,
) -> str:
    """Markdown body of the GitHub release."""
    return f"""# Bubblemon for macOS

Automated build of Bubblemon system monitor applications for macOS.

## What's included:
- **Bubblemon Menu Bar** - System monitor in your menu bar with animated bubbles
- **Bubblemon Dock** - System monitor in your dock (if available)

## System Requirements:
- macOS 10.13 or later
- Apple Silicon (ARM64) native build

## Installation:
1. Download `{archive_name}`
2. Extract the archive
3. Copy the desired app(s) to your Applications folder
4. Launch the app - it will show animated bubbles representing CPU and memory usage

## Features:
- Real-time CPU usage monitoring with animated bubbles
- Memory usage visualization
- Native Apple Silicon performance
- Lightweight and efficient

## Build Information:
- **Version**: {version}
- **Commit**: {commit}
- **Date**: {timestamp}
- **Architecture**: ARM64 (Apple Silicon native)
- **C Standard**: GNU99

---
*For more information and source code, visit the repository.*
"""
