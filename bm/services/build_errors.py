from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ToolMissing:
    tool_id: str
    hint: str = "Install Xcode and run: xcode-select --install"


@dataclass(frozen=True, slots=True)
class CompileFailed:
    target: str
    returncode: int


@dataclass(frozen=True, slots=True)
class OutputMissing:
    target: str
    path: Path


BuildError = ToolMissing | CompileFailed | OutputMissing
