from __future__ import annotations

import ast
import os
from dataclasses import dataclass
from pathlib import Path

import pytest


@dataclass(frozen=True, slots=True)
class ImportRef:
    module: str
    line: int

    def under(self, prefix: str) -> bool:
        return self.module == prefix or self.module.startswith(prefix + ".")


@dataclass(frozen=True, slots=True)
class SourceFile:
    rel: str
    tree: ast.AST

    @property
    def top(self) -> str:
        return self.rel.split("/", 1)[0]

    def imports(self) -> list[ImportRef]:
        refs: list[ImportRef] = []
        for node in ast.walk(self.tree):
            if isinstance(node, ast.Import):
                refs.extend(ImportRef(module=alias.name, line=node.lineno) for alias in node.names)
            elif isinstance(node, ast.ImportFrom) and not node.level and node.module:
                refs.append(ImportRef(module=node.module, line=node.lineno))
        return refs


@pytest.fixture(autouse=True)
def _arch_gate() -> None:
    """Architecture checks are advisory unless BM_ARCH_CHECKS=1."""
    if os.getenv("BM_ARCH_CHECKS") != "1":
        pytest.skip("architecture checks are advisory; set BM_ARCH_CHECKS=1 to enable")


@pytest.fixture
def sources() -> list[SourceFile]:
    """Every non-test module of the bm package, parsed."""
    root = Path(__file__).resolve().parents[2]
    files: list[SourceFile] = []
    for path in sorted(root.rglob("*.py")):
        rel = path.relative_to(root)
        if rel.parts[0] == "test" or "__pycache__" in rel.parts:
            continue
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        files.append(SourceFile(rel=rel.as_posix(), tree=tree))
    return files
