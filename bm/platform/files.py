"""Filesystem helpers."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

__all__ = ["atomic_write_text", "human_size", "replace_tree"]


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to path atomically using temp file + replace."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def replace_tree(src: Path, dst: Path) -> None:
    """Copy a directory tree to dst, replacing anything already there.

    Symlinks are copied as links: app bundles ship framework symlinks that
    must survive packaging.
    """
    if dst.is_symlink() or dst.is_file():
        dst.unlink()
    elif dst.exists():
        shutil.rmtree(dst)
    shutil.copytree(src, dst, symlinks=True)


def human_size(num_bytes: int) -> str:
    """Format a byte count like `du -h` (e.g. 512B, 1.5K, 12M)."""
    if num_bytes < 1024:
        return f"{num_bytes}B"
    size = float(num_bytes)
    unit = "B"
    for unit in ("K", "M", "G", "T"):
        size /= 1024
        if size < 1024:
            break
    return f"{size:.1f}{unit}" if size < 10 else f"{size:.0f}{unit}"
