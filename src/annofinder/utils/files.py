"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator


def _matches_extension(path: Path, extensions: Iterable[str]) -> bool:
    suffix = path.suffix.lower().lstrip(".")
    return bool(suffix) and suffix in {ext.lower().lstrip(".") for ext in extensions}


def _is_excluded(relative: Path, exclude_dirs: Iterable[str]) -> bool:
    excluded = set(exclude_dirs)
    return any(part in excluded for part in relative.parts[:-1])


def iter_source_paths(
    root: Path,
    *,
    extensions: Iterable[str],
    exclude_dirs: Iterable[str] = (),
) -> Iterator[Path]:
    """Yield source files under ``root`` in lexicographic relative-path order.

    Files inside any directory named in ``exclude_dirs`` are skipped at any depth.
    """
    extensions = frozenset(extensions)
    exclude_dirs = frozenset(exclude_dirs)

    if root.is_file():
        if _matches_extension(root, extensions):
            yield root
        return
    if not root.is_dir():
        return

    candidates = (
        child
        for child in root.rglob("*")
        if child.is_file() and _matches_extension(child, extensions)
    )
    for child in sorted(candidates, key=lambda p: p.relative_to(root).as_posix()):
        if not _is_excluded(child.relative_to(root), exclude_dirs):
            yield child


def read_source_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a whole file as text, decoding strictly."""
    with path.open("r", encoding=encoding, errors="strict", newline="") as handle:
        return handle.read()
