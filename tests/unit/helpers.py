"""Test-only helpers for unit tests. Not part of the package API."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path


def write_tree(root: Path, files: dict[str, str]) -> None:
    """Write files (relative path -> text) under root, creating parents."""
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def read_tree(root: Path) -> dict[str, str]:
    """Read every file under root as relative posix path -> text."""
    return {
        path.relative_to(root).as_posix(): path.read_text(encoding="utf-8")
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def scripted_names(names: Iterable[str]) -> Callable[[], str]:
    """Name factory returning names in order (for forcing collisions)."""
    iterator = iter(names)
    return lambda: next(iterator)
