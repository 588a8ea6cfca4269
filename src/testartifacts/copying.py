"""Recursive directory copy used to seed derived artifacts."""

import shutil
from pathlib import Path


def copy_tree(source_dir: Path, destination_dir: Path, *, overwrite: bool = False) -> None:
    """Mirror source_dir into destination_dir.

    Existing destination files are replaced only when overwrite is set; otherwise
    they are left as they are. No rollback: an OSError mid-copy propagates and
    leaves the destination partially populated.

    Args:
        source_dir: Directory to copy from.
        destination_dir: Directory to copy into (created with parents if missing).
        overwrite: Replace destination files that already exist.
    """
    destination_dir.mkdir(parents=True, exist_ok=True)

    for entry in sorted(source_dir.iterdir()):
        if entry.is_dir():
            copy_tree(entry, destination_dir / entry.name, overwrite=overwrite)

    for entry in sorted(source_dir.iterdir()):
        if not entry.is_file():
            continue
        dest = destination_dir / entry.name
        if overwrite or not dest.exists():
            shutil.copyfile(entry, dest)
