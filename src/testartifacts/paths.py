"""Paths for the artifact root. Reservation dirs sit beside their .lock markers."""

from pathlib import Path

DEFAULT_ROOT_DIRNAME = "TEST_ARTIFACTS"
LOCK_SUFFIX = ".lock"


def get_lock_path(reservation_dir: Path) -> Path:
    """Return path to the sibling lock marker: <reservation_dir>.lock."""
    return reservation_dir.with_name(reservation_dir.name + LOCK_SUFFIX)


def get_artifact_path(reservation_dir: Path, artifact_name: str) -> Path:
    """Return path to reservation_dir/<artifact_name>."""
    return reservation_dir / validate_artifact_name(artifact_name)


def get_default_root(base_dir: Path) -> Path:
    """Return the fallback artifact root under base_dir."""
    return base_dir / DEFAULT_ROOT_DIRNAME


def validate_artifact_name(name: str) -> str:
    """
    Return name unchanged if it is a single path component.
    Raises ValueError for empty names, separators, '.' and '..'.
    """
    if not name or name in {".", ".."}:
        raise ValueError(f"Invalid artifact name: {name!r}")
    if "/" in name or "\\" in name or Path(name).name != name:
        raise ValueError(f"Artifact name must be a single path component: {name!r}")
    return name
