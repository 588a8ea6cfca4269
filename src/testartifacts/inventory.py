"""Read-only inventory of reservations under an artifact root.

Lock markers are deleted after their directory, so a crash in between leaves a
marker with no directory. Those are reported here, never removed.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel

from testartifacts.paths import LOCK_SUFFIX, get_lock_path


class ReservationState(StrEnum):
    """Observed state of one reservation name."""

    HELD = "held"
    ORPHANED_LOCK = "orphaned_lock"
    UNLOCKED_DIRECTORY = "unlocked_directory"


class ReservationRecord(BaseModel):
    """One reservation name found under the artifact root."""

    name: str
    reservation_dir: Path
    lock_path: Path
    has_directory: bool
    has_lock: bool
    artifact_names: list[str] = []

    @property
    def state(self) -> ReservationState:
        """Classify from directory and lock marker presence."""
        if self.has_directory and self.has_lock:
            return ReservationState.HELD
        if self.has_lock:
            return ReservationState.ORPHANED_LOCK
        return ReservationState.UNLOCKED_DIRECTORY


def scan_reservations(root: Path) -> list[ReservationRecord]:
    """List every reservation directory or lock marker under root, sorted by name."""
    if not root.is_dir():
        return []
    names: set[str] = set()
    for entry in root.iterdir():
        if entry.is_dir():
            names.add(entry.name)
        elif entry.is_file() and entry.name.endswith(LOCK_SUFFIX):
            names.add(entry.name[: -len(LOCK_SUFFIX)])
    records: list[ReservationRecord] = []
    for name in sorted(names):
        reservation_dir = root / name
        lock_path = get_lock_path(reservation_dir)
        has_directory = reservation_dir.is_dir()
        artifact_names = (
            sorted(child.name for child in reservation_dir.iterdir())
            if has_directory
            else []
        )
        records.append(
            ReservationRecord(
                name=name,
                reservation_dir=reservation_dir,
                lock_path=lock_path,
                has_directory=has_directory,
                has_lock=lock_path.is_file(),
                artifact_names=artifact_names,
            )
        )
    return records


def find_orphaned_locks(root: Path) -> list[ReservationRecord]:
    """Return reservations whose lock marker outlived its directory."""
    return [
        record
        for record in scan_reservations(root)
        if record.state == ReservationState.ORPHANED_LOCK
    ]
