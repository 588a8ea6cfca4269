"""Inventory of reservations and orphaned lock markers."""

from pathlib import Path

import pytest

from testartifacts.artifact import ArtifactAllocator
from testartifacts.inventory import (
    ReservationState,
    find_orphaned_locks,
    scan_reservations,
)


@pytest.mark.unit
def test_scan_missing_root_is_empty(tmp_path: Path) -> None:
    assert scan_reservations(tmp_path / "missing") == []


@pytest.mark.unit
def test_scan_reports_held_reservations(
    allocator: ArtifactAllocator, artifacts_root: Path
) -> None:
    artifact = allocator.create("fixtureA")

    records = scan_reservations(artifacts_root)

    assert len(records) == 1
    record = records[0]
    assert record.name == artifact.directory_to_delete.name
    assert record.state == ReservationState.HELD
    assert record.artifact_names == ["fixtureA"]


@pytest.mark.unit
def test_scan_classifies_orphans_and_unlocked_dirs(artifacts_root: Path) -> None:
    """A marker without a directory is orphaned; a bare directory is unlocked."""
    artifacts_root.mkdir(parents=True)
    (artifacts_root / "crashed.lock").write_text("", encoding="utf-8")
    (artifacts_root / "stray").mkdir()

    records = {r.name: r for r in scan_reservations(artifacts_root)}

    assert records["crashed"].state == ReservationState.ORPHANED_LOCK
    assert records["crashed"].artifact_names == []
    assert records["stray"].state == ReservationState.UNLOCKED_DIRECTORY
    assert [r.name for r in find_orphaned_locks(artifacts_root)] == ["crashed"]


@pytest.mark.unit
def test_disposed_reservations_leave_no_trace(
    allocator: ArtifactAllocator, artifacts_root: Path
) -> None:
    allocator.create("a").dispose()
    assert scan_reservations(artifacts_root) == []
    assert find_orphaned_locks(artifacts_root) == []
