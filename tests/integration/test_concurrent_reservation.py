"""Concurrent allocators against one shared root never share a reservation."""

import threading
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path

import pytest

from testartifacts.artifact import ArtifactAllocator
from testartifacts.config import ArtifactConfig
from testartifacts.reservation import Reservation, reserve_artifact_path
from tests.unit.helpers import scripted_names


def _reserve_in_process(root: str) -> str:
    return str(reserve_artifact_path(Path(root), "shared").reservation_dir)


@pytest.mark.integration
def test_threads_get_distinct_reservations(artifacts_root: Path) -> None:
    reservations: list[Reservation] = []
    errors: list[Exception] = []
    barrier = threading.Barrier(16)

    def worker() -> None:
        barrier.wait()
        try:
            reservations.append(reserve_artifact_path(artifacts_root, "shared"))
        except Exception as exc:  # noqa: BLE001
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len({r.reservation_dir for r in reservations}) == 16


@pytest.mark.integration
def test_colliding_names_still_distinct(artifacts_root: Path) -> None:
    """With a tiny name space, create-only markers still prevent sharing."""
    allocator = ArtifactAllocator(
        ArtifactConfig(artifacts_root=artifacts_root),
        name_factory=scripted_names(
            ["n1", "n1", "n2", "n1", "n2", "n3", "n1", "n2", "n3", "n4"]
        ),
    )

    created = [allocator.create("shared") for _ in range(4)]

    assert [a.directory_to_delete.name for a in created] == ["n1", "n2", "n3", "n4"]


@pytest.mark.integration
def test_processes_get_distinct_reservations(artifacts_root: Path) -> None:
    with ProcessPoolExecutor(max_workers=4) as pool:
        dirs = list(pool.map(_reserve_in_process, [str(artifacts_root)] * 12))

    assert len(set(dirs)) == 12
    for directory in dirs:
        assert Path(directory).is_dir()
        assert Path(f"{directory}.lock").is_file()
