"""Race-safe reservation of unique artifact directories under a shared root.

A reservation claims a random name by creating <root>/<name>.lock with
create-only semantics. Losing the race on a name means retrying with a new one;
nothing ever waits on another allocator.
"""

from __future__ import annotations

import logging
import os
import uuid
from collections.abc import Callable
from pathlib import Path
from typing import NamedTuple

from testartifacts.errors import ArtifactError, ArtifactErrorCode
from testartifacts.paths import get_artifact_path, get_lock_path, validate_artifact_name

DEFAULT_MAX_ATTEMPTS = 10
RESERVATION_NAME_LENGTH = 12

_LOGGER = logging.getLogger(__name__)


class Reservation(NamedTuple):
    """Reserved paths for one artifact instance."""

    reservation_dir: Path
    lock_path: Path
    artifact_path: Path


def generate_reservation_name() -> str:
    """Generate a random, lowercase, filesystem-safe reservation name.

    Returns:
        Hex string of RESERVATION_NAME_LENGTH characters.
    """
    return uuid.uuid4().hex[:RESERVATION_NAME_LENGTH]


def _create_lock_marker(lock_path: Path) -> None:
    """Create lock_path; raise FileExistsError if it already exists."""
    fd = os.open(str(lock_path), os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o644)
    os.close(fd)


def reserve_artifact_path(
    root: Path,
    artifact_name: str,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    name_factory: Callable[[], str] = generate_reservation_name,
) -> Reservation:
    """Reserve a fresh <root>/<random>/<artifact_name> directory.

    Args:
        root: Artifact root (created if missing).
        artifact_name: Basename of the artifact directory inside the reservation.
        max_attempts: Upper bound on lock marker creation attempts.
        name_factory: Source of random reservation names.

    Returns:
        Reservation whose artifact_path exists and whose lock marker was
        created by this call.

    Raises:
        ArtifactError: RESERVATION_EXHAUSTED after max_attempts failures,
            chained from the last filesystem error.
    """
    validate_artifact_name(artifact_name)
    root.mkdir(parents=True, exist_ok=True)
    last_error: OSError | None = None
    for attempt in range(1, max_attempts + 1):
        reservation_dir = root / name_factory()
        lock_path = get_lock_path(reservation_dir)
        try:
            _create_lock_marker(lock_path)
        except OSError as exc:
            # Potential collision with a concurrent allocator
            _LOGGER.debug(
                "Lock marker %s unavailable (attempt %d/%d): %s",
                lock_path,
                attempt,
                max_attempts,
                exc,
            )
            last_error = exc
            continue
        artifact_path = get_artifact_path(reservation_dir, artifact_name)
        artifact_path.mkdir(parents=True, exist_ok=True)
        return Reservation(
            reservation_dir=reservation_dir,
            lock_path=lock_path,
            artifact_path=artifact_path,
        )
    raise ArtifactError(
        ArtifactErrorCode.RESERVATION_EXHAUSTED,
        f"Could not reserve artifact {artifact_name!r} under {root} "
        f"after {max_attempts} attempts: {last_error}",
        data={"root": str(root), "artifact_name": artifact_name, "attempts": max_attempts},
        last_error=last_error,
    ) from last_error
