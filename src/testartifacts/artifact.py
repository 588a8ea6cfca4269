"""Test artifact handles and the allocator that owns them.

The allocator keeps an explicit owner -> dependents relation: each handle id
maps to the set of ids of its derived copies. Disposal walks that relation, so
disposing an original cascades to its copies while disposing a copy leaves the
original and sibling copies alone. Disposed handles are dropped from the
relation, so a long-lived allocator only tracks live artifacts.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType

from testartifacts.config import ArtifactConfig
from testartifacts.copying import copy_tree
from testartifacts.disposal import DisposalResult, delete_artifact_directory
from testartifacts.errors import ArtifactError, ArtifactErrorCode
from testartifacts.reservation import (
    Reservation,
    generate_reservation_name,
    reserve_artifact_path,
)

_LOGGER = logging.getLogger(__name__)


@dataclass(eq=False)
class TestArtifact:
    """Handle for one allocated or wrapped artifact directory."""

    __test__ = False  # not a pytest test class

    artifact_id: str
    location: Path
    directory_to_delete: Path
    allocator: ArtifactAllocator = field(repr=False)
    disposed: bool = False

    @property
    def name(self) -> str:
        """Basename of the artifact location."""
        return self.location.name

    @property
    def copies(self) -> tuple[TestArtifact, ...]:
        """Derived copies currently owned by this artifact."""
        return self.allocator.copies_of(self)

    def dispose(self) -> DisposalResult:
        """Dispose this artifact and every derived copy it owns."""
        return self.allocator.dispose(self)

    def __enter__(self) -> TestArtifact:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()


def _new_artifact_id() -> str:
    return str(uuid.uuid4())


class ArtifactAllocator:
    """Allocate, copy, and dispose test artifacts under one configured root."""

    def __init__(
        self,
        config: ArtifactConfig,
        *,
        name_factory: Callable[[], str] = generate_reservation_name,
    ) -> None:
        self._config = config
        self._name_factory = name_factory
        self._artifacts: dict[str, TestArtifact] = {}
        self._dependents: dict[str, set[str]] = {}
        self._owners: dict[str, set[str]] = {}

    @property
    def config(self) -> ArtifactConfig:
        """Configuration this allocator was built with."""
        return self._config

    @property
    def live_artifacts(self) -> tuple[TestArtifact, ...]:
        """Handles tracked by this allocator that have not been disposed yet."""
        return tuple(self._artifacts.values())

    @property
    def root(self) -> Path:
        """Artifact root all reservations are made under."""
        return self._config.artifacts_root

    def reserve(self, artifact_name: str) -> Reservation:
        """Reserve a fresh <root>/<random>/<artifact_name> directory."""
        return reserve_artifact_path(
            self.root,
            artifact_name,
            max_attempts=self._config.max_reservation_attempts,
            name_factory=self._name_factory,
        )

    def _register(self, location: Path, directory_to_delete: Path) -> TestArtifact:
        artifact = TestArtifact(
            artifact_id=_new_artifact_id(),
            location=location,
            directory_to_delete=directory_to_delete,
            allocator=self,
        )
        self._artifacts[artifact.artifact_id] = artifact
        self._dependents[artifact.artifact_id] = set()
        return artifact

    def from_location(self, location: Path) -> TestArtifact:
        """Wrap an existing directory. Disposal deletes the directory itself.

        Raises:
            ArtifactError: ARTIFACT_NOT_FOUND if location is not a directory.
        """
        if not location.is_dir():
            raise ArtifactError(
                ArtifactErrorCode.ARTIFACT_NOT_FOUND,
                f"Artifact directory not found: {location}",
                data={"location": str(location)},
            )
        return self._register(location, location)

    def create(self, artifact_name: str) -> TestArtifact:
        """Create an empty artifact in a fresh reservation.

        Disposal removes the whole reservation directory and its lock marker,
        not just the inner artifact directory.
        """
        reservation = self.reserve(artifact_name)
        _LOGGER.debug("Reserved test artifact %s", reservation.artifact_path)
        return self._register(reservation.artifact_path, reservation.reservation_dir)

    def copy(self, source: TestArtifact) -> TestArtifact:
        """Create a derived copy of source in a fresh reservation.

        The copy is owned by source: disposing source disposes the copy.

        Raises:
            ArtifactError: ARTIFACT_DISPOSED if source was already disposed.
            OSError: If copying fails; the partial reservation is left in place.
        """
        if source.disposed:
            raise ArtifactError(
                ArtifactErrorCode.ARTIFACT_DISPOSED,
                f"Cannot copy disposed artifact: {source.location}",
                data={"artifact_id": source.artifact_id},
            )
        reservation = self.reserve(source.name)
        copy_tree(source.location, reservation.artifact_path, overwrite=True)
        derived = self._register(reservation.artifact_path, reservation.reservation_dir)
        self.register_copy(source, derived)
        _LOGGER.debug(
            "Copied test artifact %s -> %s", source.location, derived.location
        )
        return derived

    def register_copy(self, source: TestArtifact, derived: TestArtifact) -> None:
        """Record derived as a copy owned by source."""
        for artifact in (source, derived):
            if artifact.artifact_id not in self._artifacts:
                self._artifacts[artifact.artifact_id] = artifact
                self._dependents[artifact.artifact_id] = set()
        self._dependents[source.artifact_id].add(derived.artifact_id)
        self._owners.setdefault(derived.artifact_id, set()).add(source.artifact_id)

    def copies_of(self, artifact: TestArtifact) -> tuple[TestArtifact, ...]:
        """Return the derived copies currently owned by artifact."""
        ids = self._dependents.get(artifact.artifact_id, set())
        return tuple(self._artifacts[artifact_id] for artifact_id in sorted(ids))

    def dispose(self, artifact: TestArtifact) -> DisposalResult:
        """Dispose artifact, then walk and dispose its derived copies.

        Deletion honours the preserve flag. Filesystem errors become warnings on
        the result; disposal always continues to the remaining copies.
        """
        result = DisposalResult()
        pending = [artifact]
        visited: set[str] = set()
        while pending:
            current = pending.pop()
            if current.artifact_id in visited:
                continue
            visited.add(current.artifact_id)
            result = result.merge(
                delete_artifact_directory(
                    current.directory_to_delete,
                    preserve=self._config.preserve_runs,
                )
            )
            current.disposed = True
            dependents = self._dependents.get(current.artifact_id, set())
            pending.extend(self._artifacts[child_id] for child_id in sorted(dependents))
            dependents.clear()
            self._forget(current.artifact_id)
        return result

    def _forget(self, artifact_id: str) -> None:
        """Drop a disposed handle and every edge that points at it."""
        self._artifacts.pop(artifact_id, None)
        self._dependents.pop(artifact_id, None)
        for owner_id in self._owners.pop(artifact_id, set()):
            self._dependents.get(owner_id, set()).discard(artifact_id)
