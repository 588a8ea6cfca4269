"""Isolated, uniquely named test artifact directories with cascading cleanup."""

from testartifacts.artifact import ArtifactAllocator, TestArtifact
from testartifacts.config import (
    ArtifactConfig,
    ArtifactConfigError,
    get_process_config,
    load_artifact_config,
    resolve_artifact_config,
)
from testartifacts.copying import copy_tree
from testartifacts.disposal import DisposalResult, DisposalWarning
from testartifacts.errors import ArtifactError, ArtifactErrorCode
from testartifacts.inventory import (
    ReservationRecord,
    ReservationState,
    find_orphaned_locks,
    scan_reservations,
)
from testartifacts.paths import get_lock_path
from testartifacts.reservation import (
    Reservation,
    generate_reservation_name,
    reserve_artifact_path,
)

__all__ = [
    "ArtifactAllocator",
    "ArtifactConfig",
    "ArtifactConfigError",
    "ArtifactError",
    "ArtifactErrorCode",
    "DisposalResult",
    "DisposalWarning",
    "Reservation",
    "ReservationRecord",
    "ReservationState",
    "TestArtifact",
    "copy_tree",
    "find_orphaned_locks",
    "generate_reservation_name",
    "get_lock_path",
    "get_process_config",
    "load_artifact_config",
    "reserve_artifact_path",
    "resolve_artifact_config",
    "scan_reservations",
]
