"""Deterministic artifact error contracts."""

from __future__ import annotations

from enum import StrEnum


class ArtifactErrorCode(StrEnum):
    """Stable artifact allocation error codes."""

    RESERVATION_EXHAUSTED = "artifact_reservation_exhausted"
    ARTIFACT_NOT_FOUND = "artifact_not_found"
    ARTIFACT_DISPOSED = "artifact_disposed"


class ArtifactError(RuntimeError):
    """Artifact failure with stable deterministic code."""

    def __init__(
        self,
        code: ArtifactErrorCode,
        message: str,
        *,
        data: dict[str, object] | None = None,
        last_error: OSError | None = None,
    ) -> None:
        """Create artifact failure.

        Args:
            code: Stable artifact error code.
            message: Human-readable error message.
            data: Optional structured payload for diagnostics.
            last_error: Last underlying filesystem error, when one exists.
        """
        super().__init__(message)
        self.code = code
        self.data = data or {}
        self.last_error = last_error
