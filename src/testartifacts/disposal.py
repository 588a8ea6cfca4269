"""Disposal results and best-effort deletion of one artifact's backing paths."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from pydantic import BaseModel, Field

from testartifacts.paths import get_lock_path

_LOGGER = logging.getLogger(__name__)


class DisposalWarning(BaseModel):
    """Non-fatal failure recorded while disposing an artifact."""

    path: Path
    error_type: str
    message: str


class DisposalResult(BaseModel):
    """Outcome of disposing an artifact and its derived copies."""

    removed: list[Path] = Field(default_factory=list)
    preserved: list[Path] = Field(default_factory=list)
    warnings: list[DisposalWarning] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when disposal recorded no warnings."""
        return not self.warnings

    def merge(self, other: DisposalResult) -> DisposalResult:
        """Return a new result combining self and other, in that order."""
        return DisposalResult(
            removed=[*self.removed, *other.removed],
            preserved=[*self.preserved, *other.preserved],
            warnings=[*self.warnings, *other.warnings],
        )


def delete_artifact_directory(directory: Path, *, preserve: bool) -> DisposalResult:
    """Delete directory recursively, then its sibling lock marker.

    The lock marker goes last so an interrupted deletion still shows the name
    as held. Errors are logged and returned as warnings, never raised.

    Args:
        directory: Directory slated for deletion (reservation dir or wrapped location).
        preserve: When set, nothing is deleted.

    Returns:
        DisposalResult describing what was removed, preserved, or failed.
    """
    result = DisposalResult()
    if preserve:
        if directory.exists():
            _LOGGER.info("Preserving test artifact %s", directory)
            result.preserved.append(directory)
        return result
    if not directory.exists():
        return result
    try:
        shutil.rmtree(directory)
        get_lock_path(directory).unlink(missing_ok=True)
    except OSError as exc:
        _LOGGER.warning("Failed to delete test artifact %s: %s", directory, exc)
        result.warnings.append(
            DisposalWarning(
                path=directory,
                error_type=type(exc).__name__,
                message=str(exc),
            )
        )
        return result
    result.removed.append(directory)
    return result
