"""Artifact config model and loading helpers."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from functools import cache
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from testartifacts.paths import get_default_root

ARTIFACTS_ROOT_VARIABLE = "TEST_ARTIFACTS"
PRESERVE_RUNS_VARIABLE = "PRESERVE_TEST_RUNS"


class ArtifactConfig(BaseModel):
    """Process-wide artifact allocation settings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    artifacts_root: Path
    preserve_runs: bool = False
    max_reservation_attempts: int = Field(default=10, ge=1)

    @field_validator("artifacts_root")
    @classmethod
    def _absolute_root(cls, v: Path) -> Path:
        # Reservation paths must survive a later chdir
        return v.absolute()


class ArtifactConfigError(RuntimeError):
    """Raised when artifact config cannot be decoded or validated."""


def resolve_artifact_config(
    variables: Mapping[str, str],
    *,
    base_dir: Path,
) -> ArtifactConfig:
    """Build config from an opaque key-value source such as os.environ.

    Args:
        variables: Context variables queried by name.
        base_dir: Directory holding the default TEST_ARTIFACTS root.

    Returns:
        Config whose preserve flag is set only when PRESERVE_TEST_RUNS == "1".
    """
    raw_root = variables.get(ARTIFACTS_ROOT_VARIABLE)
    root = Path(raw_root) if raw_root else get_default_root(base_dir)
    return ArtifactConfig(
        artifacts_root=root,
        preserve_runs=variables.get(PRESERVE_RUNS_VARIABLE) == "1",
    )


def _decode_config_payload(path: Path) -> dict[str, object]:
    """Decode artifact config payload from JSON or YAML.

    Args:
        path: Config file path.

    Returns:
        Parsed mapping payload.

    Raises:
        ArtifactConfigError: If decode fails or payload is not an object.
    """
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ArtifactConfigError(f"Invalid artifact config JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ArtifactConfigError(f"Invalid artifact config YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ArtifactConfigError(
            "Invalid artifact config payload: root must be an object"
        )
    return payload


def load_artifact_config(path: Path, *, base_dir: Path) -> ArtifactConfig:
    """Load artifact config from disk, defaulting when missing.

    Relative artifacts_root values resolve against the config file's directory.

    Args:
        path: Config file path.
        base_dir: Directory holding the default root when none is configured.

    Returns:
        Parsed config, or defaults when file does not exist.

    Raises:
        ArtifactConfigError: If payload decode or validation fails.
    """
    if not path.exists():
        return ArtifactConfig(artifacts_root=get_default_root(base_dir))
    payload = _decode_config_payload(path)
    raw_root = payload.get("artifacts_root")
    if raw_root is None:
        payload["artifacts_root"] = get_default_root(base_dir)
    elif isinstance(raw_root, str) and not Path(raw_root).is_absolute():
        payload["artifacts_root"] = path.parent / raw_root
    try:
        return ArtifactConfig.model_validate(payload)
    except ValidationError as exc:
        raise ArtifactConfigError(f"Invalid artifact config payload: {exc}") from exc


@cache
def get_process_config() -> ArtifactConfig:
    """Resolve config from the process environment once and cache it."""
    return resolve_artifact_config(os.environ, base_dir=Path.cwd())


def reset_process_config() -> None:
    """Drop the cached process config so the next call resolves again."""
    get_process_config.cache_clear()
