"""Artifact configuration loading."""

from testartifacts.config.artifact_config import (
    ARTIFACTS_ROOT_VARIABLE,
    PRESERVE_RUNS_VARIABLE,
    ArtifactConfig,
    ArtifactConfigError,
    get_process_config,
    load_artifact_config,
    reset_process_config,
    resolve_artifact_config,
)

__all__ = [
    "ARTIFACTS_ROOT_VARIABLE",
    "PRESERVE_RUNS_VARIABLE",
    "ArtifactConfig",
    "ArtifactConfigError",
    "get_process_config",
    "load_artifact_config",
    "reset_process_config",
    "resolve_artifact_config",
]
