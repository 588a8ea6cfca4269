"""Pytest configuration and shared fixtures."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from testartifacts.artifact import ArtifactAllocator
from testartifacts.config import ArtifactConfig, reset_process_config

pytest_plugins = ["pytester"]


@pytest.fixture
def artifacts_root(tmp_path: Path) -> Path:
    """Temporary artifact root. Created lazily by the first reservation."""
    return tmp_path / "TEST_ARTIFACTS"


@pytest.fixture
def allocator(artifacts_root: Path) -> ArtifactAllocator:
    """Allocator that deletes on disposal."""
    return ArtifactAllocator(ArtifactConfig(artifacts_root=artifacts_root))


@pytest.fixture
def preserving_allocator(artifacts_root: Path) -> ArtifactAllocator:
    """Allocator with the preserve flag set."""
    return ArtifactAllocator(
        ArtifactConfig(artifacts_root=artifacts_root, preserve_runs=True)
    )


@pytest.fixture
def clean_process_config() -> Iterator[None]:
    """Reset the cached process config around a test."""
    reset_process_config()
    yield
    reset_process_config()
