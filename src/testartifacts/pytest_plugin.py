"""Pytest fixtures handing each test a private artifact directory."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator

import pytest

from testartifacts.artifact import ArtifactAllocator, TestArtifact
from testartifacts.config import ArtifactConfig, get_process_config

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")
MAX_ARTIFACT_NAME_LENGTH = 100


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register --preserve-test-runs."""
    group = parser.getgroup("testartifacts")
    group.addoption(
        "--preserve-test-runs",
        action="store_true",
        default=False,
        help="Keep test artifact directories after the run for debugging.",
    )


def _artifact_name_for(node_name: str) -> str:
    """Turn a test node name (may include params) into one path component."""
    name = _UNSAFE_NAME_CHARS.sub("_", node_name).strip("._")
    return name[:MAX_ARTIFACT_NAME_LENGTH].rstrip("._") or "artifact"


@pytest.fixture(scope="session")
def artifact_config(pytestconfig: pytest.Config) -> ArtifactConfig:
    """Process config, with preservation forced on by --preserve-test-runs."""
    config = get_process_config()
    if pytestconfig.getoption("preserve_test_runs"):
        return config.model_copy(update={"preserve_runs": True})
    return config


@pytest.fixture(scope="session")
def artifact_allocator(artifact_config: ArtifactConfig) -> ArtifactAllocator:
    """Session-wide allocator over the configured artifact root."""
    return ArtifactAllocator(artifact_config)


@pytest.fixture
def fresh_artifact(
    request: pytest.FixtureRequest, artifact_allocator: ArtifactAllocator
) -> Iterator[TestArtifact]:
    """Fresh artifact named after the test, disposed at teardown."""
    artifact = artifact_allocator.create(_artifact_name_for(request.node.name))
    yield artifact
    artifact.dispose()


@pytest.fixture
def make_test_artifact(
    artifact_allocator: ArtifactAllocator,
) -> Iterator[Callable[[str], TestArtifact]]:
    """Factory for named artifacts; everything it creates is disposed at teardown."""
    created: list[TestArtifact] = []

    def _make(name: str) -> TestArtifact:
        artifact = artifact_allocator.create(name)
        created.append(artifact)
        return artifact

    yield _make
    for artifact in reversed(created):
        artifact.dispose()
