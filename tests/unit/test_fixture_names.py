"""Artifact names derived from pytest node names."""

import pytest

from testartifacts.paths import validate_artifact_name
from testartifacts.pytest_plugin import MAX_ARTIFACT_NAME_LENGTH, _artifact_name_for


@pytest.mark.unit
def test_parametrized_node_name_becomes_one_component() -> None:
    name = _artifact_name_for("test_copy[a/b-c d]")
    assert name == "test_copy_a_b-c_d"
    assert validate_artifact_name(name) == name


@pytest.mark.unit
def test_long_node_name_is_truncated() -> None:
    """Long parametrized ids stay well under filesystem name limits."""
    name = _artifact_name_for("test_big[" + "x" * 500 + "]")
    assert len(name) == MAX_ARTIFACT_NAME_LENGTH
    assert name.startswith("test_big_x")


@pytest.mark.unit
def test_truncation_does_not_end_on_separator() -> None:
    name = _artifact_name_for("a" * (MAX_ARTIFACT_NAME_LENGTH - 1) + "[zz]")
    assert name == "a" * (MAX_ARTIFACT_NAME_LENGTH - 1)


@pytest.mark.unit
def test_unusable_node_name_falls_back() -> None:
    assert _artifact_name_for("[..]") == "artifact"
