"""Shared pytest fixtures for statewire tests."""

import pytest

from statewire.container import Container
from statewire.dependencies import DependenciesExtractor
from statewire.serializer import StateSerializer


@pytest.fixture()
def container() -> Container:
    """Default container, unlocked and open for binding."""
    return Container()


@pytest.fixture()
def locked_container() -> Container:
    """Container created with create_locked=True."""
    return Container(create_locked=True)


@pytest.fixture()
def serializer() -> StateSerializer:
    """Serializer without a payload source."""
    return StateSerializer()


@pytest.fixture()
def dependencies_extractor() -> DependenciesExtractor:
    """DependenciesExtractor instance."""
    return DependenciesExtractor()
