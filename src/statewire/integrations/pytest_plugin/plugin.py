from __future__ import annotations

import pytest

from statewire.container import Container
from statewire.runtime import define_container
from statewire.serializer import STATE_SERIALIZER, StateSerializer


@pytest.fixture()
def statewire_container() -> Container:
    """Create a per-test container with the base services bound.

    The fixture is function-scoped, so bindings are isolated between tests
    unless users override it. Override it to return a container prepared for
    the test module, for example one with mocks bound.

    Returns:
        A new unlocked container from ``define_container``.

    """
    return define_container()


@pytest.fixture()
def statewire_serializer(statewire_container: Container) -> StateSerializer:
    """Return the ``StateSerializer`` bound in ``statewire_container``."""
    return statewire_container.get(STATE_SERIALIZER)
