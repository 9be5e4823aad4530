"""Wiring of containers into a server-render / client-hydrate lifecycle.

The host framework decides when these run: ``dehydrate`` once the server
finished computing state for a request, ``hydrate`` on the client before the
container is first used. Containers are passed explicitly; nothing here looks
up a current application.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from statewire.container import Container, ProviderFunc
from statewire.payload import STATE_PAYLOAD_KEY, PayloadSource, SerializedState
from statewire.serializer import STATE_SERIALIZER, StateSerializer


def define_container(
    *,
    create_locked: bool = False,
    payload_source: PayloadSource | None = None,
) -> Container:
    """Create a container with the base services bound.

    The container is bound to itself under ``Container`` and a
    ``StateSerializer`` is bound under ``STATE_SERIALIZER``.

    Args:
        create_locked: Passed to ``Container``.
        payload_source: Bound under ``PayloadSource`` so the serializer reads
            the inbound state from it (client side).

    """
    container = Container(create_locked=create_locked)

    def base_services(c: Container) -> None:
        c.bind_instance(Container, c)
        if payload_source is not None:
            c.bind_instance(PayloadSource, payload_source)
        c.bind(STATE_SERIALIZER, StateSerializer)

    container.expand(base_services)
    return container


def define_module(container: Container, provider: ProviderFunc | None = None) -> Container:
    """Register the services of a feature module into ``container``."""
    if provider is not None and callable(provider):
        container.expand(provider)
    return container


def dehydrate(
    container: Container,
    payload: MutableMapping[str, Any] | None = None,
) -> SerializedState:
    """Serialize the container state for transport to the client.

    Args:
        container: Container whose services computed the state.
        payload: Host payload mapping; when given, the state bag is stored
            under ``STATE_PAYLOAD_KEY``.

    Returns:
        The serialized state bag.

    """
    serializer: StateSerializer = container.get(STATE_SERIALIZER)
    state = serializer.serialize(container)
    if payload is not None:
        payload[STATE_PAYLOAD_KEY] = state
    return state


def hydrate(container: Container) -> SerializedState:
    """Restore the state received from the server into ``container``.

    Returns:
        The state bag that was applied, empty when none was available.

    """
    serializer: StateSerializer = container.get(STATE_SERIALIZER)
    state = serializer.get_serialized_state()
    serializer.unserialize(container, state)
    return state
