from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from statewire.exceptions import StateWirePayloadRetrievalError, StateWireSerializationConflictError
from statewire.identity import Identity
from statewire.observables import composite_key, get_observables
from statewire.payload import PayloadSource, SerializedState

if TYPE_CHECKING:
    from statewire.container import Container

STATE_SERIALIZER = Identity("IOC:StateSerializer")
_MISSING = object()

logger = logging.getLogger(__name__)


class StateSerializer:
    """Move tagged service properties into and out of a flat state bag.

    On the server ``serialize`` collects the properties declared with
    ``serializable`` from every container service. On the client
    ``unserialize`` writes them back into the services of a freshly built
    container, so they start from the server-computed state.

    The produced bag looks like this:

    .. code-block:: python

        {
            "Home:CounterService": {
                "state": {"counter": 50},
            },
        }

    """

    def __init__(self, payload_source: PayloadSource | None = None) -> None:
        """Initialize the serializer.

        Args:
            payload_source: Channel supplying the state bag read by
                ``get_serialized_state``. Injected when ``PayloadSource`` is
                bound in the container.

        """
        self._payload_source = payload_source
        self._custom_serializables: list[Any] = []
        self._state: SerializedState | None = None

    @property
    def state(self) -> SerializedState | None:
        """State bag cached by ``get_serialized_state``, if it ran already."""
        return self._state

    def add_custom_serializable(self, instance: Any) -> None:
        """Serialize ``instance`` along with the container services.

        Use it for objects living outside of the container, for example
        per-component services. They are serialized but never restored by
        ``unserialize``.
        """
        self._custom_serializables.append(instance)

    def serialize(self, container: Container) -> SerializedState:
        """Collect the state of all tagged container services.

        Raises:
            StateWireSerializationConflictError: Two objects write the same
                property of the same composite key.

        """
        result: SerializedState = {}
        services = [*container.get_all_services(), *self._custom_serializables]
        for service in services:
            self.serialize_service(service, result)
        return result

    def unserialize(self, container: Container, state: Mapping[str, Any] | None) -> None:
        """Restore tagged container services from ``state``.

        Buckets or properties missing from ``state`` are left untouched.
        Values are assigned without validation.
        """
        for service in container.get_all_services():
            self.unserialize_service(service, state)

    def serialize_service(self, service: Any, result: SerializedState) -> None:
        """Store the tagged properties of ``service`` into ``result``."""
        for entry in get_observables(type(service)):
            value = getattr(service, entry.property_name, _MISSING)
            if value is _MISSING:
                # never assigned, nothing to transport
                continue

            key = composite_key(entry.service_key, service)
            bucket = result.setdefault(key, {})
            if entry.property_name in bucket:
                raise StateWireSerializationConflictError(key, entry.property_name)
            bucket[entry.property_name] = value

    def unserialize_service(self, service: Any, state: Mapping[str, Any] | None) -> None:
        """Assign the tagged properties of ``service`` from ``state``."""
        if not state:
            return

        for entry in get_observables(type(service)):
            bucket = state.get(composite_key(entry.service_key, service))
            if bucket is None or entry.property_name not in bucket:
                continue
            setattr(service, entry.property_name, bucket[entry.property_name])

    def retrieve_state(self) -> SerializedState:
        """Read the raw state bag from the payload source.

        Raises:
            StateWirePayloadRetrievalError: No payload source is configured or
                it has nothing to offer.

        """
        if self._payload_source is None:
            msg = "No payload source configured."
            raise StateWirePayloadRetrievalError(msg)

        payload = self._payload_source.read()
        if payload is None:
            msg = "Payload source returned no state."
            raise StateWirePayloadRetrievalError(msg)
        return dict(payload)

    def get_serialized_state(self) -> SerializedState:
        """Return the inbound state bag, reading it once.

        A missing or unreadable payload is not an error: the cached state is
        reset to an empty bag, so there is simply nothing to restore.
        """
        if self._state is not None:
            return self._state

        try:
            self._state = self.retrieve_state()
        except Exception:  # noqa: BLE001
            logger.warning("Serialized state unavailable, starting from empty state", exc_info=True)
            self._state = {}
            return {}
        return self._state
