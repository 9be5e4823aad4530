"""Inbound channel for serialized state.

The host runtime transports the state bag produced on the server to the
client. These sources adapt the shapes it usually arrives in to the
``PayloadSource`` protocol consumed by ``StateSerializer``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

from pydantic import JsonValue, TypeAdapter, ValidationError

from statewire.exceptions import StateWirePayloadRetrievalError

SerializedState = dict[str, dict[str, Any]]
"""State bag: composite key -> property name -> JSON-compatible value."""

STATE_PAYLOAD_KEY = "__IOC_STATE__"
"""Key of the state bag inside a host payload mapping."""

_STATE_ADAPTER: TypeAdapter[dict[str, dict[str, JsonValue]]] = TypeAdapter(
    dict[str, dict[str, JsonValue]],
)


class PayloadSource(Protocol):
    """Supply the previously produced state bag."""

    def read(self) -> Mapping[str, Any] | None:
        """Return the state bag, or ``None`` when there is nothing to read."""
        ...


class EnvelopePayloadSource:
    """Read the state bag stored under ``STATE_PAYLOAD_KEY`` of a host payload."""

    def __init__(self, payload: Mapping[str, Any]) -> None:
        self._payload = payload

    def read(self) -> Mapping[str, Any] | None:
        """Return the state bag of the payload.

        Raises:
            StateWirePayloadRetrievalError: The payload has no state bag.

        """
        try:
            return self._payload[STATE_PAYLOAD_KEY]
        except KeyError as e:
            msg = f"Payload has no {STATE_PAYLOAD_KEY!r} entry."
            raise StateWirePayloadRetrievalError(msg) from e


class JsonPayloadSource:
    """Parse the state bag from a JSON document.

    ``document`` is either the JSON text itself or a callable returning it,
    for example a function extracting an inline script from rendered HTML.
    The document must decode to ``{str: {str: <json value>}}``.
    """

    def __init__(self, document: str | bytes | Callable[[], str | bytes]) -> None:
        self._document = document

    def read(self) -> Mapping[str, Any] | None:
        """Decode and validate the document.

        Raises:
            StateWirePayloadRetrievalError: The document is not a valid state bag.

        """
        document = self._document() if callable(self._document) else self._document
        try:
            return _STATE_ADAPTER.validate_json(document)
        except ValidationError as e:
            msg = f"Malformed serialized state: {e.error_count()} validation error(s)."
            raise StateWirePayloadRetrievalError(msg) from e


def dump_state(state: Mapping[str, Mapping[str, Any]]) -> str:
    """Encode a state bag as a JSON document readable by ``JsonPayloadSource``."""
    return _STATE_ADAPTER.dump_json({key: dict(values) for key, values in state.items()}).decode()
