from __future__ import annotations

from typing import Any


class StateWireError(Exception):
    """Represent a base class for all statewire-specific failures.

    Catch this type when you want to handle any statewire error path without
    matching each concrete exception class individually.
    """


class StateWireInvalidKeyError(StateWireError):
    """Signal a service key that cannot be bound.

    Raised by ``Container.bind`` when a ``ServiceToken`` is bound without an
    implementation (a token has no constructible type of its own), and by
    every bind-family method when the key is neither a class nor a token.

    Typical fix is passing ``implementation=...`` for token keys, or creating
    a token with ``Identity("...")`` instead of using a plain string.
    """

    def __init__(self, key: Any, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid service key {key!r}: {reason}")


class StateWireInvalidRegistrationError(StateWireError):
    """Signal a binding whose implementation cannot be constructed.

    Raised by ``Container.bind`` when the implementation is not a class or is
    an abstract class.
    """


class StateWireLockViolationError(StateWireError):
    """Signal an operation attempted outside of its permitted lock window.

    Raised by ``get``/``get_optional``/``resolve`` (and nested dependency
    resolution) while the container is locked, and by ``bind``,
    ``bind_instance`` and ``bind_mock`` whenever the container does not accept
    mutation.

    Typical fixes include calling ``container.unlock()`` before resolving, or
    registering services through ``container.expand(...)`` on containers
    created with ``create_locked=True``.
    """

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"Container.{operation}() - {message}")


class StateWireDependencyNotRegisteredError(StateWireError):
    """Signal that a service key has no binding.

    Raised by ``get`` and by construction of a service whose required
    constructor dependency is not bound.
    """

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"Service {key!r} is not registered")


class StateWireDependencyExtractionError(StateWireError):
    """Signal that constructor dependencies of a class cannot be determined.

    Common triggers are unresolvable forward references and required
    parameters without a type annotation.
    """

    def __init__(self, cls: Any, error: BaseException | str) -> None:
        self.cls = cls
        self.error = error
        super().__init__(f"Failed to extract dependencies of {cls!r}: {error}")


class StateWireCircularDependencyError(StateWireError):
    """Signal a dependency cycle detected while constructing a service."""

    def __init__(self, chain: list[Any]) -> None:
        self.chain = chain
        rendered = " -> ".join(_describe_key(key) for key in chain)
        super().__init__(f"Circular dependency detected: {rendered}")


class StateWireSerializationConflictError(StateWireError):
    """Signal two tagged properties mapped to the same state slot.

    Raised by ``StateSerializer.serialize`` when a second object writes the
    same composite key and property name. This is a configuration error:
    give each service a distinct service key, or expose a ``uid`` on objects
    that share one.
    """

    def __init__(self, composite_key: str, property_name: str) -> None:
        self.composite_key = composite_key
        self.property_name = property_name
        super().__init__(
            "StateSerializer.serialize_service() - conflicting serializable key: "
            f"{composite_key} (property {property_name!r})",
        )


class StateWirePayloadRetrievalError(StateWireError):
    """Signal that the inbound serialized state cannot be read.

    Raised by payload sources and ``StateSerializer.retrieve_state``.
    ``StateSerializer.get_serialized_state`` intercepts it and degrades to an
    empty state.
    """


def _describe_key(key: Any) -> str:
    return getattr(key, "__qualname__", None) or repr(key)
