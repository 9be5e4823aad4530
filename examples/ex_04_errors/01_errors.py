"""Errors raised for misconfigured containers and serializable services."""

from __future__ import annotations

from statewire import (
    Container,
    Identity,
    StateSerializer,
    StateWireError,
    StateWireInvalidKeyError,
    StateWireSerializationConflictError,
    serializable,
)


@serializable("Shared", "value")
class First:
    def __init__(self) -> None:
        self.value = 1


@serializable("Shared", "value")
class Second:
    def __init__(self) -> None:
        self.value = 2


def main() -> None:
    container = Container()

    try:
        container.bind(Identity("App:Logger"))
    except StateWireInvalidKeyError as error:
        print(type(error).__name__)  # => StateWireInvalidKeyError

    container.bind(First)
    container.bind(Second)
    try:
        StateSerializer().serialize(container)
    except StateWireSerializationConflictError as error:
        print(f"{error.composite_key}.{error.property_name}")  # => Shared.value
        print(isinstance(error, StateWireError))  # => True


if __name__ == "__main__":
    main()
