from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from statewire.exceptions import StateWireCircularDependencyError

# Keys currently being constructed in this context, outermost first
_resolution_stack: ContextVar[tuple[Any, ...]] = ContextVar(
    "statewire_resolution_stack",
    default=(),
)


@contextmanager
def resolving(key: Any) -> Iterator[None]:
    """Track ``key`` as under construction for the duration of the block.

    Raises:
        StateWireCircularDependencyError: ``key`` is already being constructed
            further up the current chain.

    """
    stack = _resolution_stack.get()
    if any(entry is key for entry in stack):
        raise StateWireCircularDependencyError([*stack, key])

    token = _resolution_stack.set((*stack, key))
    try:
        yield
    finally:
        _resolution_stack.reset(token)
