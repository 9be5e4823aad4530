"""Binding table entries.

A binding maps one service key to the strategy used to produce its value.
The container keeps exactly one binding per key and dispatches on the
binding kind at resolution time.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from typing_extensions import TypeAlias


class BindingKind(str, Enum):
    """Defines how a bound service value is produced."""

    SINGLETON = "singleton"
    """The implementation class is constructed once, on first resolution."""

    INSTANCE = "instance"
    """A pre-built value is returned as is."""

    MOCK = "mock"
    """A partial replacement value is returned as is."""


class SingletonBinding:
    """Bind a key to a class constructed lazily and memoized."""

    __slots__ = ("_has_instance", "_instance", "implementation", "key")

    kind = BindingKind.SINGLETON

    def __init__(self, key: Any, implementation: type[Any]) -> None:
        self.key = key
        self.implementation = implementation
        self._instance: Any = None
        self._has_instance = False

    @property
    def is_built(self) -> bool:
        """Whether the singleton has been constructed."""
        return self._has_instance

    @property
    def instance(self) -> Any:
        """Memoized instance, ``None`` until built."""
        return self._instance

    def store(self, instance: Any) -> None:
        """Memoize the constructed instance."""
        self._instance = instance
        self._has_instance = True

    def __repr__(self) -> str:
        return f"SingletonBinding(key={self.key!r}, implementation={self.implementation!r})"


class InstanceBinding:
    """Bind a key to a pre-built value, never reconstructed."""

    __slots__ = ("instance", "key")

    kind = BindingKind.INSTANCE
    is_built = True

    def __init__(self, key: Any, instance: Any) -> None:
        self.key = key
        self.instance = instance

    def __repr__(self) -> str:
        return f"InstanceBinding(key={self.key!r}, instance={self.instance!r})"


class MockBinding(InstanceBinding):
    """Bind a key to a partial stand-in, typically in unit tests."""

    __slots__ = ()

    kind = BindingKind.MOCK

    def __repr__(self) -> str:
        return f"MockBinding(key={self.key!r}, implementation={self.instance!r})"


Binding: TypeAlias = Union[SingletonBinding, InstanceBinding, MockBinding]
