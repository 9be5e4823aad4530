"""Static registry of properties persisted by ``StateSerializer``.

Entries are declared once per class, when the class is defined, and are
shared by every instance of that class. Subclasses inherit the entries of
their bases.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

C = TypeVar("C", bound=type[Any])

_registry: dict[type[Any], list[ObservableEntry]] = {}
_registry_lock = threading.Lock()


@dataclass(frozen=True, slots=True)
class ObservableEntry:
    """A property persisted under a service key."""

    service_key: str
    property_name: str


def register_observable(cls: type[Any], service_key: str, property_name: str) -> None:
    """Declare that ``property_name`` of ``cls`` is persisted under ``service_key``."""
    entry = ObservableEntry(service_key=service_key, property_name=property_name)
    with _registry_lock:
        entries = _registry.setdefault(cls, [])
        if entry not in entries:
            entries.append(entry)


def serializable(service_key: str, *property_names: str) -> Callable[[C], C]:
    """Mark properties of a class for state serialization.

    Examples:
        .. code-block:: python

            @serializable("Home:CounterService", "state")
            class CounterService:
                def __init__(self) -> None:
                    self.state = {"counter": 0}

    """

    def decorator(cls: C) -> C:
        for property_name in property_names:
            register_observable(cls, service_key, property_name)
        return cls

    return decorator


def get_observables(obj: Any) -> tuple[ObservableEntry, ...]:
    """Return the entries declared for ``obj`` (a class or an instance)."""
    cls = obj if isinstance(obj, type) else type(obj)

    collected: list[ObservableEntry] = []
    with _registry_lock:
        for base in reversed(cls.__mro__):
            for entry in _registry.get(base, ()):
                if entry not in collected:
                    collected.append(entry)
    return tuple(collected)


def composite_key(service_key: str, instance: Any) -> str:
    """Name the state bucket of ``instance``.

    Instances exposing a truthy ``uid`` get their own bucket, so several
    instances declared under one service key do not collide.
    """
    uid = getattr(instance, "uid", None)
    if uid:
        return f"{service_key}-{uid}"
    return service_key
