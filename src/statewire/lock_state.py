from __future__ import annotations

from enum import Enum


class LockState(Enum):
    """Describe whether a container may be resolved from.

    Containers start ``UNLOCKED`` unless built with ``create_locked=True``.
    ``Container.unlock`` is the only public transition and it is one-way;
    ``Container.expand`` unlocks temporarily and restores the prior state.
    """

    LOCKED = "locked"
    """Resolution is rejected; the container is still being prepared."""

    UNLOCKED = "unlocked"
    """Resolution is allowed; the container is ready to use."""
