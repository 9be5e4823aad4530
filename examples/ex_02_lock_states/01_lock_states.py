"""Lock states: prepare a container, then release it for use.

A container created with ``create_locked=True``:

1. rejects resolution until ``unlock`` is called;
2. rejects direct ``bind`` calls, before and after unlocking;
3. accepts registrations through ``expand``, which restores the lock state
   afterwards.
"""

from __future__ import annotations

from statewire import Container, StateWireLockViolationError


class Clock:
    pass


class Scheduler:
    def __init__(self, clock: Clock) -> None:
        self.clock = clock


def core_module(container: Container) -> None:
    container.bind(Clock)
    container.bind(Scheduler)


def main() -> None:
    container = Container(create_locked=True)

    try:
        container.bind(Clock)
    except StateWireLockViolationError as error:
        print(error)  # => Container.bind() - trying to modify a locked container.

    container.expand(core_module)
    print(f"locked_after_expand={container.is_locked}")  # => locked_after_expand=True

    try:
        container.get(Scheduler)
    except StateWireLockViolationError as error:
        print(error)  # => Container.get() - trying to resolve a service from a locked container.

    container.unlock()
    scheduler = container.get(Scheduler)
    print(f"shared_clock={scheduler.clock is container.get(Clock)}")  # => shared_clock=True

    try:
        container.bind(Clock)
    except StateWireLockViolationError as error:
        print(error.operation)  # => bind


if __name__ == "__main__":
    main()
