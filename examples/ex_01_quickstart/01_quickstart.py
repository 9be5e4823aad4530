"""Quickstart: bind services and resolve them with their dependencies.

This module demonstrates:

1. ``bind`` with and without an explicit implementation.
2. Constructor injection from type annotations.
3. ``Identity`` tokens for services without a natural class key.
4. Replacing a binding by binding the same key again.
"""

from __future__ import annotations

from typing import Annotated

from statewire import Container, Identity, Inject


class Greeter:
    def greet(self, name: str) -> str:
        return f"Hello, {name}!"


class LoudGreeter(Greeter):
    def greet(self, name: str) -> str:
        return super().greet(name).upper()


class Config:
    def __init__(self) -> None:
        self.name = "statewire"


CONFIG = Identity("App:Config")


class App:
    def __init__(self, greeter: Greeter, config: Annotated[Config, Inject(CONFIG)]) -> None:
        self.greeter = greeter
        self.config = config

    def run(self) -> str:
        return self.greeter.greet(self.config.name)


def main() -> None:
    container = Container()
    container.bind(Greeter)
    container.bind(CONFIG, Config)
    container.bind(App)

    app = container.get(App)
    print(app.run())  # => Hello, statewire!
    print(f"singleton={container.get(App) is app}")  # => singleton=True

    container.bind(Greeter, LoudGreeter)
    container.bind(App)
    print(container.get(App).run())  # => HELLO, STATEWIRE!
    print(f"keys={len(container.service_keys)}")  # => keys=3


if __name__ == "__main__":
    main()
