"""State hydration: compute state on the server, restore it on the client.

The server container loads data and serializes the tagged properties into a
JSON document. The client builds its own container and restores the state
without loading the data again.
"""

from __future__ import annotations

from statewire import (
    Container,
    JsonPayloadSource,
    define_container,
    define_module,
    dehydrate,
    dump_state,
    hydrate,
    serializable,
)


@serializable("Home:CounterService", "state")
class CounterService:
    def __init__(self) -> None:
        self.state = {"is_loading": False, "items": []}
        self.loads = 0

    def load(self) -> None:
        self.loads += 1
        self.state = {"is_loading": False, "items": ["first", "second"]}


def home_module(container: Container) -> None:
    container.bind(CounterService)


def render_on_server() -> str:
    container = define_module(define_container(), home_module)
    container.get(CounterService).load()
    return dump_state(dehydrate(container))


def main() -> None:
    document = render_on_server()
    print(document)  # => {"Home:CounterService":{"state":{"is_loading":false,"items":["first","second"]}}}

    client = define_container(payload_source=JsonPayloadSource(document))
    define_module(client, home_module)
    hydrate(client)

    service = client.get(CounterService)
    print(service.state["items"])  # => ['first', 'second']
    print(f"loads_on_client={service.loads}")  # => loads_on_client=0


if __name__ == "__main__":
    main()
