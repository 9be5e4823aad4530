from __future__ import annotations

from statewire import STATE_SERIALIZER, Container, StateSerializer, serializable

pytest_plugins = ["statewire.integrations.pytest_plugin"]


@serializable("Plugin:Counter", "count")
class _Counter:
    def __init__(self) -> None:
        self.count = 0


def test_container_fixture_has_base_services(statewire_container: Container) -> None:
    assert statewire_container.get(Container) is statewire_container
    assert not statewire_container.is_locked


def test_serializer_fixture_comes_from_container(
    statewire_container: Container,
    statewire_serializer: StateSerializer,
) -> None:
    assert statewire_container.get(STATE_SERIALIZER) is statewire_serializer


def test_fixtures_are_isolated_between_tests_first(statewire_container: Container) -> None:
    statewire_container.bind(_Counter)
    statewire_container.get(_Counter).count = 3


def test_fixtures_are_isolated_between_tests_second(statewire_container: Container) -> None:
    assert not statewire_container.is_bound(_Counter)


def test_serializer_fixture_round_trip(
    statewire_container: Container,
    statewire_serializer: StateSerializer,
) -> None:
    statewire_container.bind(_Counter)
    statewire_container.get(_Counter).count = 3

    assert statewire_serializer.serialize(statewire_container) == {"Plugin:Counter": {"count": 3}}
