from __future__ import annotations

from types import SimpleNamespace

import pytest

from statewire import Container, define_container

pytest_plugins = ["statewire.integrations.pytest_plugin"]


class _HttpClient:
    def fetch(self) -> str:
        return "network"


@pytest.fixture()
def statewire_container() -> Container:
    container = define_container()
    container.bind_mock(_HttpClient, SimpleNamespace(fetch=lambda: "mocked"))
    return container


def test_overridden_container_fixture_is_used(statewire_container: Container) -> None:
    assert statewire_container.get(_HttpClient).fetch() == "mocked"
