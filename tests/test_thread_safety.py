"""Tests for thread safety of Container."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from statewire.container import Container
from statewire.lock_state import LockState


class SlowService:
    instances = 0

    def __init__(self) -> None:
        time.sleep(0.01)
        SlowService.instances += 1


class ServiceA:
    pass


class TestConcurrentResolution:
    def test_concurrent_singleton_resolution_same_instance(self, container: Container) -> None:
        SlowService.instances = 0
        container.bind(SlowService)
        results: list[SlowService] = []
        errors: list[Exception] = []

        def resolve_service() -> None:
            try:
                results.append(container.get(SlowService))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=resolve_service) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(results) == 10
        assert all(r is results[0] for r in results)
        assert SlowService.instances == 1


class TestConcurrentBinding:
    def test_concurrent_rebinding_keeps_single_key(self, container: Container) -> None:
        def rebind(_: int) -> None:
            container.bind_instance(ServiceA, ServiceA())

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(rebind, range(200)))

        assert container.service_keys == (ServiceA,)

    def test_expand_window_is_not_visible_to_other_threads(
        self,
        locked_container: Container,
    ) -> None:
        entered = threading.Event()
        release = threading.Event()
        observed: list[LockState] = []

        def slow_provider(c: Container) -> None:
            entered.set()
            release.wait(timeout=2.0)

        def observer() -> None:
            entered.wait(timeout=2.0)
            # blocks until expand released the container
            observed.append(locked_container.lock_state)

        worker = threading.Thread(target=locked_container.expand, args=(slow_provider,))
        watcher = threading.Thread(target=observer)
        worker.start()
        watcher.start()
        entered.wait(timeout=2.0)
        release.set()
        worker.join(timeout=2.0)
        watcher.join(timeout=2.0)

        assert observed == [LockState.LOCKED]
