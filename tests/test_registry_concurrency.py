import threading
import time
from typing import Any, Callable

from capability_registry.discovery.activator import ImportingActivator
from capability_registry.discovery.resources import InlineDescriptorResource
from capability_registry.registry.directory import RegistryDirectory
from sample_extensions import Codec, Formatter, JsonCodec, UpperFormatter

THREADS = 16


class _CountingProvider:
    def __init__(self, lines: list[str]) -> None:
        self.lines = lines
        self.calls = 0
        self._lock = threading.Lock()

    def locate(self, capability_name: str) -> list[InlineDescriptorResource]:
        with self._lock:
            self.calls += 1
        time.sleep(0.05)
        return [InlineDescriptorResource("inline", self.lines)]


class _CountingActivator(ImportingActivator):
    def __init__(self) -> None:
        self.instantiated = 0
        self._lock = threading.Lock()

    def instantiate(self, implementation: type) -> Any:
        with self._lock:
            self.instantiated += 1
        time.sleep(0.05)
        return super().instantiate(implementation)


def _run_concurrently(target: Callable[[], Any]) -> list[Any]:
    barrier = threading.Barrier(THREADS)
    results: list[Any] = []
    errors: list[BaseException] = []
    lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        try:
            value = target()
            with lock:
                results.append(value)
        except Exception as exc:
            with lock:
                errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(THREADS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    return results


def test_population_runs_once_under_contention() -> None:
    provider = _CountingProvider(["sample_extensions.JsonCodec", "sample_extensions.YamlCodec"])
    registry = RegistryDirectory(provider).get_registry(Codec)

    results = _run_concurrently(lambda: registry.get_extension_class("json"))

    assert provider.calls == 1
    assert results == [JsonCodec] * THREADS
    assert len(registry.get_extensions()) == 2


def test_singleton_instantiated_once_under_contention() -> None:
    activator = _CountingActivator()
    provider = _CountingProvider(["sample_extensions.JsonCodec"])
    registry = RegistryDirectory(provider, activator=activator).get_registry(Codec)

    results = _run_concurrently(lambda: registry.get_extension("json"))

    assert activator.instantiated == 1
    assert all(result is results[0] for result in results)
    assert isinstance(results[0], JsonCodec)


def test_fresh_instances_under_contention() -> None:
    activator = _CountingActivator()
    provider = _CountingProvider(["sample_extensions.UpperFormatter"])
    registry = RegistryDirectory(provider, activator=activator).get_registry(Formatter)

    results = _run_concurrently(lambda: registry.get_extension("upper"))

    assert activator.instantiated == THREADS
    assert len({id(result) for result in results}) == THREADS
    assert all(isinstance(result, UpperFormatter) for result in results)


def test_directory_returns_one_registry_under_contention() -> None:
    directory = RegistryDirectory(_CountingProvider([]))

    results = _run_concurrently(lambda: directory.get_registry(Codec))

    assert all(result is results[0] for result in results)
    assert directory.registries() == {Codec: results[0]}
