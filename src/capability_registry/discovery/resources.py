import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml

from ..capabilities.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_RESOURCE_PREFIX = "META-INF/services/"


def capability_name(capability: type) -> str:
    return f"{capability.__module__}.{capability.__qualname__}"


@runtime_checkable
class DescriptorResource(Protocol):
    """A readable, line-oriented descriptor listing implementation names."""

    location: str

    def read_lines(self) -> list[str]:
        """Return the raw lines of the resource.

        Raises:
            OSError: If the resource cannot be opened or read.
            UnicodeDecodeError: If the resource is not valid UTF-8.
        """
        ...


@runtime_checkable
class DescriptorResourceProvider(Protocol):
    def locate(self, capability_name: str) -> Sequence[DescriptorResource]:
        ...


class FileDescriptorResource:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.location = str(path)

    def read_lines(self) -> list[str]:
        with self.path.open("r", encoding="utf-8") as descriptor_file:
            return descriptor_file.read().splitlines()

    def __repr__(self) -> str:
        return f"FileDescriptorResource({self.location!r})"


class InlineDescriptorResource:
    def __init__(self, location: str, lines: Iterable[str]) -> None:
        self.location = location
        self._lines = list(lines)

    def read_lines(self) -> list[str]:
        return list(self._lines)

    def __repr__(self) -> str:
        return f"InlineDescriptorResource({self.location!r})"


class SearchPathResourceProvider:
    """Finds ``<entry>/<prefix><capability name>`` files along a search path.

    Without an explicit search path the current ``sys.path`` is scanned at
    lookup time, so directories added after construction are still seen.
    """

    def __init__(
        self,
        search_path: Iterable[str | Path] | None = None,
        prefix: str = DEFAULT_RESOURCE_PREFIX,
    ) -> None:
        self.search_path = list(search_path) if search_path is not None else None
        self.prefix = prefix

    def locate(self, capability_name: str) -> list[DescriptorResource]:
        entries = self.search_path if self.search_path is not None else list(sys.path)
        resources: list[DescriptorResource] = []
        visited: set[Path] = set()

        for entry in entries:
            directory = Path(entry or ".")
            try:
                key = directory.resolve()
            except OSError as exc:
                logger.warning("Skipping unusable search path entry %s: %s", entry, exc)
                continue
            if key in visited or not directory.is_dir():
                continue
            visited.add(key)

            candidate = directory / f"{self.prefix}{capability_name}"
            if candidate.is_file():
                resources.append(FileDescriptorResource(candidate))

        return resources


class ManifestResourceProvider:
    """Serves descriptor lines declared in a YAML manifest.

    Layout::

        services:
          package.module.Capability:
            - package.impl.FirstImplementation
            - package.impl.SecondImplementation  # comments are allowed
    """

    def __init__(self, manifest_path: Path) -> None:
        self.manifest_path = manifest_path
        self._services = self._load_manifest()

    def _load_manifest(self) -> dict[str, list[str]]:
        if not self.manifest_path.exists():
            logger.info("Extension manifest not found, serving nothing: %s", self.manifest_path)
            return {}

        with self.manifest_path.open("r", encoding="utf-8") as manifest_file:
            try:
                raw = yaml.safe_load(manifest_file) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"{self.manifest_path}: malformed manifest: {exc}") from exc

        services = raw.get("services", {}) if isinstance(raw, dict) else None
        if not isinstance(services, dict):
            raise ConfigurationError(f"{self.manifest_path}: 'services' must be a mapping")

        return {str(name): self._entry_lines(name, entries) for name, entries in services.items()}

    def _entry_lines(self, name: Any, entries: Any) -> list[str]:
        if entries is None:
            return []
        if isinstance(entries, str):
            entries = [entries]
        if not isinstance(entries, list) or not all(isinstance(entry, str) for entry in entries):
            raise ConfigurationError(f"{self.manifest_path}: services.{name} must be a list of names")
        return entries

    def locate(self, capability_name: str) -> list[DescriptorResource]:
        lines = self._services.get(capability_name)
        if lines is None:
            return []
        return [InlineDescriptorResource(f"{self.manifest_path}#{capability_name}", lines)]


class CompositeResourceProvider:
    def __init__(self, providers: Iterable[DescriptorResourceProvider]) -> None:
        self.providers = list(providers)

    def locate(self, capability_name: str) -> list[DescriptorResource]:
        resources: list[DescriptorResource] = []
        for provider in self.providers:
            resources.extend(provider.locate(capability_name))
        return resources
