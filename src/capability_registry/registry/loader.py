import logging
import threading
from typing import Any

from ..capabilities.errors import ActivationError, ConfigurationError, DuplicateIdentifierError
from ..capabilities.metadata import MetadataReader
from ..capabilities.models import CapabilityDescriptor, ImplementationDescriptor, ImplementationInfo
from ..discovery.activator import TypeActivator
from ..discovery.parser import parse_descriptors
from ..discovery.resources import DescriptorResourceProvider, capability_name

from .validation import check_implementation

logger = logging.getLogger(__name__)


class CapabilityRegistry:
    """Implementations of one capability, discovered lazily and served by identifier.

    Discovery runs once, on the first lookup. Implementations found by the
    resource provider and those added with ``add_extension_class`` share one
    identifier namespace. When the capability is declared singleton, each
    identifier is instantiated at most once and the instance is reused.
    """

    def __init__(
        self,
        capability: type,
        descriptor: CapabilityDescriptor,
        provider: DescriptorResourceProvider,
        activator: TypeActivator,
        metadata: MetadataReader,
    ) -> None:
        self.capability = capability
        self._descriptor = descriptor
        self._provider = provider
        self._activator = activator
        self._metadata = metadata

        self._lock = threading.RLock()
        self._instances_lock = threading.RLock()
        self._populated = False
        self._populating = False
        self._implementations: dict[str, type] = {}
        self._instances: dict[str, Any] = {}

    @property
    def capability_name(self) -> str:
        return capability_name(self.capability)

    @property
    def descriptor(self) -> CapabilityDescriptor:
        return self._descriptor

    @property
    def populated(self) -> bool:
        return self._populated

    def get_extension_class(self, identifier: str) -> type | None:
        self._ensure_populated()
        return self._implementations.get(identifier)

    def get_default_extension(self) -> Any:
        self._ensure_populated()
        default_identifier = self._descriptor.default_identifier
        if not default_identifier:
            raise ConfigurationError(f"{self.capability_name}: the default implementation identifier is not set")
        return self._resolve(default_identifier)

    def get_extension(self, identifier: str | None) -> Any:
        self._ensure_populated()
        if identifier is None:
            return None
        return self._resolve(identifier)

    def get_extensions(self, category: str | None = None) -> list[Any]:
        """Instances of every implementation, or of those tagged with ``category``.

        Sorted by ascending ``order``; implementations without an ``@extension``
        declaration come last.
        """
        self._ensure_populated()
        selected: list[tuple[ImplementationDescriptor | None, Any]] = []
        for identifier, implementation in list(self._implementations.items()):
            descriptor = self._metadata.implementation_descriptor_of(implementation)
            if category and (descriptor is None or category not in descriptor.categories):
                continue
            selected.append((descriptor, self._resolve(identifier)))

        selected.sort(key=lambda item: _order_key(item[0]))
        return [instance for _, instance in selected]

    def add_extension_class(self, implementation: type | None) -> None:
        if implementation is None:
            return

        self._ensure_populated()
        check_implementation(self.capability, implementation)
        identifier = self._identifier_of(implementation)
        with self._lock:
            if identifier in self._implementations:
                raise DuplicateIdentifierError(self.capability_name, identifier, implementation.__qualname__)
            self._implementations[identifier] = implementation
        logger.info("%s: registered extension %s as %s", self.capability_name, implementation.__qualname__, identifier)

    def describe(self) -> list[ImplementationInfo]:
        self._ensure_populated()
        rows: list[tuple[ImplementationDescriptor | None, ImplementationInfo]] = []
        for identifier, implementation in list(self._implementations.items()):
            descriptor = self._metadata.implementation_descriptor_of(implementation)
            info = ImplementationInfo(
                identifier=identifier,
                qualified_name=capability_name(implementation),
                order=descriptor.order if descriptor is not None else None,
                categories=sorted(descriptor.categories) if descriptor is not None else [],
            )
            rows.append((descriptor, info))

        rows.sort(key=lambda item: _order_key(item[0]))
        return [info for _, info in rows]

    def _ensure_populated(self) -> None:
        if self._populated:
            return

        with self._lock:
            # Re-entry from the populating thread (a plugin importing or
            # constructing against this registry) sees the partial state.
            if self._populated or self._populating:
                return
            self._populating = True
            try:
                self._discover()
            finally:
                self._populating = False
            self._populated = True

        logger.info("%s: discovered %d extension(s)", self.capability_name, len(self._implementations))

    def _discover(self) -> None:
        sources: list[tuple[str, list[str]]] = []
        for resource in self._provider.locate(self.capability_name):
            try:
                sources.append((resource.location, resource.read_lines()))
            except (OSError, UnicodeDecodeError) as exc:
                logger.error("%s: error reading descriptor %s: %s", self.capability_name, resource.location, exc)

        names = parse_descriptors(sources)
        self._implementations = {}
        self._instances = {}
        for name in names:
            try:
                implementation = self._activator.resolve(name)
                check_implementation(self.capability, implementation)
                identifier = self._identifier_of(implementation)
                if identifier in self._implementations:
                    raise DuplicateIdentifierError(self.capability_name, identifier, name)
                self._implementations[identifier] = implementation
            except Exception as exc:
                logger.warning("%s: skipping extension %s: %s", self.capability_name, name, exc)

    def _resolve(self, identifier: str) -> Any:
        if self._descriptor.singleton:
            return self._singleton_instance(identifier)

        implementation = self._implementations.get(identifier)
        if implementation is None:
            return None
        return self._instantiate(implementation)

    def _singleton_instance(self, identifier: str) -> Any:
        instance = self._instances.get(identifier)
        if instance is not None:
            return instance

        implementation = self._implementations.get(identifier)
        if implementation is None:
            return None

        with self._instances_lock:
            instance = self._instances.get(identifier)
            if instance is None:
                instance = self._instantiate(implementation)
                self._instances[identifier] = instance
        return instance

    def _instantiate(self, implementation: type) -> Any:
        try:
            return self._activator.instantiate(implementation)
        except ActivationError:
            raise
        except Exception as exc:
            raise ActivationError(f"{self.capability_name}: error creating {implementation.__qualname__}: {exc}") from exc

    def _identifier_of(self, implementation: type) -> str:
        descriptor = self._metadata.implementation_descriptor_of(implementation)
        if descriptor is not None and descriptor.identifier:
            return descriptor.identifier
        return implementation.__name__


def _order_key(descriptor: ImplementationDescriptor | None) -> tuple[bool, int]:
    if descriptor is None:
        return (True, 0)
    return (False, descriptor.order)
