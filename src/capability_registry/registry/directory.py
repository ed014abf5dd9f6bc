import threading

from ..capabilities.errors import ConfigurationError
from ..capabilities.metadata import AttributeMetadataReader, MetadataReader
from ..discovery.activator import ImportingActivator, TypeActivator
from ..discovery.resources import DescriptorResourceProvider, capability_name

from .config import RegistryConfig
from .loader import CapabilityRegistry

_default_directory: "RegistryDirectory | None" = None
_default_directory_lock = threading.Lock()


class RegistryDirectory:
    """Keeps exactly one CapabilityRegistry per capability type.

    A directory is an isolation scope: registries obtained from different
    directories never share implementations or cached instances.
    """

    def __init__(
        self,
        provider: DescriptorResourceProvider,
        activator: TypeActivator | None = None,
        metadata: MetadataReader | None = None,
    ) -> None:
        self.provider = provider
        self.activator = activator or ImportingActivator()
        self.metadata = metadata or AttributeMetadataReader()
        self._registries: dict[type, CapabilityRegistry] = {}

    def get_registry(self, capability: type) -> CapabilityRegistry:
        if capability is None:
            raise ConfigurationError("extension capability type is None")
        if not isinstance(capability, type):
            raise ConfigurationError(f"extension capability must be a class, got {capability!r}")

        descriptor = self.metadata.capability_descriptor_of(capability)
        if descriptor is None:
            raise ConfigurationError(f"{capability_name(capability)}: capability is not declared with @capability")

        registry = self._registries.get(capability)
        if registry is not None:
            return registry

        candidate = CapabilityRegistry(capability, descriptor, self.provider, self.activator, self.metadata)
        # dict.setdefault is atomic; a losing candidate is dropped before it is ever populated.
        return self._registries.setdefault(capability, candidate)

    def registries(self) -> dict[type, CapabilityRegistry]:
        return dict(self._registries)


def default_directory() -> RegistryDirectory:
    """The process-wide directory, configured from the environment on first use."""
    global _default_directory
    if _default_directory is None:
        with _default_directory_lock:
            if _default_directory is None:
                config = RegistryConfig.from_env()
                _default_directory = RegistryDirectory(config.build_resource_provider())
    return _default_directory


def get_registry(capability: type) -> CapabilityRegistry:
    return default_directory().get_registry(capability)
