"""Capability registries, implementation validation and the registry directory."""

from .config import RegistryConfig
from .directory import RegistryDirectory, default_directory, get_registry
from .loader import CapabilityRegistry
from .validation import check_implementation, find_contract_violations

__all__ = [
    "CapabilityRegistry",
    "RegistryConfig",
    "RegistryDirectory",
    "check_implementation",
    "default_directory",
    "find_contract_violations",
    "get_registry",
]
