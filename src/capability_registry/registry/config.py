import os
from pathlib import Path

from dotenv import load_dotenv

from ..discovery.resources import (
    DEFAULT_RESOURCE_PREFIX,
    CompositeResourceProvider,
    DescriptorResourceProvider,
    ManifestResourceProvider,
    SearchPathResourceProvider,
)


class RegistryConfig:
    def __init__(self) -> None:
        self.resource_prefix = self._normalize_prefix(os.getenv("EXTENSION_RESOURCE_PREFIX", DEFAULT_RESOURCE_PREFIX))
        self.search_path = self._get_path_list("EXTENSION_SEARCH_PATH")
        self.manifest_path = self._get_file_path("EXTENSION_MANIFEST_PATH")

    @classmethod
    def from_env(cls) -> "RegistryConfig":
        """Load a ``.env`` file, if any, then read the configuration."""
        load_dotenv()
        return cls()

    def build_resource_provider(self) -> DescriptorResourceProvider:
        search_provider = SearchPathResourceProvider(self.search_path, self.resource_prefix)
        if self.manifest_path is None:
            return search_provider
        return CompositeResourceProvider([search_provider, ManifestResourceProvider(self.manifest_path)])

    @staticmethod
    def _normalize_prefix(prefix: str) -> str:
        if prefix and not prefix.endswith("/"):
            return f"{prefix}/"
        return prefix

    @staticmethod
    def _get_path_list(key: str) -> list[str] | None:
        value = os.getenv(key)
        if not value:
            return None
        return [entry for entry in value.split(os.pathsep) if entry]

    @staticmethod
    def _get_file_path(key: str) -> Path | None:
        value = os.getenv(key)
        if not value:
            return None
        path = Path(value)
        if path.is_dir():
            raise ValueError(f"Environment variable {key} must name a file, got directory {value}")
        return path
