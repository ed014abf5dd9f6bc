"""Descriptor parsing, resource lookup and type activation."""

from .activator import ImportingActivator, TypeActivator
from .parser import parse_descriptors, parse_line
from .resources import (
    DEFAULT_RESOURCE_PREFIX,
    CompositeResourceProvider,
    DescriptorResource,
    DescriptorResourceProvider,
    FileDescriptorResource,
    InlineDescriptorResource,
    ManifestResourceProvider,
    SearchPathResourceProvider,
    capability_name,
)

__all__ = [
    "DEFAULT_RESOURCE_PREFIX",
    "CompositeResourceProvider",
    "DescriptorResource",
    "DescriptorResourceProvider",
    "FileDescriptorResource",
    "ImportingActivator",
    "InlineDescriptorResource",
    "ManifestResourceProvider",
    "SearchPathResourceProvider",
    "TypeActivator",
    "capability_name",
    "parse_descriptors",
    "parse_line",
]
