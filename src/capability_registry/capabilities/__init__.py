"""Capability declarations: descriptor models, metadata decorators and errors."""

from .errors import (
    ActivationError,
    ConfigurationError,
    DescriptorSyntaxError,
    DuplicateIdentifierError,
    ExtensionError,
    ImplementationValidationError,
)
from .metadata import AttributeMetadataReader, MetadataReader, capability, extension
from .models import CapabilityDescriptor, ImplementationDescriptor, ImplementationInfo

__all__ = [
    "ActivationError",
    "AttributeMetadataReader",
    "CapabilityDescriptor",
    "ConfigurationError",
    "DescriptorSyntaxError",
    "DuplicateIdentifierError",
    "ExtensionError",
    "ImplementationDescriptor",
    "ImplementationInfo",
    "ImplementationValidationError",
    "MetadataReader",
    "capability",
    "extension",
]
