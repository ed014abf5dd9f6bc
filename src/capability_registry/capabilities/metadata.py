from collections.abc import Callable, Iterable
from typing import Any, Protocol, TypeVar, runtime_checkable

from .models import CapabilityDescriptor, ImplementationDescriptor

CAPABILITY_ATTRIBUTE = "__capability__"
EXTENSION_ATTRIBUTE = "__extension__"

_T = TypeVar("_T", bound=type)


@runtime_checkable
class MetadataReader(Protocol):
    """Looks up the descriptors declared on capability and implementation types."""

    def capability_descriptor_of(self, capability: type) -> CapabilityDescriptor | None:
        ...

    def implementation_descriptor_of(self, implementation: type) -> ImplementationDescriptor | None:
        ...


def capability(default: str = "", singleton: bool = True) -> Callable[[_T], _T]:
    """Declare a class as a capability that the registry can serve.

    Args:
        default: Identifier of the implementation returned by ``get_extension()``.
        singleton: Reuse one instance per identifier instead of building a new one per call.
    """
    descriptor = CapabilityDescriptor(default_identifier=default, singleton=singleton)

    def decorate(cls: _T) -> _T:
        setattr(cls, CAPABILITY_ATTRIBUTE, descriptor)
        return cls

    return decorate


def extension(identifier: str = "", order: int = 0, categories: Iterable[str] | str = ()) -> Callable[[_T], _T]:
    """Attach registration metadata to an implementation class.

    An empty identifier falls back to the class name at registration time.
    """
    if isinstance(categories, str):
        categories = (categories,)
    descriptor = ImplementationDescriptor(identifier=identifier, order=order, categories=frozenset(categories))

    def decorate(cls: _T) -> _T:
        setattr(cls, EXTENSION_ATTRIBUTE, descriptor)
        return cls

    return decorate


class AttributeMetadataReader:
    # Descriptors are read from the class namespace only, a subclass does not
    # inherit the declaration of its base.
    def capability_descriptor_of(self, capability: type) -> CapabilityDescriptor | None:
        return _declared(capability, CAPABILITY_ATTRIBUTE, CapabilityDescriptor)

    def implementation_descriptor_of(self, implementation: type) -> ImplementationDescriptor | None:
        return _declared(implementation, EXTENSION_ATTRIBUTE, ImplementationDescriptor)


def _declared(cls: type, attribute: str, expected: type[Any]) -> Any:
    value = vars(cls).get(attribute) if isinstance(cls, type) else None
    if isinstance(value, expected):
        return value
    return None
