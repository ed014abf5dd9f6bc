class ExtensionError(RuntimeError):
    """Base class for every failure raised by the extension registry."""


class ConfigurationError(ExtensionError):
    """Raised when capability or implementation declarations are inconsistent."""


class DescriptorSyntaxError(ConfigurationError):
    """Raised when a descriptor resource contains an illegal line."""

    def __init__(self, location: str, line_number: int, line: str, reason: str) -> None:
        super().__init__(f"{location}:{line_number}: {reason}: {line}")
        self.location = location
        self.line_number = line_number
        self.line = line


class DuplicateIdentifierError(ConfigurationError):
    """Raised when two implementations claim the same identifier."""

    def __init__(self, capability_name: str, identifier: str, implementation: str) -> None:
        super().__init__(f"{capability_name}: identifier {identifier!r} already registered, rejecting {implementation}")
        self.identifier = identifier


class ImplementationValidationError(ExtensionError):
    """Raised when a candidate type does not satisfy a capability's contract."""

    def __init__(self, implementation: str, violations: list[str]) -> None:
        super().__init__(f"{implementation}: {'; '.join(violations)}")
        self.violations = violations


class ActivationError(ExtensionError):
    """Raised when an implementation cannot be resolved or constructed."""
