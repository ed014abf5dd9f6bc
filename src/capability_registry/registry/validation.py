import inspect
from typing import Any

from ..capabilities.errors import ImplementationValidationError


def find_contract_violations(capability: type, candidate: Any) -> list[str]:
    if not isinstance(candidate, type):
        return [f"not_a_class: {candidate!r}"]

    violations: list[str] = []

    try:
        if not issubclass(candidate, capability):
            violations.append(f"not_an_implementation_of: {capability.__qualname__}")
    except TypeError as exc:
        violations.append(f"contract_check_failed: {exc}")

    if inspect.isabstract(candidate):
        violations.append("abstract_class")

    if not _has_zero_argument_constructor(candidate):
        violations.append("missing_zero_argument_constructor")

    return violations


def check_implementation(capability: type, candidate: Any) -> None:
    """Raise ImplementationValidationError unless ``candidate`` can serve ``capability``."""
    violations = find_contract_violations(capability, candidate)
    if violations:
        name = getattr(candidate, "__qualname__", repr(candidate))
        raise ImplementationValidationError(name, violations)


def _has_zero_argument_constructor(candidate: type) -> bool:
    try:
        signature = inspect.signature(candidate)
    except (TypeError, ValueError):
        return False

    for parameter in signature.parameters.values():
        if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        if parameter.default is inspect.Parameter.empty:
            return False
    return True
