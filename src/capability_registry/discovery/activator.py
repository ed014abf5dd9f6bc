import importlib
from typing import Any, Protocol, runtime_checkable

from ..capabilities.errors import ActivationError


@runtime_checkable
class TypeActivator(Protocol):
    """Turns implementation names into types and types into instances."""

    def resolve(self, qualified_name: str) -> type:
        ...

    def instantiate(self, implementation: type) -> Any:
        ...


class ImportingActivator:
    def resolve(self, qualified_name: str) -> type:
        parts = qualified_name.split(".")
        for index in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:index])
            try:
                target: Any = importlib.import_module(module_name)
            except ModuleNotFoundError as exc:
                # Only a miss on the prefix itself means "try a shorter module path".
                if exc.name and (exc.name == module_name or module_name.startswith(f"{exc.name}.")):
                    continue
                raise ActivationError(f"{qualified_name}: error importing {module_name}: {exc}") from exc
            except Exception as exc:
                raise ActivationError(f"{qualified_name}: error importing {module_name}: {exc}") from exc

            for attribute in parts[index:]:
                try:
                    target = getattr(target, attribute)
                except AttributeError as exc:
                    raise ActivationError(f"{qualified_name}: {attribute} not found in {module_name}") from exc

            if not isinstance(target, type):
                raise ActivationError(f"{qualified_name}: not a class")
            return target

        raise ActivationError(f"{qualified_name}: no importable module")

    def instantiate(self, implementation: type) -> Any:
        try:
            return implementation()
        except Exception as exc:
            raise ActivationError(f"{implementation.__qualname__}: error creating instance: {exc}") from exc
