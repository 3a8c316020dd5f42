from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Hashable


def type_display_name(service_type: Hashable) -> str:
    """Readable name of a service type token: `module.QualName` for classes, `repr` otherwise."""
    if inspect.isclass(service_type):
        module = getattr(service_type, "__module__", "")
        qualname = getattr(service_type, "__qualname__", service_type.__name__)
        if module in ("", "builtins"):
            return qualname
        return f"{module}.{qualname}"

    return repr(service_type)


def create_key_string(name: str | None, service_type: Hashable) -> str:
    """Render a registration for display.

    Example:
      create_key_string(None, Repo)   -> "app.Repo"
      create_key_string("ro", Repo)   -> 'app.Repo ("ro")'

    """
    if name is None:
        return type_display_name(service_type)

    return f'{type_display_name(service_type)} ("{name}")'


@dataclass(frozen=True)
class ServiceKey:
    """Identity of a registration: an optional name plus a service type."""

    name: str | None
    service_type: Hashable

    def __str__(self) -> str:
        return create_key_string(self.name, self.service_type)
