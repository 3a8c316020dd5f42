"""Minimal inversion-of-control container.

Factories are registered under a service type, optionally qualified by a name,
and resolved later by the same key. Each factory receives the container, so it
can resolve its own dependencies; when one of them fails, the resulting
`ResolveError` chain tells which service was requested and which one actually broke.

Exports:
- `Container`: registry of factories, singletons and pre-built instances.
- `Lifetime`: Enum selecting transient or singleton behavior for factory registrations.
- `ServiceKey`: (name, service type) identity of a registration.
- Handlers (`TransientServiceHandler`, `SingletonServiceHandler`, `InstanceServiceHandler`)
  for use with `Container.register_handler`.
- `ServiceLocator`: adapter exposing a container as a generic service locator.
"""

from ._container import (
    Container,
    InstanceServiceHandler,
    Lifetime,
    ServiceHandler,
    SingletonServiceHandler,
    TransientServiceHandler,
)
from ._errors import (
    ActivationError,
    ContainerError,
    OwnerAlreadyRegisteredError,
    ResolveError,
    UnknownRegistrationError,
)
from ._keys import ServiceKey, create_key_string
from ._locator import ServiceLocator


__all__ = [
    "ActivationError",
    "Container",
    "ContainerError",
    "InstanceServiceHandler",
    "Lifetime",
    "OwnerAlreadyRegisteredError",
    "ResolveError",
    "ServiceHandler",
    "ServiceKey",
    "ServiceLocator",
    "SingletonServiceHandler",
    "TransientServiceHandler",
    "UnknownRegistrationError",
    "create_key_string",
]
