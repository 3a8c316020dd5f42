from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    TypeVar,
    overload,
)

from ._errors import ContainerError, OwnerAlreadyRegisteredError, ResolveError, UnknownRegistrationError
from ._keys import ServiceKey, create_key_string


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable

    T = TypeVar("T")

    Factory = Callable[["Container"], T]


class Lifetime(Enum):
    SINGLETON = "singleton"
    TRANSIENT = "transient"


# Marks an unpopulated singleton slot, so that None and other falsy values can be cached.
_EMPTY: Any = object()


class ServiceHandler:
    """Base class for the strategies a container uses to produce instances.

    A handler belongs to exactly one registration. The container calls
    `bind_owner` when the handler is registered, and `get_instance` on every
    resolve of its key.
    """

    def __init__(self) -> None:
        self._container: Container | None = None
        self._name: str | None = None
        self._service_type: Hashable | None = None
        self._owner_lock = threading.Lock()

    @property
    def container(self) -> Container | None:
        return self._container

    @property
    def key(self) -> ServiceKey | None:
        if self._container is None:
            return None
        return ServiceKey(self._name, self._service_type)

    def bind_owner(self, container: Container, name: str | None, service_type: Hashable) -> None:
        """Record the container and registration this handler is installed under. Only allowed once."""
        with self._owner_lock:
            if self._container is not None:
                msg = (
                    f"{type(self).__name__} is already registered as "
                    f"{create_key_string(self._name, self._service_type)}; create a new handler instead."
                )
                raise OwnerAlreadyRegisteredError(msg)

            self._container = container
            self._name = name
            self._service_type = service_type

    def get_instance(self) -> object:
        raise NotImplementedError


class TransientServiceHandler(ServiceHandler):
    """Invokes the factory on every resolve."""

    def __init__(self, factory: Factory[Any]) -> None:
        if not callable(factory):
            msg = f"Factory must be callable, got {type(factory).__name__}"
            raise TypeError(msg)
        super().__init__()
        self._factory = factory

    def _create_instance(self) -> object:
        container = self._container
        if container is None:
            msg = f"{type(self).__name__} must be registered in a container before producing instances"
            raise ContainerError(msg)

        try:
            return self._factory(container)
        except Exception as e:
            logger.debug("Factory for %s raised %s", self.key, type(e).__name__)
            raise ResolveError(self._name, self._service_type, e) from e

    def get_instance(self) -> object:
        return self._create_instance()


class SingletonServiceHandler(TransientServiceHandler):
    """Invokes the factory on first resolve and returns the cached result afterwards.

    The first population is guarded by a per-handler lock: concurrent first
    resolves block until one factory call has finished, then share its result.
    A failed factory call leaves the slot empty, so the next resolve retries.
    """

    def __init__(self, factory: Factory[Any]) -> None:
        super().__init__(factory)
        self._instance: object = _EMPTY
        self._lock = threading.RLock()

    def get_instance(self) -> object:
        instance = self._instance
        if instance is not _EMPTY:
            return instance

        with self._lock:
            if self._instance is _EMPTY:
                self._instance = self._create_instance()
                logger.debug("Created singleton instance for %s", self.key)
            return self._instance


class InstanceServiceHandler(ServiceHandler):
    """Returns an instance built outside the container."""

    def __init__(self, instance: object) -> None:
        super().__init__()
        self._instance = instance

    def get_instance(self) -> object:
        return self._instance


_HANDLERS: dict[Lifetime, type[TransientServiceHandler]] = {
    Lifetime.TRANSIENT: TransientServiceHandler,
    Lifetime.SINGLETON: SingletonServiceHandler,
}


class Container:
    """Minimal IoC container.

    - register factories under a service type and an optional name
    - lifetimes: transient / singleton / pre-built instance
    - factories receive the container, so they can resolve their own dependencies
    - failures inside nested resolves are reported as a chain of `ResolveError`s.
    """

    def __init__(self) -> None:
        self._registrations: dict[ServiceKey, ServiceHandler] = {}
        self._lock = threading.RLock()

    def register_handler(self, service_type: Hashable, handler: ServiceHandler, *, name: str | None = None) -> None:
        """Install `handler` for `service_type`/`name`, replacing any previous registration of that key.

        You probably want `register`, `register_singleton` or `register_instance`;
        this is here for custom handlers.
        """
        _validate_name(name)
        if not isinstance(handler, ServiceHandler):
            msg = f"Expected a ServiceHandler, got {type(handler).__name__}"
            raise TypeError(msg)

        key = ServiceKey(name, service_type)
        with self._lock:
            replaced = key in self._registrations
            handler.bind_owner(self, name, service_type)
            self._registrations[key] = handler

        if replaced:
            logger.debug("Replaced registration for %s with %s", key, type(handler).__name__)
        else:
            logger.debug("Registered %s for %s", type(handler).__name__, key)

    def register(
        self,
        service_type: Hashable,
        factory: Factory[Any],
        *,
        name: str | None = None,
        lifetime: Lifetime = Lifetime.TRANSIENT,
    ) -> None:
        """Register a factory for a service type.

        Example:
          container.register(Repo, lambda c: SqlRepo(c.resolve(Engine)))
          container.register(Repo, make_readonly_repo, name="readonly", lifetime=Lifetime.SINGLETON)

        """
        self.register_handler(service_type, _HANDLERS[lifetime](factory), name=name)

    def register_singleton(self, service_type: Hashable, factory: Factory[Any], *, name: str | None = None) -> None:
        """Register a factory that is called once, on first resolve."""
        self.register_handler(service_type, SingletonServiceHandler(factory), name=name)

    def register_instance(self, service_type: Hashable, instance: object, *, name: str | None = None) -> None:
        """Register a pre-built instance (always singleton)."""
        self.register_handler(service_type, InstanceServiceHandler(instance), name=name)

    @overload
    def resolve(self, service_type: type[T], name: str | None = ...) -> T: ...

    @overload
    def resolve(self, service_type: Hashable, name: str | None = ...) -> object: ...

    def resolve(self, service_type: Hashable, name: str | None = None) -> object:
        """Resolve the registration for `service_type` and `name` to an instance.

        Raises `UnknownRegistrationError` when nothing is registered under that key
        and `ResolveError` when the registered factory fails.
        """
        key = ServiceKey(name, service_type)
        with self._lock:
            handler = self._registrations.get(key)

        if handler is None:
            raise UnknownRegistrationError(name, service_type)

        return handler.get_instance()

    @overload
    def resolve_all(self, service_type: type[T]) -> list[T]: ...

    @overload
    def resolve_all(self, service_type: Hashable) -> list[object]: ...

    def resolve_all(self, service_type: Hashable) -> list[object]:
        """Resolve every registration of `service_type`, named or not, in registration order."""
        with self._lock:
            handlers = [handler for key, handler in self._registrations.items() if key.service_type == service_type]

        return [handler.get_instance() for handler in handlers]

    def is_registered(self, service_type: Hashable, name: str | None = None) -> bool:
        return ServiceKey(name, service_type) in self

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._registrations

    def __len__(self) -> int:
        with self._lock:
            return len(self._registrations)


def _validate_name(name: object) -> None:
    if name is not None and not isinstance(name, str):
        msg = f"Registration name must be a string or None, got {type(name).__name__}"
        raise TypeError(msg)
