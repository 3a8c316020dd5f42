from __future__ import annotations

from typing import TYPE_CHECKING

from ._keys import ServiceKey


if TYPE_CHECKING:
    from collections.abc import Hashable


class ContainerError(RuntimeError):
    pass


class UnknownRegistrationError(ContainerError, LookupError):
    """Raised when resolving a key nothing was registered under."""

    def __init__(self, name: str | None, service_type: Hashable) -> None:
        self.name = name
        self.service_type = service_type
        super().__init__(f"No registration found for {self.key}.")

    @property
    def key(self) -> ServiceKey:
        return ServiceKey(self.name, self.service_type)


class ResolveError(ContainerError):
    """Raised when a factory fails while producing an instance.

    When the factory itself resolved other services and one of those failed,
    the nested `ResolveError` becomes `inner`, so the errors form a chain from
    the service originally requested down to the one whose factory raised.
    `first_failure` names the end of that chain.
    """

    def __init__(self, name: str | None, service_type: Hashable, inner: BaseException) -> None:
        self.name = name
        self.service_type = service_type
        self.inner = inner
        super().__init__(self._create_message())

    @property
    def key(self) -> ServiceKey:
        return ServiceKey(self.name, self.service_type)

    @property
    def first_error(self) -> ResolveError:
        """The innermost `ResolveError` in the chain (may be `self`)."""
        error = self
        while isinstance(error.inner, ResolveError):
            error = error.inner
        return error

    @property
    def first_failure(self) -> ServiceKey:
        """Key of the service whose factory raised the original, non-resolve failure."""
        return self.first_error.key

    def _create_message(self) -> str:
        first_failure = self.first_failure
        if first_failure == self.key:
            return f"Failed constructing {self.key}."

        return f"Failed constructing {self.key}; original failure at {first_failure}."


class OwnerAlreadyRegisteredError(ContainerError):
    """Raised when a handler already installed in a container is registered again."""


class ActivationError(ContainerError):
    """Raised by `ServiceLocator` when the underlying container fails."""
