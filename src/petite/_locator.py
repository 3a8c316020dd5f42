from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar, overload

from ._errors import ActivationError
from ._keys import type_display_name


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Hashable

    from ._container import Container

    T = TypeVar("T")


class ServiceLocator:
    """Exposes a `Container` through the generic service-locator interface.

    `get_instance` and `get_all_instances` forward to `Container.resolve` and
    `Container.resolve_all`; container failures are re-raised as `ActivationError`.
    """

    def __init__(self, container: Container) -> None:
        self._container = container

    @overload
    def get_instance(self, service_type: type[T], key: str | None = ...) -> T: ...

    @overload
    def get_instance(self, service_type: Hashable, key: str | None = ...) -> object: ...

    def get_instance(self, service_type: Hashable, key: str | None = None) -> object:
        try:
            return self._container.resolve(service_type, key)
        except Exception as e:
            logger.debug("Activation of %s failed", type_display_name(service_type))
            raise ActivationError(_format_activation_message(service_type, key)) from e

    @overload
    def get_all_instances(self, service_type: type[T]) -> list[T]: ...

    @overload
    def get_all_instances(self, service_type: Hashable) -> list[object]: ...

    def get_all_instances(self, service_type: Hashable) -> list[object]:
        try:
            return self._container.resolve_all(service_type)
        except Exception as e:
            logger.debug("Activation of all %s failed", type_display_name(service_type))
            raise ActivationError(_format_activate_all_message(service_type)) from e

    def __call__(self, service_type: Hashable) -> object:
        return self.get_instance(service_type)


def _format_activation_message(service_type: Hashable, key: str | None) -> str:
    return (
        f"Activation error occurred while trying to get instance of type "
        f'{type_display_name(service_type)}, key "{key or ""}"'
    )


def _format_activate_all_message(service_type: Hashable) -> str:
    return f"Activation error occurred while trying to get all instances of type {type_display_name(service_type)}"
