"""
Optional component capabilities.

Components stored in the container are opaque. The container only asks
whether a component implements one of the protocols below, using a runtime
isinstance check at the point of use. Classes stored as components are never
treated as capable; only their instances are.
"""

from typing import Any, Awaitable, Optional, Protocol, Union, runtime_checkable

__all__ = [
    "Closable",
    "Openable",
    "ComponentFactory",
    "Referenceable",
    "Unreferenceable",
    "is_closable",
    "is_openable",
    "is_factory",
    "is_referenceable",
    "is_unreferenceable",
]


@runtime_checkable
class Closable(Protocol):
    """Component that releases resources on close. May be sync or async."""

    def close(self, correlation_id: Optional[str]) -> Union[None, Awaitable[None]]: ...


@runtime_checkable
class Openable(Closable, Protocol):
    """Component that acquires resources on open and releases them on close."""

    def open(self, correlation_id: Optional[str]) -> Union[None, Awaitable[None]]: ...


@runtime_checkable
class ComponentFactory(Protocol):
    """
    Component that builds other components on demand.

    `can_create` returns a locator (possibly more specific than the one asked
    for) when the factory can build a matching component, None otherwise.
    """

    def can_create(self, locator: Any) -> Any: ...

    def create(self, locator: Any) -> Any: ...


@runtime_checkable
class Referenceable(Protocol):
    """Component that resolves its dependencies from the reference set."""

    def set_references(self, references: Any) -> None: ...


@runtime_checkable
class Unreferenceable(Protocol):
    """Component that drops its dependencies when unlinked."""

    def unset_references(self) -> None: ...


def _check(component: Any, protocol: type) -> bool:
    return component is not None and not isinstance(component, type) and isinstance(component, protocol)


def is_closable(component: Any) -> bool:
    return _check(component, Closable)


def is_openable(component: Any) -> bool:
    return _check(component, Openable)


def is_factory(component: Any) -> bool:
    return _check(component, ComponentFactory)


def is_referenceable(component: Any) -> bool:
    return _check(component, Referenceable)


def is_unreferenceable(component: Any) -> bool:
    return _check(component, Unreferenceable)
