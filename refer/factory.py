"""
Component factories.

A Factory maps locators to creator functions. It implements the
ComponentFactory capability, so putting it into a reference set lets the
build stage create components on demand.
"""

from typing import Any, Callable, List, Optional, Tuple, Type

from custom_logging import get_logger
from refer.descriptor import match_locator
from refer.exceptions import CreateError


class Factory:
    """
    Factory that creates components from registered creator functions.

    Example:
        factory = Factory()
        factory.register_as_type(Descriptor("app", "cache", "memory", "*", "1.0"), MemoryCache)
        factory.register(
            Descriptor("app", "logger", "console", "*", "1.0"),
            lambda locator: ConsoleLogger(name=locator.name),
        )
    """

    def __init__(self):
        self.logger = get_logger("factory")
        self._registrations: List[Tuple[Any, Callable[[Any], Any]]] = []

    def register(self, locator: Any, creator: Callable[[Any], Any]) -> None:
        """
        Register a creator function.

        Args:
            locator: Locator of the components the creator builds
            creator: Function called with the requested locator that returns
                a new component
        """
        if locator is None:
            raise ValueError("Locator cannot be None")
        if not callable(creator):
            raise TypeError(f"Creator must be callable: {creator!r}")

        self._registrations.append((locator, creator))
        self.logger.debug(f"Registered creator for {locator}")

    def register_as_type(self, locator: Any, component_type: Type) -> None:
        """
        Register a class whose no-argument constructor creates the component.

        Args:
            locator: Locator of the components the class builds
            component_type: Class to instantiate
        """
        if not isinstance(component_type, type):
            raise TypeError(f"Component type must be a class: {component_type!r}")

        self.register(locator, lambda _locator: component_type())

    def can_create(self, locator: Any) -> Optional[Any]:
        """
        Check whether this factory can create a component by the locator.

        Returns:
            The locator the matching creator was registered with, which may
            be more specific than the one asked for, or None
        """
        for registered, _creator in self._registrations:
            if match_locator(registered, locator):
                return registered
        return None

    def create(self, locator: Any) -> Any:
        """
        Create a component by the locator.

        Raises:
            CreateError: If no creator matches or the creator failed
        """
        for registered, creator in self._registrations:
            if match_locator(registered, locator):
                try:
                    return creator(locator)
                except Exception as e:
                    raise CreateError(locator, str(e)) from e

        raise CreateError(locator, "no creator registered")

    def __repr__(self):
        return f"Factory<{len(self._registrations)} creators>"


class CompositeFactory:
    """
    Aggregates several factories. They are consulted in the order they were
    added and the first one that can create a component wins.
    """

    def __init__(self, *factories: Any):
        self._factories: List[Any] = list(factories)

    def add(self, factory: Any) -> None:
        if factory is None:
            raise ValueError("Factory cannot be None")
        self._factories.append(factory)

    def remove(self, factory: Any) -> None:
        self._factories = [f for f in self._factories if f is not factory]

    def can_create(self, locator: Any) -> Optional[Any]:
        for factory in self._factories:
            result = factory.can_create(locator)
            if result is not None:
                return result
        return None

    def create(self, locator: Any) -> Any:
        """
        Create a component using the first factory that can create it.

        Raises:
            CreateError: If no factory can create the component
        """
        for factory in self._factories:
            if factory.can_create(locator) is not None:
                return factory.create(locator)

        raise CreateError(locator, "no factory can create the component")

    def __repr__(self):
        return f"CompositeFactory<{len(self._factories)} factories>"
