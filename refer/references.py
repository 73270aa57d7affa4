"""
Reference Registry for the component container.

This module provides the core reference storage including:
- ReferenceSet: Abstract contract shared by registries and decorators
- Reference: A single (locator, component) pair
- References: Ordered, thread-safe store of references
"""

from abc import ABC, abstractmethod
from threading import RLock
from typing import Any, Iterable, List, Optional, Tuple

from custom_logging import get_logger
from refer.descriptor import match_locator
from refer.exceptions import ReferenceNotFoundError


class ReferenceSet(ABC):
    """
    Abstract reference set.

    Registries and decorators implement the six primitive operations; the
    convenience getters are built on top of `find` so that decorators which
    override `find` (for example to build missing components) affect them too.
    """

    @abstractmethod
    def put(self, locator: Any, component: Any) -> None:
        """Add a component reference under the given locator."""

    @abstractmethod
    def remove(self, locator: Any) -> Any:
        """Remove the first reference matching the locator and return its component."""

    @abstractmethod
    def remove_all(self, locator: Any) -> List[Any]:
        """Remove every reference matching the locator and return their components."""

    @abstractmethod
    def get_all_locators(self) -> List[Any]:
        """Return the locators of all references in insertion order."""

    @abstractmethod
    def get_all(self) -> List[Any]:
        """Return all components in insertion order."""

    @abstractmethod
    def find(self, locator: Any, required: bool) -> List[Any]:
        """Return all components matching the locator in insertion order."""

    def get_optional(self, locator: Any) -> List[Any]:
        """Get all matching components, or an empty list."""
        return self.find(locator, False)

    def get_required(self, locator: Any) -> List[Any]:
        """
        Get all matching components.

        Raises:
            ReferenceNotFoundError: If no component matches
        """
        return self.find(locator, True)

    def get_one_optional(self, locator: Any) -> Any:
        """Get the first matching component, or None."""
        components = self.find(locator, False)
        return components[0] if components else None

    def get_one_required(self, locator: Any) -> Any:
        """
        Get the first matching component.

        Raises:
            ReferenceNotFoundError: If no component matches
        """
        return self.find(locator, True)[0]


class Reference:
    """
    A component stored together with the locator it was registered under.

    Attributes:
        locator: Locator the component can be found by
        component: The referenced component
    """

    def __init__(self, locator: Any, component: Any):
        if component is None:
            raise ValueError("Component cannot be None")
        self.locator = locator
        self.component = component

    def match(self, locator: Any) -> bool:
        """
        Check whether this reference can be found by the given locator.

        A reference matches when the locator is the component itself, when
        both are descriptors that match field by field, or when the locators
        are equal.

        Args:
            locator: Locator to match

        Returns:
            True if the reference matches
        """
        if self.component is locator:
            return True
        return match_locator(self.locator, locator)

    def __repr__(self):
        return f"Reference({self.locator}, {self.component!r})"


class References(ReferenceSet):
    """
    Ordered store of component references.

    Insertion order is preserved and significant: lookups return components
    first-in, first-out and opening follows the same order. The same locator
    may be registered any number of times.

    The lock makes each operation atomic. It does not cover the open state of
    decorators stacked on top, which are driven from a single event loop.
    """

    def __init__(self, references: Optional[Iterable[Tuple[Any, Any]]] = None):
        """
        Initialize the registry.

        Args:
            references: Optional (locator, component) pairs to add up front
        """
        self.logger = get_logger("references")
        self._lock = RLock()
        self._references: List[Reference] = []

        for locator, component in references or ():
            self.put(locator, component)

    @classmethod
    def from_tuples(cls, *tuples: Any) -> "References":
        """
        Create a registry from alternating locators and components.

        Example:
            References.from_tuples(
                Descriptor("app", "logger", "console", "default", "1.0"), logger,
                Descriptor("app", "cache", "memory", "default", "1.0"), cache,
            )
        """
        if len(tuples) % 2 != 0:
            raise ValueError("Expected an even number of arguments: locator, component, ...")
        return cls(zip(tuples[0::2], tuples[1::2]))

    def put(self, locator: Any, component: Any) -> None:
        reference = Reference(locator, component)
        with self._lock:
            self._references.append(reference)
        self.logger.debug(f"Put reference: {locator}")

    def remove(self, locator: Any) -> Any:
        if locator is None:
            return None

        with self._lock:
            for index, reference in enumerate(self._references):
                if reference.match(locator):
                    del self._references[index]
                    self.logger.debug(f"Removed reference: {reference.locator}")
                    return reference.component
        return None

    def remove_all(self, locator: Any) -> List[Any]:
        if locator is None:
            return []

        with self._lock:
            removed = [r for r in self._references if r.match(locator)]
            if removed:
                self._references = [r for r in self._references if not r.match(locator)]

        if removed:
            self.logger.debug(f"Removed {len(removed)} references: {locator}")
        return [reference.component for reference in removed]

    def get_all_locators(self) -> List[Any]:
        with self._lock:
            return [reference.locator for reference in self._references]

    def get_all(self) -> List[Any]:
        with self._lock:
            return [reference.component for reference in self._references]

    def find(self, locator: Any, required: bool) -> List[Any]:
        with self._lock:
            components = [r.component for r in self._references if r.match(locator)]

        if required and not components:
            raise ReferenceNotFoundError(locator)
        return components

    def clear(self) -> None:
        """Remove all references."""
        with self._lock:
            self._references = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._references)

    def __repr__(self):
        return f"References<{len(self)} references>"

