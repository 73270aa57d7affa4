"""
Build stage reference decorator.

Makes required lookups self-healing: when nothing matches, the factories
stored among the references are asked to build the missing component, and
the new instance is registered into the parent set so later lookups find it
without building it again.
"""

from typing import Any, List, Optional

from custom_logging import get_logger
from refer.capabilities import ComponentFactory, is_factory
from refer.decorator import ReferencesDecorator
from refer.descriptor import Descriptor
from refer.exceptions import ReferenceNotFoundError
from refer.references import ReferenceSet


class BuildReferencesDecorator(ReferencesDecorator):
    """
    Decorates a reference set and creates missing components using the
    referenced factories.
    """

    def __init__(self,
                 base_references: Optional[ReferenceSet] = None,
                 parent_references: Optional[ReferenceSet] = None):
        super().__init__(base_references, parent_references)
        self.logger = get_logger("build")

    def _probe(self, factory: ComponentFactory, locator: Any) -> Any:
        try:
            return factory.can_create(locator)
        except Exception as e:
            self.logger.debug(f"Factory {factory!r} failed to probe {locator}: {e}")
            return None

    def find_factory(self, locator: Any) -> Optional[ComponentFactory]:
        """
        Find the first referenced factory that can create a component by the
        given locator.

        Args:
            locator: Locator of the component to create

        Returns:
            The factory, or None if no factory can create the component
        """
        for component in self.get_all():
            if is_factory(component) and self._probe(component, locator) is not None:
                return component
        return None

    def create(self, locator: Any, factory: Optional[ComponentFactory]) -> Any:
        """
        Create a component with the given factory.

        Construction failures are not propagated; they degrade to "not found".

        Args:
            locator: Locator of the component to create
            factory: Factory found by `find_factory`

        Returns:
            The created component, or None if the factory is missing or failed
        """
        if factory is None:
            return None

        try:
            return factory.create(locator)
        except Exception as e:
            self.logger.warning(f"Factory {factory!r} failed to create {locator}: {e}")
            return None

    def clarify_locator(self, locator: Any, factory: Optional[ComponentFactory]) -> Any:
        """
        Fill in the wildcard fields of a descriptor from the locator the
        factory reports for it.

        Fields set on the original locator always win.

        Args:
            locator: Locator the component was requested by
            factory: Factory that can create the component

        Returns:
            The merged descriptor, or the original locator when either side is
            not a descriptor or the factory is None
        """
        if factory is None or not isinstance(locator, Descriptor):
            return locator

        another = self._probe(factory, locator)
        if not isinstance(another, Descriptor):
            return locator

        return Descriptor(
            locator.group if locator.group is not None else another.group,
            locator.type if locator.type is not None else another.type,
            locator.kind if locator.kind is not None else another.kind,
            locator.name if locator.name is not None else another.name,
            locator.version if locator.version is not None else another.version,
        )

    def find(self, locator: Any, required: bool) -> List[Any]:
        """
        Find matching components, building one when a required lookup misses.

        Raises:
            ReferenceNotFoundError: If required and nothing was found or built
        """
        components = super().find(locator, False)

        if required and not components:
            factory = self.find_factory(locator)
            component = self.create(locator, factory)
            if component is not None:
                clarified = self.clarify_locator(locator, factory)
                self.logger.info(f"Created component {clarified} using {factory!r}")
                try:
                    self.parent_references.put(clarified, component)
                except Exception as e:
                    self.logger.warning(f"Failed to register created component {clarified}: {e}")
                components.append(component)

        if required and not components:
            raise ReferenceNotFoundError(locator)

        return components
