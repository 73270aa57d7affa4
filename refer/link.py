"""
Link stage reference decorator.

Hands the reference set to components that resolve their own dependencies
(set_references) when the set is opened, and takes it back
(unset_references) when the set is closed.
"""

from functools import partial
from typing import Any, List, Optional

from custom_logging import get_logger
from refer import lifecycle
from refer.capabilities import is_referenceable, is_unreferenceable
from refer.decorator import ReferencesDecorator
from refer.exceptions import ContainerError, ReferenceLinkError
from refer.references import ReferenceSet


async def link_one(correlation_id: Optional[str], references: ReferenceSet, component: Any) -> bool:
    """
    Set references on a single component if it is referenceable.

    Raises:
        ReferenceLinkError: If the component failed to resolve its references
    """
    if not is_referenceable(component):
        return False

    try:
        await lifecycle.invoke(component.set_references, references)
    except ContainerError:
        raise
    except Exception as e:
        raise ReferenceLinkError(component, str(e), correlation_id) from e
    return True


async def unlink_one(correlation_id: Optional[str], component: Any) -> bool:
    """
    Unset references on a single component if it is unreferenceable.

    Raises:
        ReferenceLinkError: If the component failed to release its references
    """
    if not is_unreferenceable(component):
        return False

    try:
        await lifecycle.invoke(component.unset_references)
    except ContainerError:
        raise
    except Exception as e:
        raise ReferenceLinkError(component, str(e), correlation_id) from e
    return True


class LinkReferencesDecorator(ReferencesDecorator):
    """
    Decorates a reference set and links referenceable components to the
    parent set while opened.
    """

    def __init__(self,
                 base_references: Optional[ReferenceSet] = None,
                 parent_references: Optional[ReferenceSet] = None):
        super().__init__(base_references, parent_references)
        self.logger = get_logger("link")
        self._opened = False

    def is_open(self) -> bool:
        return self._opened

    async def open(self, correlation_id: Optional[str]) -> None:
        """
        Set references on all referenceable components in insertion order.

        Raises:
            ReferenceLinkError: If a component failed to resolve its references;
                the decorator stays closed
        """
        if self._opened:
            return

        for component in self.get_all():
            await link_one(correlation_id, self.parent_references, component)
        self._opened = True
        self.logger.debug(f"[{correlation_id}] Linked references")

    async def close(self, correlation_id: Optional[str]) -> None:
        """
        Unset references on unreferenceable components in insertion order.

        The first failure aborts the rest; the decorator is closed either way.

        Raises:
            ReferenceLinkError: If a component failed to release its references
        """
        if not self._opened:
            return

        try:
            for component in self.get_all():
                await unlink_one(correlation_id, component)
        except ContainerError as e:
            self.logger.error(f"[{correlation_id}] {e}")
            raise
        finally:
            self._opened = False
        self.logger.debug(f"[{correlation_id}] Unlinked references")

    def put(self, locator: Any, component: Any) -> None:
        super().put(locator, component)

        if self._opened:
            lifecycle.run_nowait(
                f"link {component!r}",
                partial(link_one, None, self.parent_references, component),
            )

    def remove(self, locator: Any) -> Any:
        component = super().remove(locator)

        if self._opened and component is not None:
            lifecycle.run_nowait(f"unlink {component!r}", partial(unlink_one, None, component))

        return component

    def remove_all(self, locator: Any) -> List[Any]:
        components = super().remove_all(locator)

        if self._opened:
            for component in components:
                lifecycle.run_nowait(f"unlink {component!r}", partial(unlink_one, None, component))

        return components
