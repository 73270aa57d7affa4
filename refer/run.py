"""
Run stage reference decorator.

Opens and closes all referenced components as one set, and keeps components
added or removed while the set is open consistent with it.
"""

from typing import Any, List, Optional

from custom_logging import get_logger
from refer import lifecycle
from refer.decorator import ReferencesDecorator
from refer.exceptions import ContainerError
from refer.references import ReferenceSet


class RunReferencesDecorator(ReferencesDecorator):
    """
    Decorates a reference set and opens/closes the referenced components.

    The decorator is either closed (initially) or opened. It can be closed
    and reopened any number of times.
    """

    def __init__(self,
                 base_references: Optional[ReferenceSet] = None,
                 parent_references: Optional[ReferenceSet] = None):
        super().__init__(base_references, parent_references)
        self.logger = get_logger("run")
        self._opened = False

    def is_open(self) -> bool:
        """Return whether the referenced components have been opened."""
        return self._opened

    async def open(self, correlation_id: Optional[str]) -> None:
        """
        Open all referenced components in insertion order.

        Does nothing if already opened. If a component fails to open, the
        remaining ones are not attempted and the set stays closed.

        Args:
            correlation_id: Transaction id to trace the call

        Raises:
            OpenError: If a component failed to open
        """
        if self._opened:
            return

        components = self.get_all()
        self.logger.debug(f"[{correlation_id}] Opening {len(components)} components")
        await lifecycle.open_all(correlation_id, components)
        self._opened = True
        self.logger.info(f"[{correlation_id}] Opened references")

    async def close(self, correlation_id: Optional[str]) -> None:
        """
        Close all referenced components in insertion order.

        Does nothing if already closed. The set is considered closed
        afterwards even if a component failed to close.

        Args:
            correlation_id: Transaction id to trace the call

        Raises:
            CloseError: If a component failed to close
        """
        if not self._opened:
            return

        components = self.get_all()
        self.logger.debug(f"[{correlation_id}] Closing {len(components)} components")
        try:
            await lifecycle.close_all(correlation_id, components)
        except ContainerError:
            self.logger.error(f"[{correlation_id}] Closed references with errors")
            raise
        finally:
            self._opened = False
        self.logger.info(f"[{correlation_id}] Closed references")

    def put(self, locator: Any, component: Any) -> None:
        """
        Add a component reference. If opened, the component is opened too.
        """
        super().put(locator, component)

        if self._opened:
            lifecycle.open_nowait(None, component)

    def remove(self, locator: Any) -> Any:
        """
        Remove the first matching component. If opened, the component is
        closed.
        """
        component = super().remove(locator)

        if self._opened and component is not None:
            lifecycle.close_nowait(None, component)

        return component

    def remove_all(self, locator: Any) -> List[Any]:
        """
        Remove all matching components. If opened, each of them is closed.
        """
        components = super().remove_all(locator)

        if self._opened:
            for component in components:
                lifecycle.close_nowait(None, component)

        return components
