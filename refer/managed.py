"""
Managed reference set.

Stacks the build, link and run stages over a plain registry:

    ManagedReferences -> Run -> Link -> Build -> References

The managed set is the parent of every stage, so components built on demand
are registered through the whole stack and are linked and opened right away
when the set is already open.
"""

from typing import Any, Iterable, Optional, Tuple

from refer.build import BuildReferencesDecorator
from refer.decorator import ReferencesDecorator
from refer.link import LinkReferencesDecorator
from refer.references import References
from refer.run import RunReferencesDecorator


class ManagedReferences(ReferencesDecorator):
    """Reference set that builds, links and runs its components."""

    def __init__(self, references: Optional[Iterable[Tuple[Any, Any]]] = None):
        """
        Initialize the managed set.

        Args:
            references: Optional (locator, component) pairs to add up front
        """
        super().__init__(None, None)

        self._references = References(references)
        self._builder = BuildReferencesDecorator(self._references, self)
        self._linker = LinkReferencesDecorator(self._builder, self)
        self._runner = RunReferencesDecorator(self._linker, self)

        self.base_references = self._runner
        self.parent_references = self

    def is_open(self) -> bool:
        return self._linker.is_open() and self._runner.is_open()

    async def open(self, correlation_id: Optional[str]) -> None:
        """
        Link then open all components.

        Raises:
            ReferenceLinkError: If a component failed to resolve its references
            OpenError: If a component failed to open
        """
        await self._linker.open(correlation_id)
        await self._runner.open(correlation_id)

    async def close(self, correlation_id: Optional[str]) -> None:
        """
        Close then unlink all components. Both stages are attempted.

        Raises:
            CloseError: If a component failed to close
            ReferenceLinkError: If a component failed to release its references
        """
        try:
            await self._runner.close(correlation_id)
        finally:
            await self._linker.close(correlation_id)
