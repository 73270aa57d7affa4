"""
Reference set decorators.

A decorator wraps a base reference set, where lookups and writes go, and a
parent reference set, where decorators write back components they discover
or build. The two may be the same set. Decorators stack transparently, e.g.
RunReferencesDecorator(BuildReferencesDecorator(References())).
"""

from typing import Any, List, Optional

from refer.references import ReferenceSet


class ReferencesDecorator(ReferenceSet):
    """
    Forwards every operation to the base reference set.

    Subclasses override selected operations to add behaviour before or after
    delegating. A decorator holds references to, but does not own, its base
    and parent sets or the components stored in them.
    """

    def __init__(self,
                 base_references: Optional[ReferenceSet] = None,
                 parent_references: Optional[ReferenceSet] = None):
        """
        Initialize the decorator.

        Args:
            base_references: Set this decorator reads from and writes to
                (defaults to parent_references)
            parent_references: Set that discovered components are written back
                to (defaults to base_references)
        """
        self.base_references = base_references if base_references is not None else parent_references
        self.parent_references = parent_references if parent_references is not None else base_references

    def put(self, locator: Any, component: Any) -> None:
        self.base_references.put(locator, component)

    def remove(self, locator: Any) -> Any:
        return self.base_references.remove(locator)

    def remove_all(self, locator: Any) -> List[Any]:
        return self.base_references.remove_all(locator)

    def get_all_locators(self) -> List[Any]:
        return self.base_references.get_all_locators()

    def get_all(self) -> List[Any]:
        return self.base_references.get_all()

    def find(self, locator: Any, required: bool) -> List[Any]:
        return self.base_references.find(locator, required)

    def __repr__(self):
        return f"{self.__class__.__name__}<{self.base_references!r}>"
