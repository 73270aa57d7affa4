"""
Component descriptors.

A descriptor is the structured locator used to find components in the
reference container. It has five fields - group, type, kind, name and
version - and any of them may be left as a wildcard (None, or "*" in the
string form), which matches any value on the other side.

Canonical string: "group:type:kind:name:version".
"""

from dataclasses import dataclass, fields
from typing import Any, Optional

from refer.exceptions import ConfigError

WILDCARD = "*"


def _normalize(value: Optional[str]) -> Optional[str]:
    if value is None or value == WILDCARD:
        return None
    return value


def _match_field(value1: Optional[str], value2: Optional[str]) -> bool:
    return value1 is None or value2 is None or value1 == value2


@dataclass(frozen=True)
class Descriptor:
    """
    Locator that matches components by group, type, kind, name and version.

    Equality (==) is exact field equality so descriptors can be used as
    dictionary keys. Wildcard-aware comparison is done with `match`.
    """

    group: Optional[str] = None
    type: Optional[str] = None
    kind: Optional[str] = None
    name: Optional[str] = None
    version: Optional[str] = None

    def __post_init__(self):
        for field in fields(self):
            object.__setattr__(self, field.name, _normalize(getattr(self, field.name)))

    def match(self, other: Any) -> bool:
        """
        Partially match this descriptor against another one.

        Fields that are wildcarded on either side are ignored.

        Args:
            other: Descriptor to match against

        Returns:
            True if every populated field pair is equal
        """
        if not isinstance(other, Descriptor):
            return False
        return (
            _match_field(self.group, other.group)
            and _match_field(self.type, other.type)
            and _match_field(self.kind, other.kind)
            and _match_field(self.name, other.name)
            and _match_field(self.version, other.version)
        )

    def exact_match(self, other: Any) -> bool:
        """Match all fields, treating wildcards as ordinary values."""
        return isinstance(other, Descriptor) and self.as_tuple == other.as_tuple

    def is_complete(self) -> bool:
        """Check that no field is a wildcard."""
        return all(value is not None for value in self.as_tuple)

    @property
    def as_tuple(self) -> tuple:
        return self.group, self.type, self.kind, self.name, self.version

    def __str__(self) -> str:
        return ":".join(WILDCARD if value is None else value for value in self.as_tuple)

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["Descriptor"]:
        """
        Parse a descriptor from its "group:type:kind:name:version" form.

        Args:
            value: String to parse; "*" marks a wildcard field

        Returns:
            Parsed descriptor, or None for an empty value

        Raises:
            ConfigError: If the string does not have exactly five parts
        """
        if not value:
            return None

        parts = value.split(":")
        if len(parts) != 5:
            raise ConfigError(
                f"Descriptor {value!r} is in wrong format; "
                "expected 'group:type:kind:name:version'"
            )
        return cls(*(part.strip() for part in parts))


def match_locator(expected: Any, locator: Any) -> bool:
    """
    Check whether a locator finds something registered under `expected`.

    Descriptors match field by field with wildcards; any other locators
    match by equality.
    """
    if isinstance(expected, Descriptor):
        return expected.match(locator)
    return expected is not None and expected == locator
