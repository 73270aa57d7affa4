"""
Reference Container Package.

This package manages component instances inside an inversion-of-control
container across three stages: locate, build and run.

Core components:
- Descriptor: Structured locator with wildcard matching
- References: Ordered registry of (locator, component) references
- ReferencesDecorator: Base for stackable reference set decorators
- BuildReferencesDecorator: Creates missing components using factories
- LinkReferencesDecorator: Links referenceable components to the set
- RunReferencesDecorator: Opens and closes components as one set
- ManagedReferences: The full build/link/run stack
"""

from .descriptor import Descriptor, match_locator

from .capabilities import (
    Closable,
    Openable,
    ComponentFactory,
    Referenceable,
    Unreferenceable
)

from .references import (
    ReferenceSet,
    Reference,
    References
)

from .decorator import ReferencesDecorator
from .build import BuildReferencesDecorator
from .link import LinkReferencesDecorator
from .run import RunReferencesDecorator
from .managed import ManagedReferences

from .factory import Factory, CompositeFactory
from .decorators import provides

from .exceptions import (
    ContainerError,
    ReferenceNotFoundError,
    CreateError,
    LifecycleError,
    OpenError,
    CloseError,
    ReferenceLinkError,
    ConfigError
)

__all__ = [
    # Locators and capabilities
    'Descriptor',
    'match_locator',
    'Closable',
    'Openable',
    'ComponentFactory',
    'Referenceable',
    'Unreferenceable',

    # Reference sets
    'ReferenceSet',
    'Reference',
    'References',
    'ReferencesDecorator',
    'BuildReferencesDecorator',
    'LinkReferencesDecorator',
    'RunReferencesDecorator',
    'ManagedReferences',

    # Factories
    'Factory',
    'CompositeFactory',
    'provides',

    # Exceptions
    'ContainerError',
    'ReferenceNotFoundError',
    'CreateError',
    'LifecycleError',
    'OpenError',
    'CloseError',
    'ReferenceLinkError',
    'ConfigError'
]
