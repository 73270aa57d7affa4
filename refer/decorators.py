"""
Registration decorators for component factories.
"""

from typing import Any, TypeVar

from refer.factory import Factory

T = TypeVar('T')


def provides(factory: Factory, locator: Any):
    """
    Decorator for registering a class or creator function on a factory.

    Classes are registered with their no-argument constructor; functions are
    called with the requested locator.

    Args:
        factory: Factory to register with
        locator: Locator of the components the decorated object creates

    Returns:
        Decorator function

    Example:
        @provides(app_factory, Descriptor("app", "cache", "memory", "default", "1.0"))
        class MemoryCache:
            ...

        @provides(app_factory, Descriptor("app", "logger", "console", "*", "1.0"))
        def create_logger(locator):
            return ConsoleLogger(name=locator.name)
    """
    def decorator(target: T) -> T:
        if isinstance(target, type):
            factory.register_as_type(locator, target)
        elif callable(target):
            factory.register(locator, target)
        else:
            raise TypeError(f"Cannot register {target!r}: expected a class or function")

        # Return the original object unchanged
        return target

    return decorator
