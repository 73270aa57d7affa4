"""
Reference Container Exceptions.

This module defines custom exceptions for the reference container. Every
exception carries the correlation id of the call that raised it so callers
can trace failures across components.
"""


class ContainerError(Exception):
    """Base exception for all reference container errors."""
    def __init__(self, message, correlation_id=None):
        super().__init__(message)
        self.correlation_id = correlation_id


class ReferenceNotFoundError(ContainerError):
    """Raised when a required reference cannot be located or built."""
    def __init__(self, locator, correlation_id=None):
        super().__init__(f"Cannot locate reference: {locator}", correlation_id)
        self.locator = locator


class CreateError(ContainerError):
    """Raised when a factory fails to create a component."""
    def __init__(self, locator, reason=None, correlation_id=None):
        message = f"Cannot create component: {locator}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, correlation_id)
        self.locator = locator
        self.reason = reason


class LifecycleError(ContainerError):
    """Raised when a component fails to change its lifecycle state."""
    action = "change state of"

    def __init__(self, component, reason=None, correlation_id=None):
        message = f"Failed to {self.action} component: {component!r}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, correlation_id)
        self.component = component
        self.reason = reason


class OpenError(LifecycleError):
    """Raised when a component fails to open."""
    action = "open"


class CloseError(LifecycleError):
    """Raised when a component fails to close."""
    action = "close"


class ReferenceLinkError(LifecycleError):
    """Raised when references cannot be set on or unset from a component."""
    action = "link references to"


class ConfigError(ContainerError):
    """Raised for malformed locators or invalid container settings."""
    pass
