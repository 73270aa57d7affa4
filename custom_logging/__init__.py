"""
Logging module for the component container.

Provides unified logging for the reference container and its host.
"""

from .logger import (
    ROOT_LOGGER_NAME,
    ContainerLogger,
    get_logger,
    setup_logger,
)

__all__ = [
    "ROOT_LOGGER_NAME",
    "ContainerLogger",
    "get_logger",
    "setup_logger",
]
