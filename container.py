"""
Inversion of control container.

The container owns a managed reference set seeded with its own context info
and its factories. Opening the container links and opens every component in
the set; components that are looked up but not present are built on demand by
the factories.

Example:
    factory = Factory()
    factory.register_as_type(Descriptor("app", "controller", "default", "*", "1.0"), Controller)

    container = Container("my-app", "Example application", factories=[factory])
    await container.open()
    controller = container.get_one_required(Descriptor("app", "controller", "*", "*", "*"))
    ...
    await container.close()
"""

import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from config import ContainerConfig
from custom_logging import get_logger, setup_logger
from refer import lifecycle
from refer.descriptor import Descriptor
from refer.exceptions import ContainerError
from refer.factory import CompositeFactory
from refer.managed import ManagedReferences

INFO_DESCRIPTOR = Descriptor("container", "context-info", "default", "default", "1.0")
FACTORY_DESCRIPTOR = Descriptor("container", "factory", "container", "default", "1.0")


@dataclass
class ContainerInfo:
    """Context information about a running container."""
    name: str = "container"
    description: Optional[str] = None
    container_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    start_time: Optional[float] = None
    stop_time: Optional[float] = None


class Container:
    """
    Container that builds, links and runs its components.
    """

    def __init__(self,
                 name: Optional[str] = None,
                 description: Optional[str] = None,
                 factories: Optional[Iterable[Any]] = None):
        """
        Initialize the container.

        Args:
            name: Container name, also the default correlation id
            description: Container description
            factories: Factories used to build components on demand
        """
        self.info = ContainerInfo(name=name or "container", description=description)
        self.logger = get_logger(self.info.name)
        self.factories = CompositeFactory(*(factories or ()))
        self.references = ManagedReferences([
            (INFO_DESCRIPTOR, self.info),
            (FACTORY_DESCRIPTOR, self.factories),
        ])

    @classmethod
    def from_config(cls,
                    config: ContainerConfig,
                    factories: Optional[Iterable[Any]] = None) -> "Container":
        """
        Create a container from loaded settings, applying their logging options.
        """
        setup_logger(config.logging.as_logger_options())
        return cls(config.name, config.description, factories)

    def __repr__(self):
        state = "open" if self.is_open() else "closed"
        return f"Container<{self.info.name}, {state}>"

    def add_factory(self, factory: Any) -> None:
        """Add a factory used to build components on demand."""
        self.factories.add(factory)

    def put(self, locator: Any, component: Any) -> None:
        """Add a component. It is linked and opened if the container is open."""
        self.references.put(locator, component)

    def remove(self, locator: Any) -> Any:
        """Remove a component. It is closed if the container is open."""
        return self.references.remove(locator)

    def find(self, locator: Any, required: bool = False) -> List[Any]:
        return self.references.find(locator, required)

    def get_one_optional(self, locator: Any) -> Any:
        return self.references.get_one_optional(locator)

    def get_one_required(self, locator: Any) -> Any:
        return self.references.get_one_required(locator)

    def is_open(self) -> bool:
        return self.references.is_open()

    async def open(self, correlation_id: Optional[str] = None) -> None:
        """
        Link and open all components.

        Args:
            correlation_id: Transaction id to trace the call (defaults to the
                container name)

        Raises:
            ContainerError: If a component failed to link or open
        """
        correlation_id = correlation_id or self.info.name
        if self.is_open():
            return

        self.logger.info(f"[{correlation_id}] Container {self.info.name} starting")
        try:
            await self.references.open(correlation_id)
        except ContainerError as e:
            self.logger.error(f"[{correlation_id}] Failed to start container: {e}")
            raise

        self.info.start_time = time.time()
        self.info.stop_time = None
        self.logger.info(f"[{correlation_id}] Container {self.info.name} started")

    async def close(self, correlation_id: Optional[str] = None) -> None:
        """
        Close and unlink all components.

        Every stage that is still open is closed, including after an open
        that failed part way through.

        Raises:
            ContainerError: If a component failed to close or unlink; the
                container is closed regardless
        """
        correlation_id = correlation_id or self.info.name
        self.logger.info(f"[{correlation_id}] Container {self.info.name} stopping")
        try:
            await self.references.close(correlation_id)
        except ContainerError as e:
            self.logger.error(f"[{correlation_id}] Error while stopping container: {e}")
            raise
        finally:
            self.info.stop_time = time.time()

        self.logger.info(f"[{correlation_id}] Container {self.info.name} stopped")

    def get_status(self) -> Dict[str, Any]:
        """
        Get the current container status information.

        Returns:
            Dictionary with container status information
        """
        components = self.references.get_all()
        status = {
            "container_id": self.info.container_id,
            "name": self.info.name,
            "description": self.info.description,
            "opened": self.is_open(),
            "uptime": None,
            "components": len(components),
            "components_open": lifecycle.is_all_open(components),
        }

        if self.info.start_time:
            if self.info.stop_time:
                status["uptime"] = self.info.stop_time - self.info.start_time
            else:
                status["uptime"] = time.time() - self.info.start_time

        return status
