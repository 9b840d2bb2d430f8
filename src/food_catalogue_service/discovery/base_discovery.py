"""Base class for service discovery backends.

A discovery backend maps a logical service name (e.g. ``restaurant-directory``)
to the instances currently registered and healthy. Selection among those
instances is round-robin and lives here so every backend behaves the same.
"""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass

from food_catalogue_service.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceInstance:
    """A reachable instance of a logical service.

    Attributes:
        service_name: Logical name the instance is registered under
        host: Host name or IP address
        port: TCP port
        scheme: URL scheme used to reach the instance
    """

    service_name: str
    host: str
    port: int
    scheme: str = "http"

    @property
    def base_url(self) -> str:
        """Base URL of the instance, without a trailing slash."""
        return f"{self.scheme}://{self.host}:{self.port}"


class ServiceDiscovery(ABC):
    """Abstract base class for service discovery backends.

    Subclasses implement ``get_instances``; ``resolve`` picks one of the
    returned instances in round-robin order per service name.
    """

    def __init__(self) -> None:
        self._next_index: dict[str, int] = defaultdict(int)

    @abstractmethod
    async def get_instances(self, service_name: str) -> list[ServiceInstance]:
        """Return the currently healthy instances of a service.

        Args:
            service_name: Logical service name

        Returns:
            list: Healthy instances, empty if none are registered

        Raises:
            ServiceUnavailableError: If the registry itself cannot be queried
        """
        pass

    async def resolve(self, service_name: str) -> ServiceInstance:
        """Resolve a logical service name to a single instance.

        Args:
            service_name: Logical service name

        Returns:
            ServiceInstance: The next instance in round-robin order

        Raises:
            ServiceUnavailableError: If no healthy instance is registered
        """
        instances = await self.get_instances(service_name)
        if not instances:
            logger.warning(f"No healthy instances registered for {service_name}")
            raise ServiceUnavailableError(service_name, "no healthy instances")

        index = self._next_index[service_name] % len(instances)
        self._next_index[service_name] = index + 1

        instance = instances[index]
        logger.debug(f"Resolved {service_name} to {instance.base_url}")
        return instance
