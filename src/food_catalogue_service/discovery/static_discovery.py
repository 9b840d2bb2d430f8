"""Service discovery backed by a fixed instance list from configuration."""

from food_catalogue_service.discovery.base_discovery import ServiceDiscovery, ServiceInstance


class StaticServiceDiscovery(ServiceDiscovery):
    """Discovery over a configured, unchanging set of instances.

    Useful for local development and tests where no registry is running.
    """

    def __init__(self, instances: dict[str, list[ServiceInstance]]) -> None:
        """Initialize with a mapping of service name to instances.

        Args:
            instances: Instances per logical service name
        """
        super().__init__()
        self.instances = instances

    async def get_instances(self, service_name: str) -> list[ServiceInstance]:
        return list(self.instances.get(service_name, []))

    @classmethod
    def from_string(cls, value: str) -> "StaticServiceDiscovery":
        """Parse instances from ``"name=host:port,host:port;other=host:port"``.

        Args:
            value: Semicolon separated service entries

        Returns:
            StaticServiceDiscovery: Discovery over the parsed instances

        Raises:
            ValueError: If an entry is malformed
        """
        instances: dict[str, list[ServiceInstance]] = {}

        for entry in filter(None, (part.strip() for part in value.split(";"))):
            name, sep, addresses = entry.partition("=")
            if not sep or not name.strip():
                raise ValueError(f"Invalid service entry: {entry!r}")

            service_name = name.strip()
            for address in filter(None, (a.strip() for a in addresses.split(","))):
                host, _, port = address.rpartition(":")
                if not host or not port.isdigit():
                    raise ValueError(f"Invalid address for {service_name}: {address!r}")
                instances.setdefault(service_name, []).append(
                    ServiceInstance(service_name=service_name, host=host, port=int(port))
                )

        return cls(instances)
