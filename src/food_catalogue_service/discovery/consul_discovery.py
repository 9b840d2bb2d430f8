"""Consul service discovery backend.

Instances are read from Consul's health endpoint so only instances passing
their health checks are returned. The same client also registers and
deregisters the restaurant directory with the local Consul agent.
"""

import logging
from typing import Any

import httpx

from food_catalogue_service.discovery.base_discovery import ServiceDiscovery, ServiceInstance
from food_catalogue_service.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)


class ConsulServiceDiscovery(ServiceDiscovery):
    """Discovery and registration against a Consul agent HTTP API."""

    def __init__(
        self,
        consul_url: str,
        timeout_seconds: float = 2.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Consul discovery client.

        Args:
            consul_url: Base URL of the Consul agent (e.g., "http://localhost:8500")
            timeout_seconds: Timeout for each call to Consul
            http_client: Optional shared HTTP client; a short-lived one is used per call otherwise
        """
        super().__init__()
        self.consul_url = consul_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.http_client = http_client

    async def get_instances(self, service_name: str) -> list[ServiceInstance]:
        url = f"{self.consul_url}/v1/health/service/{service_name}"

        try:
            response = await self._request("GET", url, params={"passing": "true"})
            response.raise_for_status()
            entries = response.json()
        except (httpx.HTTPStatusError, httpx.RequestError, ValueError) as e:
            logger.error(f"Consul lookup for {service_name} failed: {e}")
            raise ServiceUnavailableError(service_name, f"discovery failed: {e}") from e

        instances = []
        for entry in entries:
            service = entry.get("Service", {})
            # An empty service address means "use the node address"
            host = service.get("Address") or entry.get("Node", {}).get("Address")
            port = service.get("Port")
            if host and port:
                instances.append(ServiceInstance(service_name=service_name, host=host, port=int(port)))

        return instances

    async def register(
        self,
        instance: ServiceInstance,
        service_id: str,
        health_check_url: str | None = None,
        check_interval: str = "10s",
    ) -> None:
        """Register an instance with the local Consul agent.

        Args:
            instance: Instance to register
            service_id: Unique id of this instance within Consul
            health_check_url: Optional HTTP URL Consul polls to judge health
            check_interval: Poll interval for the health check

        Raises:
            httpx.HTTPError: If the agent rejects or cannot receive the registration
        """
        payload: dict[str, Any] = {
            "ID": service_id,
            "Name": instance.service_name,
            "Address": instance.host,
            "Port": instance.port,
        }
        if health_check_url:
            payload["Check"] = {
                "HTTP": health_check_url,
                "Interval": check_interval,
                "DeregisterCriticalServiceAfter": "1m",
            }

        response = await self._request(
            "PUT", f"{self.consul_url}/v1/agent/service/register", json=payload
        )
        response.raise_for_status()
        logger.info(f"Registered {service_id} as {instance.service_name} at {instance.base_url}")

    async def deregister(self, service_id: str) -> None:
        """Remove an instance registration from the local Consul agent."""
        response = await self._request(
            "PUT", f"{self.consul_url}/v1/agent/service/deregister/{service_id}"
        )
        response.raise_for_status()
        logger.info(f"Deregistered {service_id}")

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self.http_client is not None:
            return await self.http_client.request(method, url, timeout=self.timeout_seconds, **kwargs)

        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            return await client.request(method, url, **kwargs)
