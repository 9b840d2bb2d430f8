"""Unit tests for the service entry points."""

import os
from unittest.mock import AsyncMock, MagicMock, Mock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from food_catalogue_service.discovery.base_discovery import ServiceInstance
from food_catalogue_service.discovery.consul_discovery import ConsulServiceDiscovery
from food_catalogue_service.discovery.static_discovery import StaticServiceDiscovery
from food_catalogue_service.repositories.dynamodb import get_dynamodb_resource
from src.directory_main import create_directory_application, create_registration_lifespan
from src.main import create_application, create_service_discovery


@pytest.mark.unit
class TestGetDynamoDBResource:
    """Tests for get_dynamodb_resource function."""

    @patch.dict(os.environ, {"DYNAMODB_ENDPOINT": "", "AWS_REGION": "us-west-2"}, clear=True)
    @patch("food_catalogue_service.repositories.dynamodb.boto3.resource")
    def test_creates_aws_resource_when_no_endpoint(self, mock_boto3_resource: Mock) -> None:
        """Test that AWS DynamoDB resource is created when no local endpoint configured."""
        result = get_dynamodb_resource()

        mock_boto3_resource.assert_called_once_with("dynamodb", region_name="us-west-2")
        assert result == mock_boto3_resource.return_value

    @patch.dict(
        os.environ,
        {"DYNAMODB_ENDPOINT": "http://localhost:8000", "AWS_REGION": "us-east-1"},
        clear=True,
    )
    @patch("food_catalogue_service.repositories.dynamodb.boto3.resource")
    def test_creates_local_resource_when_endpoint_provided(self, mock_boto3_resource: Mock) -> None:
        """Test that local DynamoDB resource is created when endpoint configured."""
        get_dynamodb_resource()

        mock_boto3_resource.assert_called_once_with(
            "dynamodb",
            endpoint_url="http://localhost:8000",
            region_name="us-east-1",
            aws_access_key_id="dummy",
            aws_secret_access_key="dummy",
        )

    @patch.dict(os.environ, {}, clear=True)
    @patch("food_catalogue_service.repositories.dynamodb.boto3.resource")
    def test_uses_default_region_when_not_specified(self, mock_boto3_resource: Mock) -> None:
        """Test that default region us-east-1 is used when AWS_REGION not set."""
        get_dynamodb_resource()

        mock_boto3_resource.assert_called_once_with("dynamodb", region_name="us-east-1")


@pytest.mark.unit
class TestCreateServiceDiscovery:
    """Tests for create_service_discovery function."""

    @patch.dict(os.environ, {"CONSUL_HTTP_ADDR": "http://consul:8500"}, clear=True)
    def test_defaults_to_consul(self) -> None:
        """Test that Consul discovery is used by default."""
        discovery = create_service_discovery()

        assert isinstance(discovery, ConsulServiceDiscovery)
        assert discovery.consul_url == "http://consul:8500"

    @patch.dict(
        os.environ,
        {"DISCOVERY_BACKEND": "static", "STATIC_SERVICE_INSTANCES": "restaurant-directory=localhost:8002"},
        clear=True,
    )
    def test_static_backend(self) -> None:
        """Test that static discovery is built from configuration."""
        discovery = create_service_discovery()

        assert isinstance(discovery, StaticServiceDiscovery)
        assert discovery.instances["restaurant-directory"][0].port == 8002

    @patch.dict(os.environ, {"DISCOVERY_BACKEND": "static"}, clear=True)
    def test_static_backend_requires_instances(self) -> None:
        """Test that static discovery without instances is a configuration error."""
        with pytest.raises(ValueError, match="STATIC_SERVICE_INSTANCES"):
            create_service_discovery()

    @patch.dict(os.environ, {"DISCOVERY_BACKEND": "eureka"}, clear=True)
    def test_unknown_backend(self) -> None:
        """Test that an unknown backend is rejected."""
        with pytest.raises(ValueError, match="eureka"):
            create_service_discovery()


@pytest.mark.unit
class TestCreateApplication:
    """Tests for create_application function."""

    @patch.dict(
        os.environ,
        {
            "DISCOVERY_BACKEND": "static",
            "STATIC_SERVICE_INSTANCES": "restaurant-directory=localhost:8002",
            "DYNAMODB_MENU_ITEMS_TABLE": "test-items",
            "DIRECTORY_TIMEOUT_SECONDS": "0.5",
            "PAGE_FETCH_CONCURRENT": "false",
        },
        clear=True,
    )
    @patch("src.main.configure_logging")
    @patch("src.main.get_dynamodb_resource")
    def test_wires_catalogue_service(self, mock_get_resource: Mock, mock_logging: Mock) -> None:
        """Test that the application is wired from environment variables."""
        app = create_application()

        assert isinstance(app, FastAPI)
        service = app.state.catalogue_service
        assert service.concurrent_fetch is False
        assert service.menu_item_repository.table_name == "test-items"
        assert service.directory_client.timeout_seconds == 0.5
        assert service.directory_client.service_name == "restaurant-directory"
        mock_get_resource.return_value.Table.assert_called_once_with("test-items")
        mock_logging.assert_called_once()

    @patch.dict(
        os.environ,
        {"DISCOVERY_BACKEND": "static", "STATIC_SERVICE_INSTANCES": "restaurant-directory=localhost:8002"},
        clear=True,
    )
    @patch("src.main.configure_logging")
    @patch("src.main.get_dynamodb_resource")
    def test_health_endpoint_available(self, mock_get_resource: Mock, mock_logging: Mock) -> None:
        """Test that the wired application serves its health check."""
        client = TestClient(create_application())

        assert client.get("/health").json() == {"status": "healthy"}


@pytest.mark.unit
class TestCreateDirectoryApplication:
    """Tests for the restaurant directory entry point."""

    @patch.dict(
        os.environ,
        {"REGISTER_WITH_CONSUL": "false", "DYNAMODB_RESTAURANTS_TABLE": "test-restaurants"},
        clear=True,
    )
    @patch("src.directory_main.configure_logging")
    @patch("src.directory_main.get_dynamodb_resource")
    def test_wires_directory_service(self, mock_get_resource: Mock, mock_logging: Mock) -> None:
        """Test that the directory application is wired from environment variables."""
        app = create_directory_application()

        assert app.state.directory_service.restaurant_repository.table_name == "test-restaurants"

    @pytest.mark.asyncio
    async def test_registration_lifespan(self) -> None:
        """Test that the instance registers on startup and deregisters on shutdown."""
        discovery = MagicMock(spec=ConsulServiceDiscovery)
        discovery.register = AsyncMock()
        discovery.deregister = AsyncMock()
        instance = ServiceInstance(service_name="restaurant-directory", host="dir-a", port=8002)

        lifespan = create_registration_lifespan(discovery, instance, "restaurant-directory-1")

        async with lifespan(FastAPI()):
            discovery.register.assert_awaited_once_with(
                instance,
                service_id="restaurant-directory-1",
                health_check_url="http://dir-a:8002/health",
            )
            discovery.deregister.assert_not_called()

        discovery.deregister.assert_awaited_once_with("restaurant-directory-1")
