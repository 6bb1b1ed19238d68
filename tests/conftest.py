"""Pytest configuration and shared fixtures.

Fixtures are organized by category:
- Config fixtures: connection settings and cloud identities
- Mock fixtures: a connector mock and object managers built on it
- Reference fixtures: sample object references as returned by the appliance
"""

from unittest.mock import AsyncMock

import pytest

from wapi_client.config import CloudIdentity, WAPIConfig
from wapi_client.core.object_manager import ObjectManager
from wapi_client.observability.metrics import reset_global_collector
from wapi_client.wapi.connector import WAPIConnector

# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def wapi_config() -> WAPIConfig:
    """Connection settings pointing at a fake appliance."""
    return WAPIConfig(host="https://grid.example.com", username="admin", password="infoblox")


@pytest.fixture
def cloud_identity() -> CloudIdentity:
    """Identity that attaches cloud attributes."""
    return CloudIdentity(cmp_type="OpenStack", tenant_id="tenant-01", omit_cloud_attrs=False)


# =============================================================================
# Mock Connector Fixtures
# =============================================================================


@pytest.fixture
def mock_connector() -> AsyncMock:
    """Create a pre-configured mock connector.

    Searches return no match and writes return a fixed reference by default.
    Individual tests override specific methods.
    """
    connector = AsyncMock(spec=WAPIConnector)
    connector.search_objects.return_value = []
    connector.create_object.return_value = "object/ZG5zLm9iamVjdA:created"
    connector.update_object.return_value = "object/ZG5zLm9iamVjdA:updated"
    connector.delete_object.return_value = "object/ZG5zLm9iamVjdA:deleted"
    return connector


@pytest.fixture
def local_manager(mock_connector: AsyncMock) -> ObjectManager:
    """Object manager in local-management mode (no identity attributes)."""
    return ObjectManager.local(mock_connector)


@pytest.fixture
def cloud_manager(mock_connector: AsyncMock, cloud_identity: CloudIdentity) -> ObjectManager:
    """Object manager stamping cloud identity attributes."""
    return ObjectManager(mock_connector, cloud_identity)


@pytest.fixture(autouse=True)
def fresh_metrics():
    """Start every test with an empty metrics collector."""
    reset_global_collector()
    yield
    reset_global_collector()


# =============================================================================
# Reference Fixtures
# =============================================================================


@pytest.fixture
def network_view_ref() -> str:
    return "networkview/ZG5zLm5ldHdvcmtfdmlldyQyMw:global_view/false"


@pytest.fixture
def network_ref() -> str:
    return "network/ZG5zLm5ldHdvcmskODkuMC4wLjAvMjQvMjU:89.0.0.0/24/global_view"


@pytest.fixture
def fixed_address_ref() -> str:
    return "fixedaddress/ZG5zLmJpbmRfY25h:12.0.10.1/external"
