"""Services package exports."""

from mira_provider.services.allocated_subnet import AllocatedSubnetResource, AllocatedSubnetState
from mira_provider.services.data_sources import AvailableSubnetsDataSource, SubnetRecordDataSource
from mira_provider.services.lifecycle import SUPPORTED_OPERATIONS, Operation, ensure_supported
from mira_provider.services.provider import configure_client

__all__ = [
    "AllocatedSubnetResource",
    "AllocatedSubnetState",
    "AvailableSubnetsDataSource",
    "Operation",
    "SUPPORTED_OPERATIONS",
    "SubnetRecordDataSource",
    "configure_client",
    "ensure_supported",
]
