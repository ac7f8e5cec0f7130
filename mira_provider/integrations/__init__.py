"""External system integrations."""

from mira_provider.integrations.mira import AssignmentMode, ClientConfig, MaskSource, MiraClient
from mira_provider.integrations.models import (
    AllocationResult,
    AssignmentRequest,
    AvailabilityResponse,
    RangeQuery,
    SubnetRecord,
)

__all__ = [
    "AllocationResult",
    "AssignmentMode",
    "AssignmentRequest",
    "AvailabilityResponse",
    "ClientConfig",
    "MaskSource",
    "MiraClient",
    "RangeQuery",
    "SubnetRecord",
]
