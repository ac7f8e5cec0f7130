"""The mira_allocated_subnet_resource: claim a subnet from a MIRA range."""

from dataclasses import dataclass, replace

import structlog

from mira_provider.integrations.mira import MiraClient
from mira_provider.integrations.models import AssignmentRequest
from mira_provider.services.lifecycle import Operation, ensure_supported

RESOURCE_TYPE = "mira_allocated_subnet_resource"

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class AllocatedSubnetState:
    """Tracked attributes of one allocated subnet resource."""

    addressid: str
    comment: str
    requestrange: str
    requestmask: str
    subnetname: str
    template: str
    miraassignedsubnet: str = ""
    miraassignedsubnetmask: str = ""
    id: str = ""


def composite_id(subnet: str, mask: str) -> str:
    return f"{subnet}-{mask}"


class AllocatedSubnetResource:
    """Create and read hooks for an allocated subnet; update and delete are refused."""

    def __init__(self, client: MiraClient) -> None:
        self.client = client

    def apply(self, operation: Operation, state: AllocatedSubnetState) -> AllocatedSubnetState:
        """Dispatch a lifecycle operation."""

        ensure_supported(operation)
        if Operation(operation) is Operation.CREATE:
            return self.create(state)
        return self.read(state)

    def create(self, state: AllocatedSubnetState) -> AllocatedSubnetState:
        """Assign the first free subnet in the requested range and record it."""

        result = self.client.assign(
            AssignmentRequest(
                request_range=state.requestrange,
                request_mask=state.requestmask,
                address_id=state.addressid,
                comment=state.comment,
                subnet_name=state.subnetname,
                template=state.template,
            )
        )
        logger.info("Allocated subnet resource created", resource_id=result.resource_id)
        return replace(
            state,
            miraassignedsubnet=result.subnet,
            miraassignedsubnetmask=result.mask,
            id=result.resource_id,
        )

    def read(self, state: AllocatedSubnetState) -> AllocatedSubnetState:
        """Echo the tracked assignment back without asking MIRA."""

        return replace(state, id=composite_id(state.miraassignedsubnet, state.miraassignedsubnetmask))

    def update(self, state: AllocatedSubnetState) -> AllocatedSubnetState:
        return self.apply(Operation.UPDATE, state)

    def delete(self, state: AllocatedSubnetState) -> None:
        self.apply(Operation.DELETE, state)
