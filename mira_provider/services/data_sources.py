"""Read-only data sources backed by MIRA searches."""

import time
from typing import Any

from mira_provider.integrations.mira import MiraClient
from mira_provider.integrations.models import RangeQuery

AVAILABLE_SUBNETS_DATA_SOURCE = "mira_available_subnet_data_source"


class AvailableSubnetsDataSource:
    """Lists the free subnets inside a range."""

    def __init__(self, client: MiraClient) -> None:
        self.client = client

    def read(self, requestrange: str, requestmask: str) -> dict[str, Any]:
        response = self.client.list_available(RangeQuery(requestrange, requestmask))
        return {
            "requestrange": requestrange,
            "requestmask": requestmask,
            "message": response.message,
            "payload": list(response.payload),
            # unix time so the data source is re-read on every plan
            "id": str(int(time.time())),
        }


class SubnetRecordDataSource:
    """Looks up the MIRA record of the subnet containing an address."""

    def __init__(self, client: MiraClient) -> None:
        self.client = client

    def read(self, address: str) -> dict[str, Any]:
        record = self.client.find_by_address(address)
        return {"ipaddress": address, **record.model_dump(), "id": str(record.record_id)}
