"""MIRA IPAM HTTP API integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from mira_provider.errors import (
    MiraConfigurationError,
    MiraProtocolError,
    MiraStatusError,
    MiraTransportError,
    SubnetExhaustionError,
)
from mira_provider.integrations.models import (
    AllocationResult,
    AssignmentRequest,
    AssignmentWireRecord,
    AvailabilityResponse,
    RangeQuery,
    SubnetRecord,
)
from mira_provider.utils.addresses import is_valid_address, require_addresses, split_octets

DEFAULT_BASE_URL = "http://10.156.0.3/"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_ASSIGNED_SUBNET_MASK = "255.255.255.224"

SEARCH_FREE_SUBNET_PATH = "searchFreeSubnet"
SEARCH_BY_ADDRESS_PATH = "search"
ASSIGNMENT_PATH = ""


class AssignmentMode(str, Enum):
    """What assign() does when the assignment POST fails after a subnet was chosen."""

    STRICT = "strict"
    BEST_EFFORT = "best_effort"


class MaskSource(str, Enum):
    """Where the mask reported in an AllocationResult comes from."""

    FIXED = "fixed"
    REQUEST = "request"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Immutable connection settings for one provider session."""

    username: str
    password: str
    user_agent: str
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if not self.username or not self.password:
            raise MiraConfigurationError("no username or password configured for MIRA")
        if not self.user_agent:
            raise MiraConfigurationError("no user agent configured for MIRA")
        if not self.base_url:
            raise MiraConfigurationError("no base URL configured for MIRA")


@dataclass(slots=True)
class MiraClient:
    """Synchronous client for the MIRA free-subnet search, assignment and lookup endpoints."""

    config: ClientConfig
    assignment_mode: AssignmentMode = AssignmentMode.BEST_EFFORT
    mask_source: MaskSource = MaskSource.FIXED
    assigned_subnet_mask: str = DEFAULT_ASSIGNED_SUBNET_MASK
    transport: httpx.BaseTransport | None = None
    _http: httpx.Client = field(init=False, repr=False)
    _logger: Any = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.assignment_mode = AssignmentMode(self.assignment_mode)
        self.mask_source = MaskSource(self.mask_source)
        if self.mask_source is MaskSource.FIXED:
            require_addresses(assigned_subnet_mask=self.assigned_subnet_mask)

        self._http = httpx.Client(
            base_url=self.config.base_url,
            auth=httpx.BasicAuth(self.config.username, self.config.password),
            headers={"Content-Type": "application/json", "User-Agent": self.config.user_agent},
            timeout=self.config.timeout_seconds,
            transport=self.transport,
        )
        self._logger = structlog.get_logger(__name__).bind(
            endpoint=self.config.base_url,
            mode=self.assignment_mode.value,
        )

    def __enter__(self) -> MiraClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def list_available(self, query: RangeQuery) -> AvailabilityResponse:
        """Return the free subnets MIRA reports inside a range, in MIRA's order."""

        require_addresses(request_range=query.request_range, request_mask=query.request_mask)

        body = self.execute(
            "GET",
            SEARCH_FREE_SUBNET_PATH,
            params={"range": query.request_range, "netmaskNew": query.request_mask},
        )

        try:
            response = AvailabilityResponse.model_validate_json(body)
        except ValidationError as exc:
            raise MiraProtocolError(f"free subnet response is malformed: {exc}") from exc

        if not response.ok:
            raise MiraProtocolError(f"MIRA api status was not 'OK', status: {response.message}")

        for index, candidate in enumerate(response.payload):
            if not is_valid_address(candidate):
                raise MiraProtocolError(
                    f"{candidate!r} at position {index} of the free subnets payload is not a subnet address",
                    index=index,
                    value=candidate,
                )

        self._logger.info(
            "Free subnets listed",
            request_range=query.request_range,
            request_mask=query.request_mask,
            count=len(response.payload),
        )
        return response

    def assign(self, request: AssignmentRequest) -> AllocationResult:
        """Claim the first free subnet in the requested range."""

        require_addresses(request_range=request.request_range, request_mask=request.request_mask)

        available = self.list_available(RangeQuery(request.request_range, request.request_mask))
        if not available.payload:
            raise SubnetExhaustionError(request.request_range, request.request_mask)

        # MIRA's ordering is authoritative; always take the head of the list.
        chosen = available.payload[0]
        require_addresses(chosen_subnet=chosen)

        ip1, ip2, ip3, ip4 = split_octets(chosen, "chosen_subnet")
        nm1, nm2, nm3, nm4 = split_octets(request.request_mask, "request_mask")

        record = AssignmentWireRecord(
            address_id=request.address_id,
            comments=request.comment,
            ip1=ip1,
            ip2=ip2,
            ip3=ip3,
            ip4=ip4,
            netmask1=nm1,
            netmask2=nm2,
            netmask3=nm3,
            netmask4=nm4,
            range=request.request_range,
            subnet_name=request.subnet_name,
            template=request.template,
        )

        self._logger.info(
            "Submitting subnet assignment",
            chosen_subnet=chosen,
            request_range=request.request_range,
            subnet_name=request.subnet_name,
            template=request.template,
        )

        try:
            self.execute("POST", ASSIGNMENT_PATH, json=record.to_wire())
        except (MiraTransportError, MiraStatusError) as exc:
            if self.assignment_mode is AssignmentMode.STRICT:
                raise
            self._logger.warning(
                "Assignment write not confirmed, reporting chosen subnet anyway",
                chosen_subnet=chosen,
                error=str(exc),
            )
        else:
            self._logger.info("Subnet assigned", chosen_subnet=chosen)

        return AllocationResult(subnet=chosen, mask=self._result_mask(request))

    def find_by_address(self, address: str) -> SubnetRecord:
        """Return the MIRA subnet record that contains an address."""

        body = self.execute("GET", SEARCH_BY_ADDRESS_PATH, params={"containsIP": address})
        try:
            return SubnetRecord.model_validate_json(body)
        except ValidationError as exc:
            raise MiraProtocolError(f"subnet record response is malformed: {exc}") from exc

    def execute(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> bytes:
        """Run one request against MIRA and return the raw body of a 200 response."""

        self._logger.debug("MIRA request", method=method, path=path, params=params)
        try:
            response = self._http.request(method, path, params=params, json=json)
        except httpx.RequestError as exc:
            raise MiraTransportError(f"MIRA request failed: {method} {path or '/'}: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            raise MiraStatusError(response.status_code, response.content)
        return response.content

    def _result_mask(self, request: AssignmentRequest) -> str:
        if self.mask_source is MaskSource.REQUEST:
            return request.request_mask
        return self.assigned_subnet_mask
