"""Request, response and wire types exchanged with MIRA."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

AVAILABILITY_OK = "OK"

# Preconfigured deployment templates MIRA knows about. Not enforced locally:
# MIRA is authoritative for rejecting anything else.
KNOWN_TEMPLATES = ("U25_DEV_GCP", "U25_UAT_GCP", "U25_PRD_GCP")


@dataclass(frozen=True, slots=True)
class RangeQuery:
    """Parent range and mask to search for free subnets."""

    request_range: str
    request_mask: str


@dataclass(frozen=True, slots=True)
class AssignmentRequest:
    """Everything needed to claim one subnet for a project."""

    request_range: str
    request_mask: str
    address_id: str
    comment: str
    subnet_name: str
    template: str


@dataclass(frozen=True, slots=True)
class AllocationResult:
    """Subnet and mask reported back to the caller after an assignment."""

    subnet: str
    mask: str

    @property
    def resource_id(self) -> str:
        return f"{self.subnet}-{self.mask}"


class AvailabilityResponse(BaseModel):
    """Body of the free-subnet search."""

    model_config = ConfigDict(frozen=True)

    message: str
    # elements are checked one by one so a bad entry can be reported by position
    payload: list[Any] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.message == AVAILABILITY_OK


class AssignmentWireRecord(BaseModel):
    """JSON body POSTed to MIRA to create a subnet assignment.

    Only the octets, range, location, comment, name and template vary. The
    rest are constants the MIRA schema requires: schema 2, subnet class 38
    (GCP) and a handful of placeholders that are always empty or false.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    address_id: str = Field(alias="addressID")
    also_qip: bool = Field(default=False, alias="alsoQip")
    building: str = ""
    comments: str
    dhcp: bool = False
    dhcp_server: str = Field(default="", alias="dhcpServer")
    dhcp_template: str = Field(default="", alias="dhcpTemplate")
    floor: str = ""
    ip1: str
    ip2: str
    ip3: str
    ip4: str
    ip_address_schema: int = Field(default=2, alias="ipAddressSchema")
    netmask1: str
    netmask2: str
    netmask3: str
    netmask4: str
    range: str
    record_id: str = Field(default="", alias="recordId")
    room: str = ""
    subnet_class: int = Field(default=38, alias="subnetClass")
    subnet_name: str = Field(alias="subnetName")
    subnet_name_changed: bool = Field(default=False, alias="subnetNameChanged")
    template: str
    vlan: str = ""

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class SubnetRecord(BaseModel):
    """MIRA record for the subnet containing a looked-up address."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    address: str = ""
    mask: str = ""
    country: str = ""
    description: str = ""
    legacy: str = ""
    layout: str = ""
    record_id: int = Field(default=0, alias="recordId")
    security_domain: str = Field(default="", alias="securityDomain")
    security_zone: str = Field(default="", alias="securityZone")
    subnet_class: str = Field(default="", alias="subnetClass")
    tenant: str = ""
    qip_instance: str = Field(default="", alias="qipInstance")
