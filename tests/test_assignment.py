import json

import httpx
import pytest
from structlog.testing import capture_logs

from mira_provider.errors import (
    AddressValidationError,
    MiraStatusError,
    MiraTransportError,
    SubnetExhaustionError,
)
from mira_provider.integrations.mira import AssignmentMode, ClientConfig, MaskSource, MiraClient
from mira_provider.integrations.models import AssignmentRequest


class FakeMira:
    """Answers free-subnet searches and records assignment posts."""

    def __init__(self, payload: list[str], post_status: int = 200, post_error: bool = False) -> None:
        self.payload = payload
        self.post_status = post_status
        self.post_error = post_error
        self.requests: list[httpx.Request] = []

    @property
    def posts(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests if request.method == "POST"]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET":
            return httpx.Response(200, json={"message": "OK", "payload": self.payload})
        if self.post_error:
            raise httpx.ReadTimeout("timed out", request=request)
        return httpx.Response(self.post_status, content=b"{}")


def make_client(fake: FakeMira, **kwargs) -> MiraClient:
    config = ClientConfig(username="u", password="p", user_agent="terraform-provider-mira", base_url="http://mira.test/")
    return MiraClient(config=config, transport=httpx.MockTransport(fake), **kwargs)


def make_request(**overrides: str) -> AssignmentRequest:
    values = {
        "request_range": "10.0.0.0",
        "request_mask": "255.255.255.224",
        "address_id": "7654321",
        "comment": "payments team network",
        "subnet_name": "payments team network",
        "template": "U25_DEV_GCP",
    }
    values.update(overrides)
    return AssignmentRequest(**values)


def test_assign_posts_expanded_wire_record() -> None:
    fake = FakeMira(["10.0.0.5"])

    result = make_client(fake).assign(make_request())

    assert result.subnet == "10.0.0.5"
    assert [request.method for request in fake.requests] == ["GET", "POST"]
    assert fake.requests[1].url.path == "/"
    assert fake.posts == [
        {
            "addressID": "7654321",
            "alsoQip": False,
            "building": "",
            "comments": "payments team network",
            "dhcp": False,
            "dhcpServer": "",
            "dhcpTemplate": "",
            "floor": "",
            "ip1": "10",
            "ip2": "0",
            "ip3": "0",
            "ip4": "5",
            "ipAddressSchema": 2,
            "netmask1": "255",
            "netmask2": "255",
            "netmask3": "255",
            "netmask4": "224",
            "range": "10.0.0.0",
            "recordId": "",
            "room": "",
            "subnetClass": 38,
            "subnetName": "payments team network",
            "subnetNameChanged": False,
            "template": "U25_DEV_GCP",
            "vlan": "",
        }
    ]


def test_assign_picks_first_candidate_every_time() -> None:
    fake = FakeMira(["10.0.0.32", "10.0.0.64", "10.0.0.96"])
    client = make_client(fake)

    chosen = {client.assign(make_request()).subnet for _ in range(3)}

    assert chosen == {"10.0.0.32"}
    assert [post["ip4"] for post in fake.posts] == ["32", "32", "32"]


def test_assign_empty_payload_is_exhaustion_without_post() -> None:
    fake = FakeMira([])

    with pytest.raises(SubnetExhaustionError) as exc_info:
        make_client(fake).assign(make_request())

    assert exc_info.value.request_range == "10.0.0.0"
    assert fake.posts == []


def test_assign_rejects_bad_range_without_network() -> None:
    fake = FakeMira(["10.0.0.5"])

    with pytest.raises(AddressValidationError):
        make_client(fake).assign(make_request(request_range="10.0.0"))

    assert fake.requests == []


def test_assign_ipv6_candidate_is_not_submitted() -> None:
    fake = FakeMira(["2001:db8::"])

    with pytest.raises(AddressValidationError):
        make_client(fake).assign(make_request())

    assert fake.posts == []


def test_assign_ipv6_mask_is_not_submitted() -> None:
    fake = FakeMira(["10.0.0.5"])

    with pytest.raises(AddressValidationError):
        make_client(fake).assign(make_request(request_mask="ffff:ffff::"))

    assert fake.posts == []


def test_unknown_template_is_forwarded_verbatim() -> None:
    fake = FakeMira(["10.0.0.5"])

    make_client(fake).assign(make_request(template="SOMETHING_ELSE"))

    assert fake.posts[0]["template"] == "SOMETHING_ELSE"


def test_best_effort_reports_subnet_when_post_fails() -> None:
    fake = FakeMira(["10.0.0.5"], post_status=500)

    result = make_client(fake).assign(make_request())

    assert result.subnet == "10.0.0.5"
    assert len(fake.posts) == 1


def test_best_effort_reports_subnet_when_post_times_out() -> None:
    fake = FakeMira(["10.0.0.5"], post_error=True)

    assert make_client(fake).assign(make_request()).subnet == "10.0.0.5"


def test_strict_mode_propagates_post_status_error() -> None:
    fake = FakeMira(["10.0.0.5"], post_status=409)

    with pytest.raises(MiraStatusError) as exc_info:
        make_client(fake, assignment_mode=AssignmentMode.STRICT).assign(make_request())

    assert exc_info.value.status_code == 409


def test_strict_mode_propagates_post_transport_error() -> None:
    fake = FakeMira(["10.0.0.5"], post_error=True)

    with pytest.raises(MiraTransportError):
        make_client(fake, assignment_mode="strict").assign(make_request())


def test_result_mask_defaults_to_fixed_constant() -> None:
    fake = FakeMira(["10.0.0.0"])

    result = make_client(fake).assign(make_request(request_mask="255.255.255.0"))

    assert result.mask == "255.255.255.224"
    assert result.resource_id == "10.0.0.0-255.255.255.224"


def test_result_mask_can_be_configured() -> None:
    fake = FakeMira(["10.0.0.0"])

    result = make_client(fake, assigned_subnet_mask="255.255.255.192").assign(make_request())

    assert result.mask == "255.255.255.192"


def test_result_mask_from_request() -> None:
    fake = FakeMira(["10.0.0.0"])

    result = make_client(fake, mask_source=MaskSource.REQUEST).assign(make_request(request_mask="255.255.255.0"))

    assert result.mask == "255.255.255.0"


def test_invalid_fixed_mask_rejected_at_construction() -> None:
    with pytest.raises(AddressValidationError):
        make_client(FakeMira([]), assigned_subnet_mask="/27")


def test_best_effort_logs_unconfirmed_write() -> None:
    fake = FakeMira(["10.0.0.5"], post_status=503)

    with capture_logs() as logs:
        make_client(fake).assign(make_request())

    warnings = [entry for entry in logs if entry["log_level"] == "warning"]
    assert len(warnings) == 1
    assert warnings[0]["chosen_subnet"] == "10.0.0.5"
    assert "503" in warnings[0]["error"]


def test_best_effort_reports_subnet_when_post_body_cannot_be_decoded() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json={"message": "OK", "payload": ["10.0.0.5"]})
        return httpx.Response(200, headers={"Content-Encoding": "gzip"}, stream=httpx.ByteStream(b"not gzip"))

    config = ClientConfig(username="u", password="p", user_agent="ua", base_url="http://mira.test/")
    client = MiraClient(config=config, transport=httpx.MockTransport(handler))

    assert client.assign(make_request()).subnet == "10.0.0.5"


@pytest.mark.parametrize(
    ("payload", "mask"),
    [(["::ffff:10.0.0.5"], "255.255.255.224"), (["10.0.0.5"], "::ffff:255.255.255.224")],
)
def test_assign_ipv4_mapped_addresses_are_not_submitted(payload: list[str], mask: str) -> None:
    fake = FakeMira(payload)

    with pytest.raises(AddressValidationError):
        make_client(fake).assign(make_request(request_mask=mask))

    assert fake.posts == []
