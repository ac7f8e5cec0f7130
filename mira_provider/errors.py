"""Error hierarchy for MIRA IPAM operations."""

from __future__ import annotations


class MiraClientError(Exception):
    """Base class for every failure raised by the MIRA client and provider glue."""


class MiraConfigurationError(MiraClientError):
    """Raised when the client cannot be built from the supplied session settings."""


class AddressValidationError(MiraClientError, ValueError):
    """Raised locally, before any network call, when an input is not an IP literal."""

    def __init__(self, field_name: str, value: object, reason: str = "is not in IP address format") -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(f"{field_name}: {value!r} {reason}")


class MiraTransportError(MiraClientError):
    """Raised when MIRA could not be reached (connection failure, timeout)."""


class MiraStatusError(MiraClientError):
    """Raised when MIRA answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: bytes) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"status: {status_code}, body: {body.decode('utf-8', errors='replace')}")


class MiraProtocolError(MiraClientError):
    """Raised when a response body does not match the shape MIRA promises."""

    def __init__(self, message: str, index: int | None = None, value: object = None) -> None:
        self.index = index
        self.value = value
        super().__init__(message)


class SubnetExhaustionError(MiraClientError):
    """Raised when MIRA reports no free subnets left in the requested range."""

    def __init__(self, request_range: str, request_mask: str) -> None:
        self.request_range = request_range
        self.request_mask = request_mask
        super().__init__(f"MIRA returned an empty subnet list for range {request_range} mask {request_mask}")


class UnsupportedOperationError(MiraClientError):
    """Raised for lifecycle operations the allocation resource does not implement."""
