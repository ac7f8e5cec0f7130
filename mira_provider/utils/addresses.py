"""Address guards shared by every MIRA call site."""

from ipaddress import IPv4Address, ip_address

from mira_provider.errors import AddressValidationError


def is_valid_address(value: object) -> bool:
    """Return True when value is an IPv4 dotted-decimal or IPv6 literal."""

    if not isinstance(value, str):
        return False
    try:
        ip_address(value)
    except ValueError:
        return False
    return True


def require_addresses(**named: str) -> None:
    """Raise AddressValidationError for the first argument that is not an IP literal."""

    for field_name, value in named.items():
        if not is_valid_address(value):
            raise AddressValidationError(field_name, value)


def split_octets(address: str, field_name: str = "address") -> tuple[str, str, str, str]:
    """Split dotted-decimal address into its four octet strings."""

    try:
        IPv4Address(address)
    except ValueError as exc:
        raise AddressValidationError(field_name, address, reason="is not a dotted-decimal IPv4 address") from exc

    parts = address.split(".")
    return parts[0], parts[1], parts[2], parts[3]
