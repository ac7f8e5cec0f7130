"""Utils package exports."""

from mira_provider.utils.addresses import is_valid_address, require_addresses, split_octets
from mira_provider.utils.logger import setup_logging

__all__ = ["is_valid_address", "require_addresses", "split_octets", "setup_logging"]
