"""Lifecycle operations of provider resources."""

from enum import Enum

from mira_provider.errors import UnsupportedOperationError


class Operation(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


SUPPORTED_OPERATIONS = frozenset({Operation.CREATE, Operation.READ})

UNSUPPORTED_MESSAGES = {
    Operation.UPDATE: "update is not supported, contact the allocation owner to change an allocation",
    Operation.DELETE: "delete is not supported, contact the allocation owner to remove an allocation",
}


def ensure_supported(operation: Operation) -> None:
    """Raise UnsupportedOperationError unless the operation is create or read."""

    operation = Operation(operation)
    if operation not in SUPPORTED_OPERATIONS:
        raise UnsupportedOperationError(UNSUPPORTED_MESSAGES[operation])
