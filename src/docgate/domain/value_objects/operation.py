"""Operations that can be granted on collections."""

from enum import StrEnum


class Operation(StrEnum):
    """Actions that can be performed on collections."""

    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    QUERY = "query"
