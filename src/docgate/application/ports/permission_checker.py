"""Permission checker port - per-collection authorization."""

from typing import Protocol

from docgate.domain.value_objects import Operation


class PermissionChecker(Protocol):
    """Port for checking whether an operation is allowed on a root collection."""

    def has_permission(self, collection_id: str, operation: Operation) -> bool: ...
