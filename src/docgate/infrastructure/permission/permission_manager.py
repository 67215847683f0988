"""Permission manager - in-memory lookup over the immutable permission config."""

from docgate.domain.entities import PermissionConfig
from docgate.domain.value_objects import Operation


class PermissionManager:
    """Answers whether an operation is allowed on a root collection.

    The first configured entry for a collection decides; collections without
    an entry fall back to ``default_allow``. Entry ``conditions`` are not
    evaluated here.
    """

    def __init__(self, config: PermissionConfig) -> None:
        self._config = config

    def has_permission(self, collection_id: str, operation: Operation) -> bool:
        """Check if operation is allowed on collection."""
        for entry in self._config.collections:
            if entry.collection_id == collection_id:
                return operation in entry.operations
        return self._config.default_allow
