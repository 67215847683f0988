"""Fail-fast authorization of every path an operation touches."""

from collections.abc import Iterable

import structlog

from docgate.application.ports import PermissionChecker
from docgate.application.write_operations import required_access
from docgate.domain.entities import WriteOperation
from docgate.domain.exceptions import PermissionDenied
from docgate.domain.value_objects import Operation, root_collection

logger = structlog.get_logger(__name__)


class Authorizer:
    """Checks scopes against a PermissionChecker, raising on the first denial."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    def require(self, path: str, operation: Operation, label: str | None = None) -> None:
        """Raise PermissionDenied unless ``operation`` is allowed on the scope of ``path``."""
        scope = root_collection(path)
        if not self._permission_checker.has_permission(scope, operation):
            logger.warning(
                "permission_denied",
                scope=scope,
                operation=operation.value,
                path=path,
            )
            raise PermissionDenied(label or operation.value, path)

    def require_reads(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.require(path, Operation.READ)

    def require_writes(self, operations: Iterable[WriteOperation]) -> None:
        for operation in operations:
            path, needed = required_access(operation)
            self.require(path, needed, operation.type)
