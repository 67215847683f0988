"""Field-value batch use case."""

import structlog

from docgate.application.authorization import Authorizer
from docgate.application.dto.results import FieldValueBatchResult
from docgate.application.ports import DocumentStore, PermissionChecker
from docgate.domain.entities import FieldValueOperation
from docgate.domain.value_objects import Operation

logger = structlog.get_logger(__name__)


class FieldValueBatchUseCase:
    """Apply increments, array unions/removals, server timestamps and field deletes atomically."""

    def __init__(
        self,
        document_store: DocumentStore,
        permission_checker: PermissionChecker,
    ) -> None:
        self._store = document_store
        self._authorizer = Authorizer(permission_checker)

    async def execute(self, operations: list[FieldValueOperation]) -> FieldValueBatchResult:
        """Authorize every target document, then commit all transforms in one batch."""
        for op in operations:
            self._authorizer.require(op.document_path, Operation.WRITE, op.type)
        if not operations:
            return FieldValueBatchResult(operations=[])

        batch = self._store.batch()
        for op in operations:
            batch.update(self._store.document(op.document_path), op.to_update())
        await batch.commit()
        logger.info("field_values_committed", operation_count=len(operations))
        return FieldValueBatchResult(operations=list(operations))
