"""Batch write and batch read use cases."""

import asyncio

import structlog

from docgate.application.authorization import Authorizer
from docgate.application.dto.results import BatchResult
from docgate.application.ports import DocumentStore, PermissionChecker
from docgate.application.write_operations import apply_write
from docgate.domain.entities import ReadOutcome, WriteOperation

logger = structlog.get_logger(__name__)


class BatchOperationExecutor:
    """Applies write operations atomically and reads documents in one round.

    Every path is authorized before anything is sent to the store; a single
    denied operation rejects the whole call.
    """

    def __init__(
        self,
        document_store: DocumentStore,
        permission_checker: PermissionChecker,
    ) -> None:
        self._store = document_store
        self._authorizer = Authorizer(permission_checker)

    async def execute_batch(self, operations: list[WriteOperation]) -> BatchResult:
        """Authorize all operations, then commit them as one atomic batch."""
        self._authorizer.require_writes(operations)
        if not operations:
            return BatchResult(operations=[])

        batch = self._store.batch()
        results = [apply_write(batch, self._store, op) for op in operations]
        await batch.commit()
        logger.info("batch_committed", operation_count=len(results))
        return BatchResult(operations=results)

    async def execute_batch_read(self, document_paths: list[str]) -> list[ReadOutcome]:
        """Authorize reads on all paths, then read them concurrently.

        Results follow input order regardless of completion order.
        """
        self._authorizer.require_reads(document_paths)
        snapshots = await asyncio.gather(
            *(self._store.get(self._store.document(path)) for path in document_paths)
        )
        return [
            ReadOutcome(
                path=path,
                exists=snapshot.exists,
                data=snapshot.data if snapshot.exists else None,
            )
            for path, snapshot in zip(document_paths, snapshots)
        ]
