"""Delete document use case."""

import structlog

from docgate.application.authorization import Authorizer
from docgate.application.ports import DocumentStore, PermissionChecker
from docgate.domain.value_objects import Operation

logger = structlog.get_logger(__name__)


class DeleteDocumentUseCase:
    """Delete a document; deleting a missing document is not an error."""

    def __init__(
        self,
        document_store: DocumentStore,
        permission_checker: PermissionChecker,
    ) -> None:
        self._store = document_store
        self._authorizer = Authorizer(permission_checker)

    async def execute(self, document_path: str) -> None:
        self._authorizer.require(document_path, Operation.DELETE)
        batch = self._store.batch()
        batch.delete(self._store.document(document_path))
        await batch.commit()
        logger.info("document_deleted", path=document_path)
