"""Update document use case."""

from typing import Any

import structlog

from docgate.application.authorization import Authorizer
from docgate.application.ports import DocumentStore, PermissionChecker
from docgate.domain.entities import DocumentSnapshot
from docgate.domain.value_objects import Operation

logger = structlog.get_logger(__name__)


class UpdateDocumentUseCase:
    """Merge fields into an existing document."""

    def __init__(
        self,
        document_store: DocumentStore,
        permission_checker: PermissionChecker,
    ) -> None:
        self._store = document_store
        self._authorizer = Authorizer(permission_checker)

    async def execute(self, document_path: str, data: dict[str, Any]) -> DocumentSnapshot:
        """Update the document. Raises DocumentNotFound when it does not exist."""
        self._authorizer.require(document_path, Operation.WRITE, "update")
        ref = self._store.document(document_path)

        batch = self._store.batch()
        batch.update(ref, data)
        await batch.commit()
        logger.info("document_updated", path=ref.path, fields=sorted(data))

        return await self._store.get(ref)
