"""Create document use case."""

from typing import Any

import structlog

from docgate.application.authorization import Authorizer
from docgate.application.ports import DocumentStore, PermissionChecker
from docgate.domain.entities import DocumentSnapshot
from docgate.domain.value_objects import Operation

logger = structlog.get_logger(__name__)


class CreateDocumentUseCase:
    """Create a document in a collection, generating its id when none is given."""

    def __init__(
        self,
        document_store: DocumentStore,
        permission_checker: PermissionChecker,
    ) -> None:
        self._store = document_store
        self._authorizer = Authorizer(permission_checker)

    async def execute(
        self,
        collection_path: str,
        data: dict[str, Any],
        document_id: str | None = None,
    ) -> DocumentSnapshot:
        """Create (or overwrite) the document and return it as stored."""
        self._authorizer.require(collection_path, Operation.WRITE, "create")
        ref = self._store.collection(collection_path).document(document_id)

        batch = self._store.batch()
        batch.set(ref, data)
        await batch.commit()
        logger.info("document_created", path=ref.path)

        return await self._store.get(ref)
