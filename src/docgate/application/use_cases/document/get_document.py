"""Get document use case."""

from docgate.application.authorization import Authorizer
from docgate.application.ports import DocumentStore, PermissionChecker
from docgate.domain.entities import DocumentSnapshot
from docgate.domain.exceptions import DocumentNotFound
from docgate.domain.value_objects import Operation


class GetDocumentUseCase:
    """Get a document by full path (sub-collection paths included)."""

    def __init__(
        self,
        document_store: DocumentStore,
        permission_checker: PermissionChecker,
    ) -> None:
        self._store = document_store
        self._authorizer = Authorizer(permission_checker)

    async def execute(self, document_path: str) -> DocumentSnapshot:
        self._authorizer.require(document_path, Operation.READ)
        snapshot = await self._store.get(self._store.document(document_path))
        if not snapshot.exists:
            raise DocumentNotFound(document_path)
        return snapshot
