"""List and query documents of a collection."""

from docgate.application.authorization import Authorizer
from docgate.application.dto.query import OrderBy, QueryFilter
from docgate.application.ports import DocumentStore, PermissionChecker
from docgate.domain.entities import DocumentSnapshot
from docgate.domain.exceptions import ValidationError
from docgate.domain.value_objects import Operation


class ListDocumentsUseCase:
    """All documents of a collection (sub-collection paths included)."""

    def __init__(
        self,
        document_store: DocumentStore,
        permission_checker: PermissionChecker,
    ) -> None:
        self._store = document_store
        self._authorizer = Authorizer(permission_checker)

    async def execute(self, collection_path: str) -> list[DocumentSnapshot]:
        self._authorizer.require(collection_path, Operation.READ)
        return await self._store.list_documents(collection_path)


class QueryCollectionUseCase:
    """Filter, order and limit documents of a collection. Requires ``query``."""

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
        filters: list[QueryFilter],
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[DocumentSnapshot]:
        self._authorizer.require(collection_path, Operation.QUERY)
        if limit is not None and limit < 1:
            raise ValidationError("limit must be a positive integer")
        return await self._store.query(collection_path, filters, order_by, limit)
