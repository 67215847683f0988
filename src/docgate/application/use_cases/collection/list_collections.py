"""List collections and subcollections use cases."""

from docgate.application.authorization import Authorizer
from docgate.application.ports import DocumentStore, PermissionChecker
from docgate.domain.value_objects import Operation


class ListCollectionsUseCase:
    """List root collections the caller may read."""

    def __init__(
        self,
        document_store: DocumentStore,
        permission_checker: PermissionChecker,
    ) -> None:
        self._store = document_store
        self._permission_checker = permission_checker

    async def execute(self) -> list[str]:
        collection_ids = await self._store.list_collections()
        return [
            c for c in collection_ids
            if self._permission_checker.has_permission(c, Operation.READ)
        ]


class ListSubcollectionsUseCase:
    """List subcollections of a document."""

    def __init__(
        self,
        document_store: DocumentStore,
        permission_checker: PermissionChecker,
    ) -> None:
        self._store = document_store
        self._authorizer = Authorizer(permission_checker)

    async def execute(self, document_path: str) -> list[str]:
        self._authorizer.require(document_path, Operation.READ)
        return await self._store.list_collections(document_path)
