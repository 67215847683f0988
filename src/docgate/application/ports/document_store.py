"""Document store port - reads, atomic write batches and transactions."""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar

from docgate.application.dto.query import OrderBy, QueryFilter
from docgate.domain.entities import DocumentSnapshot
from docgate.domain.value_objects import CollectionRef, DocumentRef

T = TypeVar("T")


class WriteBatch(Protocol):
    """Buffered writes applied all-or-nothing by ``commit``."""

    def set(self, ref: DocumentRef, data: dict[str, Any]) -> None: ...

    def update(self, ref: DocumentRef, data: dict[str, Any]) -> None: ...

    def delete(self, ref: DocumentRef) -> None: ...

    async def commit(self) -> None: ...


class Transaction(Protocol):
    """Transaction handle passed to the callback of ``run_transaction``.

    Reads observe one consistent snapshot. Writes are buffered and applied
    only if the callback returns normally.
    """

    async def get(self, ref: DocumentRef) -> DocumentSnapshot: ...

    def set(self, ref: DocumentRef, data: dict[str, Any]) -> None: ...

    def update(self, ref: DocumentRef, data: dict[str, Any]) -> None: ...

    def delete(self, ref: DocumentRef) -> None: ...


class DocumentStore(Protocol):
    """Port for the underlying document database."""

    def collection(self, path: str) -> CollectionRef: ...

    def document(self, path: str) -> DocumentRef: ...

    async def get(self, ref: DocumentRef) -> DocumentSnapshot: ...

    def batch(self) -> WriteBatch: ...

    async def run_transaction(self, callback: Callable[[Transaction], Awaitable[T]]) -> T:
        """Run ``callback`` in a transaction, retrying it from the start on contention."""
        ...

    async def list_collections(self, document_path: str | None = None) -> list[str]:
        """Root collection ids, or subcollection ids of ``document_path``."""
        ...

    async def list_documents(self, collection_path: str) -> list[DocumentSnapshot]: ...

    async def query(
        self,
        collection_path: str,
        filters: list[QueryFilter],
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[DocumentSnapshot]: ...
