"""Pytest fixtures for DocGate tests."""

from __future__ import annotations

import asyncio
import copy
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import pytest

from docgate.application.dto.query import FilterOperator, OrderBy, QueryFilter, SortDirection
from docgate.domain.entities import CollectionPermission, DocumentSnapshot, PermissionConfig
from docgate.domain.exceptions import DocumentNotFound, TransactionContention
from docgate.domain.services import apply_update, resolve_set
from docgate.domain.value_objects import (
    CollectionRef,
    DocumentRef,
    Operation,
    require_collection_path,
    require_document_path,
)
from docgate.infrastructure.permission.permission_manager import PermissionManager

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


# --- Fake document store ---


@dataclass
class StoredDocument:
    data: dict[str, Any]
    create_time: datetime
    update_time: datetime


def _apply(
    docs: dict[str, StoredDocument],
    writes: list[tuple[str, DocumentRef, dict[str, Any] | None]],
    now: datetime,
) -> dict[str, StoredDocument]:
    """Apply writes to a copy of ``docs``; the original is untouched on error."""
    result = copy.deepcopy(docs)
    for kind, ref, data in writes:
        if kind == "set":
            existing = result.get(ref.path)
            result[ref.path] = StoredDocument(
                data=resolve_set(data or {}, now),
                create_time=existing.create_time if existing else now,
                update_time=now,
            )
        elif kind == "update":
            existing = result.get(ref.path)
            if existing is None:
                raise DocumentNotFound(ref.path)
            existing.data = apply_update(existing.data, data or {}, now)
            existing.update_time = now
        elif kind == "delete":
            result.pop(ref.path, None)
    return result


class FakeWriteBatch:
    """Buffered writes applied atomically on commit."""

    def __init__(self, store: InMemoryDocumentStore) -> None:
        self._store = store
        self.writes: list[tuple[str, DocumentRef, dict[str, Any] | None]] = []

    def set(self, ref: DocumentRef, data: dict[str, Any]) -> None:
        self.writes.append(("set", ref, data))

    def update(self, ref: DocumentRef, data: dict[str, Any]) -> None:
        self.writes.append(("update", ref, data))

    def delete(self, ref: DocumentRef) -> None:
        self.writes.append(("delete", ref, None))

    async def commit(self) -> None:
        self._store.commit_count += 1
        if self._store.fail_commit is not None:
            raise self._store.fail_commit
        self._store.docs = _apply(self._store.docs, self.writes, self._store.now)


class FakeTransaction:
    """Reads the current state; writes buffered until the callback returns."""

    def __init__(self, store: InMemoryDocumentStore) -> None:
        self._store = store
        self.writes: list[tuple[str, DocumentRef, dict[str, Any] | None]] = []

    async def get(self, ref: DocumentRef) -> DocumentSnapshot:
        self._store.transaction_reads.append(ref.path)
        delay = self._store.read_delays.get(ref.path)
        if delay:
            await asyncio.sleep(delay)
        return self._store.snapshot(ref.path)

    def set(self, ref: DocumentRef, data: dict[str, Any]) -> None:
        self.writes.append(("set", ref, data))

    def update(self, ref: DocumentRef, data: dict[str, Any]) -> None:
        self.writes.append(("update", ref, data))

    def delete(self, ref: DocumentRef) -> None:
        self.writes.append(("delete", ref, None))


class InMemoryDocumentStore:
    """In-memory DocumentStore with spies and a contention hook.

    ``conflicts`` makes the next N transaction attempts fail at commit time,
    calling ``on_conflict`` first (to simulate a concurrent writer) and then
    re-running the callback from the start.
    """

    def __init__(self, max_attempts: int = 5) -> None:
        self.docs: dict[str, StoredDocument] = {}
        self.now = FIXED_NOW
        self.max_attempts = max_attempts
        self.batch_count = 0
        self.commit_count = 0
        self.transaction_attempts = 0
        self.transaction_reads: list[str] = []
        self.gets: list[str] = []
        self.read_delays: dict[str, float] = {}
        self.fail_commit: Exception | None = None
        self.conflicts = 0
        self.on_conflict: Callable[[InMemoryDocumentStore], None] | None = None

    def seed(self, path: str, data: dict[str, Any]) -> None:
        self.docs[path] = StoredDocument(copy.deepcopy(data), self.now, self.now)

    def data(self, path: str) -> dict[str, Any] | None:
        stored = self.docs.get(path)
        return stored.data if stored else None

    def snapshot(self, path: str) -> DocumentSnapshot:
        stored = self.docs.get(path)
        if stored is None:
            return DocumentSnapshot.missing(path)
        return DocumentSnapshot(
            path=path,
            exists=True,
            data=copy.deepcopy(stored.data),
            create_time=stored.create_time,
            update_time=stored.update_time,
        )

    @property
    def touched(self) -> bool:
        return bool(
            self.batch_count or self.commit_count or self.transaction_attempts or self.gets
        )

    def collection(self, path: str) -> CollectionRef:
        return CollectionRef(require_collection_path(path))

    def document(self, path: str) -> DocumentRef:
        return DocumentRef(require_document_path(path))

    async def get(self, ref: DocumentRef) -> DocumentSnapshot:
        self.gets.append(ref.path)
        delay = self.read_delays.get(ref.path)
        if delay:
            await asyncio.sleep(delay)
        return self.snapshot(ref.path)

    def batch(self) -> FakeWriteBatch:
        self.batch_count += 1
        return FakeWriteBatch(self)

    async def run_transaction(self, callback: Callable[[FakeTransaction], Awaitable[Any]]) -> Any:
        for _ in range(self.max_attempts):
            self.transaction_attempts += 1
            transaction = FakeTransaction(self)
            result = await callback(transaction)
            if self.conflicts > 0:
                self.conflicts -= 1
                if self.on_conflict is not None:
                    self.on_conflict(self)
                continue
            self.commit_count += 1
            self.docs = _apply(self.docs, transaction.writes, self.now)
            return result
        raise TransactionContention(self.max_attempts)

    async def list_collections(self, document_path: str | None = None) -> list[str]:
        prefix = f"{document_path}/" if document_path else ""
        ids = {
            path[len(prefix):].split("/", 1)[0]
            for path in self.docs
            if path.startswith(prefix) and "/" in path[len(prefix):]
        }
        return sorted(ids)

    async def list_documents(self, collection_path: str) -> list[DocumentSnapshot]:
        return [
            self.snapshot(path)
            for path in sorted(self.docs)
            if path.rpartition("/")[0] == collection_path
        ]

    async def query(
        self,
        collection_path: str,
        filters: list[QueryFilter],
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[DocumentSnapshot]:
        results = await self.list_documents(collection_path)
        for f in filters:
            if f.operator == FilterOperator.EQ:
                results = [s for s in results if (s.data or {}).get(f.field) == f.value]
            elif f.operator == FilterOperator.IN:
                results = [s for s in results if (s.data or {}).get(f.field) in f.value]
            else:
                raise NotImplementedError(f.operator)
        if order_by is not None:
            results = [s for s in results if order_by.field in (s.data or {})]
            results.sort(
                key=lambda s: s.data[order_by.field],
                reverse=order_by.direction == SortDirection.DESC,
            )
        if limit is not None:
            results = results[:limit]
        return results


# --- Permissions ---


def make_permissions(
    default_allow: bool = False, **collections: list[str]
) -> PermissionManager:
    """PermissionManager from ``collection_id=["read", "write", ...]`` keywords."""
    return PermissionManager(
        PermissionConfig(
            collections=tuple(
                CollectionPermission(
                    collection_id=cid,
                    operations=frozenset(Operation(o) for o in ops),
                )
                for cid, ops in collections.items()
            ),
            default_allow=default_allow,
        )
    )


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def permissions() -> PermissionManager:
    """users: full access; accounts: read/write; logs: read only; secrets: nothing."""
    return make_permissions(
        users=["read", "write", "delete", "query"],
        accounts=["read", "write"],
        logs=["read"],
        secrets=[],
    )
