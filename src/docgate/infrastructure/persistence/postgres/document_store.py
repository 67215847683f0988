"""PostgreSQL document store - JSONB documents keyed by slash-delimited path."""

import asyncio
import random
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any, TypeVar

import psycopg
import structlog
from psycopg import AsyncConnection
from psycopg.errors import DeadlockDetected, SerializationFailure
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from docgate.application.dto.query import OrderBy, QueryFilter
from docgate.domain.entities import DocumentSnapshot
from docgate.domain.exceptions import DocumentNotFound, StoreError, TransactionContention
from docgate.domain.services import apply_update, resolve_set
from docgate.domain.value_objects import (
    PATH_SEPARATOR,
    CollectionRef,
    DocumentRef,
    require_collection_path,
    require_document_path,
)
from docgate.infrastructure.persistence.postgres.query_builder import build_query

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_SELECT_COLUMNS = "path, data, create_time, update_time"

# (kind, ref, data); kind is "set", "update" or "delete".
_Write = tuple[str, DocumentRef, dict[str, Any] | None]


def _snapshot(row: tuple) -> DocumentSnapshot:
    return DocumentSnapshot(
        path=row[0],
        exists=True,
        data=row[1],
        create_time=row[2],
        update_time=row[3],
    )


async def _fetch(conn: AsyncConnection, ref: DocumentRef, lock: bool = False) -> DocumentSnapshot:
    q = f"SELECT {_SELECT_COLUMNS} FROM document WHERE path = %s"
    if lock:
        q += " FOR UPDATE"
    cur = await conn.execute(q, (ref.path,))
    r = await cur.fetchone()
    if not r:
        return DocumentSnapshot.missing(ref.path)
    return _snapshot(r)


async def _apply_writes(conn: AsyncConnection, writes: list[_Write]) -> None:
    """Apply buffered writes in order on an open transaction."""
    now = datetime.now(UTC)
    for kind, ref, data in writes:
        if kind == "set":
            await conn.execute(
                """
                INSERT INTO document (path, collection_path, document_id, data, create_time, update_time)
                VALUES (%s, %s, %s, %s, %s, %s)
                ON CONFLICT (path) DO UPDATE
                SET data = EXCLUDED.data, update_time = EXCLUDED.update_time
                """,
                (ref.path, ref.collection_path, ref.id, Jsonb(resolve_set(data or {}, now)), now, now),
            )
        elif kind == "update":
            current = await _fetch(conn, ref, lock=True)
            if not current.exists:
                raise DocumentNotFound(ref.path)
            await conn.execute(
                "UPDATE document SET data = %s, update_time = %s WHERE path = %s",
                (Jsonb(apply_update(current.data or {}, data or {}, now)), now, ref.path),
            )
        elif kind == "delete":
            await conn.execute("DELETE FROM document WHERE path = %s", (ref.path,))


class PostgresWriteBatch:
    """Write batch applied in a single SQL transaction on commit."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._writes: list[_Write] = []

    def set(self, ref: DocumentRef, data: dict[str, Any]) -> None:
        self._writes.append(("set", ref, data))

    def update(self, ref: DocumentRef, data: dict[str, Any]) -> None:
        self._writes.append(("update", ref, data))

    def delete(self, ref: DocumentRef) -> None:
        self._writes.append(("delete", ref, None))

    async def commit(self) -> None:
        try:
            async with self._pool.connection() as conn:
                async with conn.transaction():
                    await _apply_writes(conn, self._writes)
        except psycopg.Error as e:
            raise StoreError(f"Batch commit failed: {e}") from e


class PostgresTransaction:
    """Transaction handle: reads hit the open SQL transaction, writes are buffered."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn
        self._writes: list[_Write] = []

    async def get(self, ref: DocumentRef) -> DocumentSnapshot:
        return await _fetch(self._conn, ref)

    def set(self, ref: DocumentRef, data: dict[str, Any]) -> None:
        self._writes.append(("set", ref, data))

    def update(self, ref: DocumentRef, data: dict[str, Any]) -> None:
        self._writes.append(("update", ref, data))

    def delete(self, ref: DocumentRef) -> None:
        self._writes.append(("delete", ref, None))

    async def flush(self) -> None:
        await _apply_writes(self._conn, self._writes)


class PostgresDocumentStore:
    """DocumentStore over the ``document`` table."""

    def __init__(
        self,
        pool: AsyncConnectionPool,
        max_attempts: int = 5,
        retry_base_delay: float = 0.02,
    ) -> None:
        self._pool = pool
        self._max_attempts = max(1, max_attempts)
        self._retry_base_delay = retry_base_delay

    def collection(self, path: str) -> CollectionRef:
        return CollectionRef(require_collection_path(path))

    def document(self, path: str) -> DocumentRef:
        return DocumentRef(require_document_path(path))

    async def get(self, ref: DocumentRef) -> DocumentSnapshot:
        try:
            async with self._pool.connection() as conn:
                return await _fetch(conn, ref)
        except psycopg.Error as e:
            raise StoreError(f"Read failed for {ref.path}: {e}") from e

    def batch(self) -> PostgresWriteBatch:
        return PostgresWriteBatch(self._pool)

    async def run_transaction(
        self, callback: Callable[[PostgresTransaction], Awaitable[T]]
    ) -> T:
        """Run ``callback`` under SERIALIZABLE isolation, retrying on conflicts.

        Exceptions raised by the callback roll the transaction back and
        propagate unchanged; cancellation is never retried.
        """
        last_error: psycopg.Error | None = None
        for attempt in range(1, self._max_attempts + 1):
            try:
                async with self._pool.connection() as conn:
                    async with conn.transaction():
                        await conn.execute("SET TRANSACTION ISOLATION LEVEL SERIALIZABLE")
                        transaction = PostgresTransaction(conn)
                        result = await callback(transaction)
                        await transaction.flush()
                return result
            except (SerializationFailure, DeadlockDetected) as e:
                last_error = e
                logger.warning(
                    "transaction_retry",
                    attempt=attempt,
                    max_attempts=self._max_attempts,
                    error=type(e).__name__,
                )
                if attempt < self._max_attempts:
                    await asyncio.sleep(self._retry_base_delay * attempt * random.random())
            except psycopg.Error as e:
                raise StoreError(f"Transaction failed: {e}") from e
        raise TransactionContention(self._max_attempts) from last_error

    async def list_collections(self, document_path: str | None = None) -> list[str]:
        """Root collection ids, or ids of collections nested under ``document_path``."""
        prefix = ""
        if document_path:
            prefix = require_document_path(document_path) + PATH_SEPARATOR
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    "SELECT DISTINCT collection_path FROM document "
                    "WHERE starts_with(collection_path, %s)",
                    (prefix,),
                )
                rows = await cur.fetchall()
        except psycopg.Error as e:
            raise StoreError(f"Listing collections failed: {e}") from e
        ids = {r[0][len(prefix):].split(PATH_SEPARATOR, 1)[0] for r in rows}
        return sorted(ids)

    async def list_documents(self, collection_path: str) -> list[DocumentSnapshot]:
        require_collection_path(collection_path)
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    f"SELECT {_SELECT_COLUMNS} FROM document "
                    "WHERE collection_path = %s ORDER BY path",
                    (collection_path,),
                )
                rows = await cur.fetchall()
        except psycopg.Error as e:
            raise StoreError(f"Listing documents failed for {collection_path}: {e}") from e
        return [_snapshot(r) for r in rows]

    async def query(
        self,
        collection_path: str,
        filters: list[QueryFilter],
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[DocumentSnapshot]:
        require_collection_path(collection_path)
        sql, params = build_query(collection_path, filters, order_by, limit)
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(sql, params)
                rows = await cur.fetchall()
        except psycopg.Error as e:
            raise StoreError(f"Query failed for {collection_path}: {e}") from e
        return [_snapshot(r) for r in rows]
