"""Scope derivation and application of write operations.

``required_access`` and ``apply_write`` switch over the same operation types
in the same order; a new operation type must be added to both.
"""

from docgate.application.dto.results import WriteResult
from docgate.application.ports import DocumentStore, Transaction, WriteBatch
from docgate.domain.entities import (
    CreateOperation,
    DeleteOperation,
    UpdateOperation,
    WriteOperation,
)
from docgate.domain.value_objects import Operation


def required_access(operation: WriteOperation) -> tuple[str, Operation]:
    """Path whose scope must be authorized, and the operation it needs."""
    if isinstance(operation, CreateOperation):
        return operation.collection_path, Operation.WRITE
    if isinstance(operation, UpdateOperation):
        return operation.document_path, Operation.WRITE
    if isinstance(operation, DeleteOperation):
        return operation.document_path, Operation.DELETE
    raise TypeError(f"Unsupported write operation: {type(operation).__name__}")


def apply_write(
    writer: WriteBatch | Transaction,
    store: DocumentStore,
    operation: WriteOperation,
) -> WriteResult:
    """Stage one operation on a batch or transaction and describe the outcome."""
    if isinstance(operation, CreateOperation):
        ref = store.collection(operation.collection_path).document(operation.document_id)
        writer.set(ref, operation.data)
        return WriteResult(type=operation.type, id=ref.id, path=ref.path)
    if isinstance(operation, UpdateOperation):
        ref = store.document(operation.document_path)
        writer.update(ref, operation.data)
        return WriteResult(type=operation.type, path=operation.document_path)
    if isinstance(operation, DeleteOperation):
        ref = store.document(operation.document_path)
        writer.delete(ref)
        return WriteResult(type=operation.type, path=operation.document_path)
    raise TypeError(f"Unsupported write operation: {type(operation).__name__}")
