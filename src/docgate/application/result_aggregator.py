"""Shapes operation outcomes into response payloads.

Success payloads and the error payload ``{"error": True, "message": ...}``
are never mixed.
"""

from typing import Any

from docgate.application.dto.results import (
    BatchResult,
    FieldValueBatchResult,
    TransactionResult,
    WriteResult,
)
from docgate.domain.entities import (
    ArrayRemoveOperation,
    ArrayUnionOperation,
    DeleteFieldOperation,
    DocumentSnapshot,
    FieldValueOperation,
    IncrementOperation,
    ReadOutcome,
    ServerTimestampOperation,
)


class ResultAggregator:
    """Builds the uniform response structures returned to callers."""

    @staticmethod
    def error(message: str) -> dict[str, Any]:
        return {"error": True, "message": message}

    @staticmethod
    def write_result(result: WriteResult) -> dict[str, Any]:
        item: dict[str, Any] = {"type": result.type}
        if result.id is not None:
            item["id"] = result.id
        item["path"] = result.path
        return item

    @classmethod
    def batch(cls, result: BatchResult) -> dict[str, Any]:
        return {
            "success": True,
            "operationCount": result.operation_count,
            "operations": [cls.write_result(r) for r in result.operations],
        }

    @staticmethod
    def read_outcome(outcome: ReadOutcome) -> dict[str, Any]:
        return {
            "path": outcome.path,
            "exists": outcome.exists,
            "data": outcome.data if outcome.exists else None,
        }

    @classmethod
    def batch_read(cls, outcomes: list[ReadOutcome]) -> list[dict[str, Any]]:
        return [cls.read_outcome(o) for o in outcomes]

    @classmethod
    def transaction(cls, result: TransactionResult) -> dict[str, Any]:
        return {
            "success": True,
            "transaction": {
                "readResults": {
                    path: {"exists": o.exists, "data": o.data if o.exists else None}
                    for path, o in result.read_results.items()
                },
                "writeResults": [cls.write_result(r) for r in result.write_results],
            },
        }

    @staticmethod
    def field_value(operation: FieldValueOperation) -> dict[str, Any]:
        item: dict[str, Any] = {"type": operation.type, "path": operation.document_path}
        if isinstance(operation, IncrementOperation):
            item["field"] = operation.field
            item["incrementBy"] = operation.increment_by
        elif isinstance(operation, (ArrayUnionOperation, ArrayRemoveOperation)):
            item["field"] = operation.field
            item["elements"] = list(operation.elements)
        elif isinstance(operation, (ServerTimestampOperation, DeleteFieldOperation)):
            item["fields"] = list(operation.fields)
        return item

    @classmethod
    def field_values(cls, result: FieldValueBatchResult) -> dict[str, Any]:
        return {
            "success": True,
            "operationCount": result.operation_count,
            "operations": [cls.field_value(op) for op in result.operations],
        }

    @staticmethod
    def document(snapshot: DocumentSnapshot) -> dict[str, Any]:
        return {
            "id": snapshot.id,
            "path": snapshot.path,
            "data": snapshot.data,
            "createTime": snapshot.create_time.isoformat() if snapshot.create_time else None,
            "updateTime": snapshot.update_time.isoformat() if snapshot.update_time else None,
        }

    @classmethod
    def documents(cls, snapshots: list[DocumentSnapshot]) -> list[dict[str, Any]]:
        return [cls.document(s) for s in snapshots]

    @staticmethod
    def collections(collection_ids: list[str]) -> list[str]:
        return list(collection_ids)

    @staticmethod
    def deleted(path: str) -> dict[str, Any]:
        return {"success": True, "path": path}
