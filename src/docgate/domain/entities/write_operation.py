"""Write operations accepted by batches and transactions."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CreateOperation:
    """Set a new document in a collection; id is generated when omitted."""

    collection_path: str
    data: dict[str, Any] = field(default_factory=dict)
    document_id: str | None = None

    type = "create"


@dataclass(frozen=True)
class UpdateOperation:
    """Merge fields into an existing document."""

    document_path: str
    data: dict[str, Any] = field(default_factory=dict)

    type = "update"


@dataclass(frozen=True)
class DeleteOperation:
    """Delete a document."""

    document_path: str

    type = "delete"


WriteOperation = CreateOperation | UpdateOperation | DeleteOperation
