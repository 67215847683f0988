"""Domain value objects."""

from docgate.domain.value_objects.document_path import (
    PATH_SEPARATOR,
    CollectionRef,
    DocumentRef,
    generate_document_id,
    is_collection_path,
    is_document_path,
    last_segment,
    parent_path,
    require_collection_path,
    require_document_path,
    root_collection,
)
from docgate.domain.value_objects.field_transform import (
    DELETE_FIELD,
    SERVER_TIMESTAMP,
    ArrayRemove,
    ArrayUnion,
    DeleteField,
    FieldTransform,
    Increment,
    ServerTimestamp,
)
from docgate.domain.value_objects.operation import Operation

__all__ = [
    "PATH_SEPARATOR",
    "DELETE_FIELD",
    "SERVER_TIMESTAMP",
    "ArrayRemove",
    "ArrayUnion",
    "CollectionRef",
    "DeleteField",
    "DocumentRef",
    "FieldTransform",
    "Increment",
    "Operation",
    "ServerTimestamp",
    "generate_document_id",
    "is_collection_path",
    "is_document_path",
    "last_segment",
    "parent_path",
    "require_collection_path",
    "require_document_path",
    "root_collection",
]
