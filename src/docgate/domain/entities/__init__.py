"""Domain entities."""

from docgate.domain.entities.document import DocumentSnapshot, ReadOutcome
from docgate.domain.entities.field_value_operation import (
    ArrayRemoveOperation,
    ArrayUnionOperation,
    DeleteFieldOperation,
    FieldValueOperation,
    IncrementOperation,
    ServerTimestampOperation,
)
from docgate.domain.entities.permission import (
    CollectionPermission,
    FieldCondition,
    PermissionConfig,
)
from docgate.domain.entities.write_operation import (
    CreateOperation,
    DeleteOperation,
    UpdateOperation,
    WriteOperation,
)

__all__ = [
    "ArrayRemoveOperation",
    "ArrayUnionOperation",
    "CollectionPermission",
    "CreateOperation",
    "DeleteFieldOperation",
    "DeleteOperation",
    "DocumentSnapshot",
    "FieldCondition",
    "FieldValueOperation",
    "IncrementOperation",
    "PermissionConfig",
    "ReadOutcome",
    "ServerTimestampOperation",
    "UpdateOperation",
    "WriteOperation",
]
