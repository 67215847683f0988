"""Field-value operations - atomic per-field changes to existing documents."""

from dataclasses import dataclass
from typing import Any

from docgate.domain.value_objects import (
    DELETE_FIELD,
    SERVER_TIMESTAMP,
    ArrayRemove,
    ArrayUnion,
    FieldTransform,
    Increment,
)


@dataclass(frozen=True)
class IncrementOperation:
    document_path: str
    field: str
    increment_by: int | float

    type = "increment"

    def to_update(self) -> dict[str, FieldTransform]:
        return {self.field: Increment(self.increment_by)}


@dataclass(frozen=True)
class ArrayUnionOperation:
    document_path: str
    field: str
    elements: tuple[Any, ...]

    type = "arrayUnion"

    def to_update(self) -> dict[str, FieldTransform]:
        return {self.field: ArrayUnion(tuple(self.elements))}


@dataclass(frozen=True)
class ArrayRemoveOperation:
    document_path: str
    field: str
    elements: tuple[Any, ...]

    type = "arrayRemove"

    def to_update(self) -> dict[str, FieldTransform]:
        return {self.field: ArrayRemove(tuple(self.elements))}


@dataclass(frozen=True)
class ServerTimestampOperation:
    document_path: str
    fields: tuple[str, ...]

    type = "serverTimestamp"

    def to_update(self) -> dict[str, FieldTransform]:
        return {f: SERVER_TIMESTAMP for f in self.fields}


@dataclass(frozen=True)
class DeleteFieldOperation:
    document_path: str
    fields: tuple[str, ...]

    type = "deleteField"

    def to_update(self) -> dict[str, FieldTransform]:
        return {f: DELETE_FIELD for f in self.fields}


FieldValueOperation = (
    IncrementOperation
    | ArrayUnionOperation
    | ArrayRemoveOperation
    | ServerTimestampOperation
    | DeleteFieldOperation
)
