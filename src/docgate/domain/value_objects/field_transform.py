"""Field transforms - sentinel values placed in update data.

The store resolves them against the current document when the write is
applied, so the result does not depend on a value read earlier by the caller.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Increment:
    """Add ``amount`` to a numeric field (missing field counts as 0)."""

    amount: int | float


@dataclass(frozen=True)
class ArrayUnion:
    """Append elements not already present in an array field."""

    elements: tuple[Any, ...]


@dataclass(frozen=True)
class ArrayRemove:
    """Remove every occurrence of the elements from an array field."""

    elements: tuple[Any, ...]


@dataclass(frozen=True)
class ServerTimestamp:
    """Set the field to the commit time."""


@dataclass(frozen=True)
class DeleteField:
    """Remove the field from the document."""


SERVER_TIMESTAMP = ServerTimestamp()
DELETE_FIELD = DeleteField()

FieldTransform = Increment | ArrayUnion | ArrayRemove | ServerTimestamp | DeleteField
