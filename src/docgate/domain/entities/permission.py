"""Permission configuration entities - which operations are granted per collection."""

from dataclasses import dataclass
from typing import Any

from docgate.domain.value_objects import Operation


@dataclass(frozen=True)
class FieldCondition:
    """Document-level condition attached to a collection permission.

    Accepted in configuration for compatibility; not evaluated by the
    permission check.
    """

    field: str
    operator: str
    value: Any = None


@dataclass(frozen=True)
class CollectionPermission:
    """Operations granted on one root collection."""

    collection_id: str
    operations: frozenset[Operation]
    conditions: tuple[FieldCondition, ...] = ()


@dataclass(frozen=True)
class PermissionConfig:
    """Ordered collection permissions plus the fallback for unlisted collections."""

    collections: tuple[CollectionPermission, ...] = ()
    default_allow: bool = False
