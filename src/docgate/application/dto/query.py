"""Query DTOs."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class FilterOperator(StrEnum):
    """Supported comparison operators for collection queries."""

    EQ = "=="
    NE = "!="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    ARRAY_CONTAINS = "array-contains"
    IN = "in"
    ARRAY_CONTAINS_ANY = "array-contains-any"
    NOT_IN = "not-in"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class QueryFilter:
    """One filter condition on a (dotted) field path."""

    field: str
    operator: FilterOperator
    value: Any = None


@dataclass(frozen=True)
class OrderBy:
    field: str
    direction: SortDirection = SortDirection.ASC
