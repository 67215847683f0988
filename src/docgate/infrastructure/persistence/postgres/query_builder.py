"""SQL fragments for collection queries over the JSONB ``data`` column."""

from typing import Any

from psycopg.types.json import Jsonb

from docgate.application.dto.query import FilterOperator, OrderBy, QueryFilter, SortDirection
from docgate.domain.exceptions import ValidationError

_ORDERING = {
    FilterOperator.GT: ">",
    FilterOperator.GTE: ">=",
    FilterOperator.LT: "<",
    FilterOperator.LTE: "<=",
}

_LIST_OPERATORS = frozenset(
    {FilterOperator.IN, FilterOperator.NOT_IN, FilterOperator.ARRAY_CONTAINS_ANY}
)


def field_path(field: str) -> list[str]:
    """Dotted field path as the text[] operand of ``#>``."""
    parts = field.split(".")
    if any(not p for p in parts):
        raise ValidationError(f"Invalid field path: {field!r}")
    return parts


def jsonb_type(value: Any) -> str:
    """Name ``jsonb_typeof`` reports for a Python value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise ValidationError(f"Unsupported filter value type: {type(value).__name__}")


def build_filter_conditions(filters: list[QueryFilter]) -> tuple[list[str], list[object]]:
    """Build SQL AND conditions and params for query filters. Returns (conditions, params).

    Range comparisons only match values of the same JSON type as the operand,
    and ``!=`` / ``not-in`` skip documents that lack the field.
    """
    conditions: list[str] = []
    params: list[object] = []
    for f in filters:
        path = field_path(f.field)
        op = FilterOperator(f.operator)
        if op in _LIST_OPERATORS and not isinstance(f.value, (list, tuple)):
            raise ValidationError(f"Operator '{op}' requires a list value")

        if op == FilterOperator.EQ:
            conditions.append("data #> %s = %s")
            params.extend([path, Jsonb(f.value)])
        elif op == FilterOperator.NE:
            conditions.append("data #> %s IS NOT NULL AND data #> %s <> %s")
            params.extend([path, path, Jsonb(f.value)])
        elif op in _ORDERING:
            conditions.append(
                f"jsonb_typeof(data #> %s) = %s AND data #> %s {_ORDERING[op]} %s"
            )
            params.extend([path, jsonb_type(f.value), path, Jsonb(f.value)])
        elif op == FilterOperator.ARRAY_CONTAINS:
            conditions.append("jsonb_typeof(data #> %s) = 'array' AND data #> %s @> %s")
            params.extend([path, path, Jsonb([f.value])])
        elif op == FilterOperator.IN:
            conditions.append("data #> %s IN (SELECT jsonb_array_elements(%s))")
            params.extend([path, Jsonb(list(f.value))])
        elif op == FilterOperator.NOT_IN:
            conditions.append(
                "data #> %s IS NOT NULL "
                "AND data #> %s NOT IN (SELECT jsonb_array_elements(%s))"
            )
            params.extend([path, path, Jsonb(list(f.value))])
        elif op == FilterOperator.ARRAY_CONTAINS_ANY:
            conditions.append(
                "jsonb_typeof(data #> %s) = 'array' AND EXISTS ("
                "SELECT 1 FROM jsonb_array_elements(%s) AS v(elem) "
                "WHERE data #> %s @> jsonb_build_array(v.elem))"
            )
            params.extend([path, Jsonb(list(f.value)), path])
    return conditions, params


def build_query(
    collection_path: str,
    filters: list[QueryFilter],
    order_by: OrderBy | None = None,
    limit: int | None = None,
) -> tuple[str, list[object]]:
    """Full SELECT for a collection query. Returns (sql, params)."""
    conditions, filter_params = build_filter_conditions(filters)
    where = ["collection_path = %s", *conditions]
    params: list[object] = [collection_path, *filter_params]

    order = "path"
    if order_by is not None:
        order_path = field_path(order_by.field)
        # Documents without the ordering field are excluded.
        where.append("data #> %s IS NOT NULL")
        params.append(order_path)
        direction = "DESC" if SortDirection(order_by.direction) == SortDirection.DESC else "ASC"
        order = f"data #> %s {direction}, path"
        params.append(order_path)

    sql = (
        "SELECT path, data, create_time, update_time FROM document "
        f"WHERE {' AND '.join(where)} ORDER BY {order}"
    )
    if limit is not None:
        sql += " LIMIT %s"
        params.append(limit)
    return sql, params
