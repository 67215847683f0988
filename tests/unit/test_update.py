"""Unit tests for set/update application and field transforms."""

from datetime import UTC, datetime

from docgate.domain.services import apply_update, resolve_set
from docgate.domain.value_objects import (
    DELETE_FIELD,
    SERVER_TIMESTAMP,
    ArrayRemove,
    ArrayUnion,
    Increment,
)

NOW = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)


def test_update_merges_top_level_fields() -> None:
    current = {"name": "Ada", "age": 36}
    result = apply_update(current, {"age": 37, "city": "London"}, NOW)
    assert result == {"name": "Ada", "age": 37, "city": "London"}
    assert current == {"name": "Ada", "age": 36}


def test_update_dotted_path_creates_intermediate_maps() -> None:
    result = apply_update({"name": "Ada"}, {"address.city": "London"}, NOW)
    assert result == {"name": "Ada", "address": {"city": "London"}}


def test_update_dotted_path_keeps_sibling_fields() -> None:
    result = apply_update({"address": {"city": "Paris", "zip": "75001"}}, {"address.city": "Lyon"}, NOW)
    assert result == {"address": {"city": "Lyon", "zip": "75001"}}


def test_increment() -> None:
    assert apply_update({"n": 5}, {"n": Increment(3)}, NOW) == {"n": 8}
    assert apply_update({}, {"n": Increment(2.5)}, NOW) == {"n": 2.5}
    assert apply_update({"n": "text"}, {"n": Increment(1)}, NOW) == {"n": 1}
    assert apply_update({"n": True}, {"n": Increment(1)}, NOW) == {"n": 1}


def test_array_union_appends_missing_elements_only() -> None:
    result = apply_update({"tags": ["a", "b"]}, {"tags": ArrayUnion(("b", "c", "c"))}, NOW)
    assert result == {"tags": ["a", "b", "c"]}
    assert apply_update({}, {"tags": ArrayUnion(("x",))}, NOW) == {"tags": ["x"]}


def test_array_remove_removes_every_occurrence() -> None:
    result = apply_update({"tags": ["a", "b", "a", "c"]}, {"tags": ArrayRemove(("a", "z"))}, NOW)
    assert result == {"tags": ["b", "c"]}
    assert apply_update({"tags": 3}, {"tags": ArrayRemove(("a",))}, NOW) == {"tags": []}


def test_server_timestamp_is_iso_string() -> None:
    result = apply_update({}, {"updatedAt": SERVER_TIMESTAMP}, NOW)
    assert result == {"updatedAt": "2026-03-01T09:30:00+00:00"}


def test_delete_field() -> None:
    assert apply_update({"a": 1, "b": 2}, {"a": DELETE_FIELD}, NOW) == {"b": 2}
    assert apply_update({"a": {"x": 1, "y": 2}}, {"a.x": DELETE_FIELD}, NOW) == {"a": {"y": 2}}


def test_delete_missing_field_is_noop() -> None:
    assert apply_update({"b": 2}, {"a": DELETE_FIELD}, NOW) == {"b": 2}
    assert apply_update({"b": 2}, {"a.x": DELETE_FIELD}, NOW) == {"b": 2}


def test_resolve_set_resolves_nested_transforms() -> None:
    data = {"count": Increment(1), "meta": {"createdAt": SERVER_TIMESTAMP, "gone": DELETE_FIELD}}
    assert resolve_set(data, NOW) == {
        "count": 1,
        "meta": {"createdAt": "2026-03-01T09:30:00+00:00"},
    }


def test_resolve_set_keeps_dotted_keys_literal() -> None:
    assert resolve_set({"a.b": 1}, NOW) == {"a.b": 1}
