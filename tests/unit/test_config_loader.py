"""Unit tests for permission configuration loading."""

import json
from pathlib import Path

import pytest

from docgate.domain.exceptions import ConfigurationError
from docgate.domain.value_objects import Operation
from docgate.infrastructure.permission.config_loader import (
    load_permission_config,
    parse_permission_config,
)

CONFIG = {
    "collections": [
        {"collectionId": "users", "operations": ["read", "write"]},
        {
            "collectionId": "orders",
            "operations": ["query"],
            "conditions": [{"field": "status", "operator": "==", "value": "open"}],
        },
    ],
    "defaultAllow": True,
}


def test_parse_camel_case_document() -> None:
    config = parse_permission_config(json.dumps(CONFIG))

    assert config.default_allow is True
    users, orders = config.collections
    assert users.collection_id == "users"
    assert users.operations == frozenset({Operation.READ, Operation.WRITE})
    assert orders.conditions[0].field == "status"
    assert orders.conditions[0].value == "open"


def test_unknown_operation_rejected() -> None:
    raw = json.dumps({"collections": [{"collectionId": "users", "operations": ["admin"]}]})
    with pytest.raises(ConfigurationError):
        parse_permission_config(raw)


def test_malformed_json_rejected() -> None:
    with pytest.raises(ConfigurationError):
        parse_permission_config("{not json")


def test_duplicates_kept_in_order() -> None:
    raw = json.dumps(
        {
            "collections": [
                {"collectionId": "users", "operations": ["read"]},
                {"collectionId": "users", "operations": ["write"]},
            ]
        }
    )
    config = parse_permission_config(raw)
    assert [c.operations for c in config.collections] == [
        frozenset({Operation.READ}),
        frozenset({Operation.WRITE}),
    ]


def test_missing_config_denies_all() -> None:
    config = load_permission_config()
    assert config.collections == ()
    assert config.default_allow is False


def test_load_from_file(tmp_path: Path) -> None:
    path = tmp_path / "permissions.json"
    path.write_text(json.dumps(CONFIG), encoding="utf-8")
    config = load_permission_config(path)
    assert len(config.collections) == 2


def test_file_takes_precedence_over_inline(tmp_path: Path) -> None:
    path = tmp_path / "permissions.json"
    path.write_text(json.dumps({"defaultAllow": True}), encoding="utf-8")
    config = load_permission_config(path, raw_json=json.dumps({"defaultAllow": False}))
    assert config.default_allow is True


def test_load_inline_json() -> None:
    config = load_permission_config(raw_json=json.dumps(CONFIG))
    assert config.default_allow is True


def test_unreadable_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_permission_config(tmp_path / "missing.json")
