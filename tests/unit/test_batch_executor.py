"""Unit tests for BatchOperationExecutor."""

import pytest

from docgate.application.use_cases.batch.execute_batch import BatchOperationExecutor
from docgate.domain.entities import CreateOperation, DeleteOperation, UpdateOperation
from docgate.domain.exceptions import DocumentNotFound, PermissionDenied, StoreError

from tests.conftest import InMemoryDocumentStore


@pytest.fixture
def executor(store, permissions) -> BatchOperationExecutor:
    return BatchOperationExecutor(store, permissions)


@pytest.mark.asyncio
async def test_batch_applies_all_operations_in_one_commit(
    executor: BatchOperationExecutor, store: InMemoryDocumentStore
) -> None:
    store.seed("users/u1", {"name": "Ada", "age": 36})
    store.seed("users/u2", {"name": "Bob"})

    result = await executor.execute_batch(
        [
            CreateOperation("users", {"name": "Cy"}, document_id="u3"),
            UpdateOperation("users/u1", {"age": 37}),
            DeleteOperation("users/u2"),
        ]
    )

    assert result.operation_count == 3
    assert [(r.type, r.id, r.path) for r in result.operations] == [
        ("create", "u3", "users/u3"),
        ("update", None, "users/u1"),
        ("delete", None, "users/u2"),
    ]
    assert store.batch_count == 1
    assert store.commit_count == 1
    assert store.data("users/u3") == {"name": "Cy"}
    assert store.data("users/u1") == {"name": "Ada", "age": 37}
    assert "users/u2" not in store.docs


@pytest.mark.asyncio
async def test_create_without_id_reports_generated_id(
    executor: BatchOperationExecutor, store: InMemoryDocumentStore
) -> None:
    result = await executor.execute_batch([CreateOperation("users/u1/orders", {"total": 3})])

    (created,) = result.operations
    assert created.id is not None and len(created.id) == 20
    assert created.path == f"users/u1/orders/{created.id}"
    assert store.data(created.path) == {"total": 3}


@pytest.mark.parametrize("denied_at", [0, 1, 2])
@pytest.mark.asyncio
async def test_denied_operation_at_any_position_touches_nothing(
    executor: BatchOperationExecutor, store: InMemoryDocumentStore, denied_at: int
) -> None:
    operations = [
        CreateOperation("users", {"n": 1}, document_id="a"),
        UpdateOperation("accounts/x", {"n": 2}),
        CreateOperation("users", {"n": 3}, document_id="b"),
    ]
    operations[denied_at] = CreateOperation("secrets", {"n": 0}, document_id="s")

    with pytest.raises(PermissionDenied) as exc_info:
        await executor.execute_batch(operations)

    assert exc_info.value.operation == "create"
    assert exc_info.value.path == "secrets"
    assert str(exc_info.value) == "Access denied for create operation on path: secrets"
    assert not store.touched
    assert store.docs == {}


@pytest.mark.asyncio
async def test_delete_requires_delete_permission(
    executor: BatchOperationExecutor, store: InMemoryDocumentStore
) -> None:
    """accounts grants write but not delete."""
    with pytest.raises(PermissionDenied) as exc_info:
        await executor.execute_batch([DeleteOperation("accounts/a1")])

    assert exc_info.value.operation == "delete"
    assert exc_info.value.path == "accounts/a1"
    assert not store.touched


@pytest.mark.asyncio
async def test_scope_is_root_collection_of_nested_path(
    executor: BatchOperationExecutor, store: InMemoryDocumentStore
) -> None:
    with pytest.raises(PermissionDenied):
        await executor.execute_batch([UpdateOperation("logs/l1/entries/e1", {"x": 1})])
    await executor.execute_batch([CreateOperation("users/u1/orders", {}, document_id="o1")])
    assert "users/u1/orders/o1" in store.docs


@pytest.mark.asyncio
async def test_empty_batch_succeeds_without_store(
    executor: BatchOperationExecutor, store: InMemoryDocumentStore
) -> None:
    result = await executor.execute_batch([])
    assert result.operation_count == 0
    assert not store.touched


@pytest.mark.asyncio
async def test_update_of_missing_document_commits_nothing(
    executor: BatchOperationExecutor, store: InMemoryDocumentStore
) -> None:
    with pytest.raises(DocumentNotFound):
        await executor.execute_batch(
            [
                CreateOperation("users", {"n": 1}, document_id="a"),
                UpdateOperation("users/missing", {"n": 2}),
            ]
        )
    assert store.docs == {}


@pytest.mark.asyncio
async def test_commit_failure_propagates(
    executor: BatchOperationExecutor, store: InMemoryDocumentStore
) -> None:
    store.fail_commit = StoreError("connection reset")
    with pytest.raises(StoreError, match="connection reset"):
        await executor.execute_batch([CreateOperation("users", {}, document_id="a")])
    assert store.docs == {}


@pytest.mark.asyncio
async def test_batch_read_preserves_input_order(
    executor: BatchOperationExecutor, store: InMemoryDocumentStore
) -> None:
    store.seed("users/a", {"n": 1})
    store.seed("logs/c", {"n": 3})
    # The first read completes last.
    store.read_delays = {"users/a": 0.05, "users/b": 0.02}

    outcomes = await executor.execute_batch_read(["users/a", "users/b", "logs/c"])

    assert [o.path for o in outcomes] == ["users/a", "users/b", "logs/c"]
    assert [o.exists for o in outcomes] == [True, False, True]
    assert outcomes[0].data == {"n": 1}
    assert outcomes[1].data is None


@pytest.mark.asyncio
async def test_batch_read_denied_path_reads_nothing(
    executor: BatchOperationExecutor, store: InMemoryDocumentStore
) -> None:
    with pytest.raises(PermissionDenied) as exc_info:
        await executor.execute_batch_read(["users/a", "secrets/s1"])

    assert exc_info.value.operation == "read"
    assert exc_info.value.path == "secrets/s1"
    assert store.gets == []


@pytest.mark.asyncio
async def test_batch_read_empty() -> None:
    store = InMemoryDocumentStore()
    executor = BatchOperationExecutor(store, permission_checker=None)
    assert await executor.execute_batch_read([]) == []
