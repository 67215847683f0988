"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from docgate.application.use_cases.batch.execute_batch import BatchOperationExecutor
from docgate.application.use_cases.collection.list_collections import (
    ListCollectionsUseCase,
    ListSubcollectionsUseCase,
)
from docgate.application.use_cases.collection.query_collection import (
    ListDocumentsUseCase,
    QueryCollectionUseCase,
)
from docgate.application.use_cases.document.create_document import CreateDocumentUseCase
from docgate.application.use_cases.document.delete_document import DeleteDocumentUseCase
from docgate.application.use_cases.document.get_document import GetDocumentUseCase
from docgate.application.use_cases.document.update_document import UpdateDocumentUseCase
from docgate.application.use_cases.field_value.apply_field_values import FieldValueBatchUseCase
from docgate.application.use_cases.transaction.run_transaction import TransactionOrchestrator
from docgate.interfaces.api.app import create_app
from docgate.interfaces.api.middleware.cors import CORSMiddleware
from docgate.interfaces.api.resources.batch import BatchReadResource, BatchWriteResource
from docgate.interfaces.api.resources.collections import (
    CollectionsResource,
    QueryResource,
    SubcollectionsResource,
)
from docgate.interfaces.api.resources.documents import DocumentResource
from docgate.interfaces.api.resources.field_values import FieldValuesResource
from docgate.interfaces.api.resources.health import HealthResource
from docgate.interfaces.api.resources.transactions import TransactionResource

TIMEOUT = 1.0


@pytest.fixture
def app(store, permissions):
    """Falcon ASGI app over the in-memory store."""
    executor = BatchOperationExecutor(store, permissions)
    return create_app(
        health_resource=HealthResource(),
        batch_write_resource=BatchWriteResource(executor, TIMEOUT),
        batch_read_resource=BatchReadResource(executor, TIMEOUT),
        transaction_resource=TransactionResource(
            TransactionOrchestrator(store, permissions), TIMEOUT
        ),
        field_values_resource=FieldValuesResource(
            FieldValueBatchUseCase(store, permissions), TIMEOUT
        ),
        document_resource=DocumentResource(
            get_document=GetDocumentUseCase(store, permissions),
            list_documents=ListDocumentsUseCase(store, permissions),
            create_document=CreateDocumentUseCase(store, permissions),
            update_document=UpdateDocumentUseCase(store, permissions),
            delete_document=DeleteDocumentUseCase(store, permissions),
            timeout=TIMEOUT,
        ),
        collections_resource=CollectionsResource(
            ListCollectionsUseCase(store, permissions), TIMEOUT
        ),
        subcollections_resource=SubcollectionsResource(
            ListSubcollectionsUseCase(store, permissions), TIMEOUT
        ),
        query_resource=QueryResource(QueryCollectionUseCase(store, permissions), TIMEOUT),
        middleware=[CORSMiddleware(["https://app.example.com"])],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
