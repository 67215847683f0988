"""Application entry point and composition root."""

import functools

from falcon.asgi import App

from docgate import __version__
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
from docgate.config import Settings, get_settings
from docgate.infrastructure.logging import configure_logging
from docgate.infrastructure.permission.config_loader import load_permission_config
from docgate.infrastructure.permission.permission_manager import PermissionManager
from docgate.infrastructure.persistence.postgres.connection import check_connection, create_pool
from docgate.infrastructure.persistence.postgres.document_store import PostgresDocumentStore
from docgate.interfaces.api.app import create_app
from docgate.interfaces.api.middleware.cors import CORSMiddleware
from docgate.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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


def create_docgate_app(settings: Settings | None = None) -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)

    permission_manager = PermissionManager(
        load_permission_config(
            settings.permission_config_path,
            settings.permission_config_json,
        )
    )
    pool = create_pool(
        settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )
    store = PostgresDocumentStore(pool, max_attempts=settings.transaction_max_attempts)
    timeout = settings.operation_timeout_seconds

    executor = BatchOperationExecutor(store, permission_manager)
    orchestrator = TransactionOrchestrator(
        store,
        permission_manager,
        condition_max_length=settings.condition_max_length,
    )

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    return create_app(
        health_resource=HealthResource(functools.partial(check_connection, pool)),
        batch_write_resource=BatchWriteResource(executor, timeout),
        batch_read_resource=BatchReadResource(executor, timeout),
        transaction_resource=TransactionResource(orchestrator, timeout),
        field_values_resource=FieldValuesResource(
            FieldValueBatchUseCase(store, permission_manager), timeout
        ),
        document_resource=DocumentResource(
            get_document=GetDocumentUseCase(store, permission_manager),
            list_documents=ListDocumentsUseCase(store, permission_manager),
            create_document=CreateDocumentUseCase(store, permission_manager),
            update_document=UpdateDocumentUseCase(store, permission_manager),
            delete_document=DeleteDocumentUseCase(store, permission_manager),
            timeout=timeout,
        ),
        collections_resource=CollectionsResource(
            ListCollectionsUseCase(store, permission_manager), timeout
        ),
        subcollections_resource=SubcollectionsResource(
            ListSubcollectionsUseCase(store, permission_manager), timeout
        ),
        query_resource=QueryResource(
            QueryCollectionUseCase(store, permission_manager), timeout
        ),
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
        ],
        debug=settings.debug,
    )


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    app = create_docgate_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


def main() -> None:
    """CLI entry point."""
    print(f"DocGate v{__version__}")
    run_server()
