"""Falcon ASGI application."""

from typing import Any

import falcon
import falcon.asgi
import structlog
from falcon.asgi import App

from docgate.application.result_aggregator import ResultAggregator
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

logger = structlog.get_logger(__name__)


def create_app(
    *,
    health_resource: HealthResource,
    batch_write_resource: BatchWriteResource,
    batch_read_resource: BatchReadResource,
    transaction_resource: TransactionResource,
    field_values_resource: FieldValuesResource,
    document_resource: DocumentResource,
    collections_resource: CollectionsResource,
    subcollections_resource: SubcollectionsResource,
    query_resource: QueryResource,
    middleware: list[Any] | None = None,
    debug: bool = False,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])

    async def handle_http_error(req, resp, ex: falcon.HTTPError, params):
        resp.status = ex.status
        resp.media = ResultAggregator.error(ex.description or ex.title)

    async def handle_unexpected(req, resp, ex: Exception, params):
        logger.error("unhandled_exception", method=req.method, path=req.path, exc_info=ex)
        resp.status = falcon.HTTP_500
        resp.media = ResultAggregator.error(str(ex) if debug else "Internal server error")

    app.add_error_handler(Exception, handle_unexpected)
    app.add_error_handler(falcon.HTTPError, handle_http_error)

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/batch/write", batch_write_resource)
    app.add_route("/v1/batch/read", batch_read_resource)
    app.add_route("/v1/transactions", transaction_resource)
    app.add_route("/v1/field-values", field_values_resource)
    app.add_route("/v1/collections", collections_resource)
    app.add_route("/v1/query/{path:path}", query_resource)
    app.add_route("/v1/documents/{path:path}", document_resource)
    app.add_route("/v1/subcollections/{path:path}", subcollections_resource)
    return app
