"""Collection discovery and query resources."""

import falcon
import falcon.asgi

from docgate.application.result_aggregator import ResultAggregator
from docgate.application.use_cases.collection.list_collections import (
    ListCollectionsUseCase,
    ListSubcollectionsUseCase,
)
from docgate.application.use_cases.collection.query_collection import QueryCollectionUseCase
from docgate.domain.exceptions import ValidationError
from docgate.interfaces.api.resources.base import read_body, run_operation, send_error
from docgate.interfaces.api.schemas import QueryRequest


class CollectionsResource:
    """GET /v1/collections - root collections the caller may read."""

    def __init__(self, list_collections: ListCollectionsUseCase, timeout: float) -> None:
        self._list_collections = list_collections
        self._timeout = timeout

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        await run_operation(
            resp,
            self._list_collections.execute,
            ResultAggregator.collections,
            self._timeout,
        )


class SubcollectionsResource:
    """GET /v1/subcollections/{path} - collections nested under a document."""

    def __init__(self, list_subcollections: ListSubcollectionsUseCase, timeout: float) -> None:
        self._list_subcollections = list_subcollections
        self._timeout = timeout

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, path: str
    ) -> None:
        await run_operation(
            resp,
            lambda: self._list_subcollections.execute(path),
            ResultAggregator.collections,
            self._timeout,
        )


class QueryResource:
    """POST /v1/query/{path} - filter, order and limit a collection."""

    def __init__(self, query_collection: QueryCollectionUseCase, timeout: float) -> None:
        self._query_collection = query_collection
        self._timeout = timeout

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, path: str
    ) -> None:
        try:
            body = await read_body(req, QueryRequest)
        except ValidationError as e:
            send_error(resp, falcon.HTTP_400, str(e))
            return

        await run_operation(
            resp,
            lambda: self._query_collection.execute(
                path, body.query_filters(), body.ordering(), body.limit
            ),
            ResultAggregator.documents,
            self._timeout,
        )
