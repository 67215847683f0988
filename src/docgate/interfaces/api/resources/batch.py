"""Batch write and batch read resources."""

import falcon
import falcon.asgi

from docgate.application.result_aggregator import ResultAggregator
from docgate.application.use_cases.batch.execute_batch import BatchOperationExecutor
from docgate.domain.exceptions import ValidationError
from docgate.interfaces.api.resources.base import read_body, run_operation, send_error
from docgate.interfaces.api.schemas import BatchReadRequest, BatchWriteRequest


class BatchWriteResource:
    """POST /v1/batch/write - atomic batch of create/update/delete operations."""

    def __init__(self, executor: BatchOperationExecutor, timeout: float) -> None:
        self._executor = executor
        self._timeout = timeout

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            body = await read_body(req, BatchWriteRequest)
        except ValidationError as e:
            send_error(resp, falcon.HTTP_400, str(e))
            return

        operations = body.to_domain()
        await run_operation(
            resp,
            lambda: self._executor.execute_batch(operations),
            ResultAggregator.batch,
            self._timeout,
        )


class BatchReadResource:
    """POST /v1/batch/read - read several documents, results in request order."""

    def __init__(self, executor: BatchOperationExecutor, timeout: float) -> None:
        self._executor = executor
        self._timeout = timeout

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            body = await read_body(req, BatchReadRequest)
        except ValidationError as e:
            send_error(resp, falcon.HTTP_400, str(e))
            return

        await run_operation(
            resp,
            lambda: self._executor.execute_batch_read(body.document_paths),
            ResultAggregator.batch_read,
            self._timeout,
        )
