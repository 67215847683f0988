"""Call boundary shared by resources: deadline, error mapping, response shaping."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import falcon
import falcon.asgi
import structlog
from pydantic import BaseModel

from docgate.application.result_aggregator import ResultAggregator
from docgate.domain.exceptions import (
    ConditionEvaluationError,
    ConditionFailed,
    DocGateError,
    DocumentNotFound,
    PermissionDenied,
    StoreError,
    TransactionContention,
    ValidationError,
)
from docgate.interfaces.api.schemas import parse_body

logger = structlog.get_logger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

# Checked in order; subclasses before their bases.
_ERROR_STATUS: list[tuple[type[DocGateError], str]] = [
    (PermissionDenied, falcon.HTTP_403),
    (DocumentNotFound, falcon.HTTP_404),
    (TransactionContention, falcon.HTTP_409),
    (ConditionFailed, falcon.HTTP_409),
    (ConditionEvaluationError, falcon.HTTP_422),
    (ValidationError, falcon.HTTP_400),
    (StoreError, falcon.HTTP_502),
]


def status_for(error: DocGateError) -> str:
    for error_type, status in _ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return falcon.HTTP_500


def send_error(resp: falcon.asgi.Response, status: str, message: str) -> None:
    resp.status = status
    resp.media = ResultAggregator.error(message)


async def run_operation(
    resp: falcon.asgi.Response,
    operation: Callable[[], Awaitable[T]],
    render: Callable[[T], Any],
    timeout: float,
    status: str = falcon.HTTP_200,
) -> None:
    """Await ``operation()`` under ``timeout`` and write the response.

    Domain errors become the error payload with a matching status. On expiry
    the operation is cancelled and 504 is returned.
    """
    try:
        async with asyncio.timeout(timeout):
            result = await operation()
    except TimeoutError:
        logger.warning("operation_timeout", timeout_seconds=timeout)
        send_error(resp, falcon.HTTP_504, f"Operation timed out after {timeout} seconds")
        return
    except DocGateError as e:
        send_error(resp, status_for(e), str(e))
        return
    resp.media = render(result)
    resp.status = status


async def read_body(req: falcon.asgi.Request, model: type[M]) -> M:
    """Decode and validate the JSON body. Raises ValidationError."""
    return parse_body(model, await req.get_media(default_when_empty=None))
