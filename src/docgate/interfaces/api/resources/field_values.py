"""Field-value batch resource."""

import falcon
import falcon.asgi

from docgate.application.result_aggregator import ResultAggregator
from docgate.application.use_cases.field_value.apply_field_values import FieldValueBatchUseCase
from docgate.domain.exceptions import ValidationError
from docgate.interfaces.api.resources.base import read_body, run_operation, send_error
from docgate.interfaces.api.schemas import FieldValueBatchRequest


class FieldValuesResource:
    """POST /v1/field-values - increment, arrayUnion, arrayRemove, serverTimestamp, deleteField."""

    def __init__(self, apply_field_values: FieldValueBatchUseCase, timeout: float) -> None:
        self._apply_field_values = apply_field_values
        self._timeout = timeout

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            body = await read_body(req, FieldValueBatchRequest)
        except ValidationError as e:
            send_error(resp, falcon.HTTP_400, str(e))
            return

        operations = body.to_domain()
        await run_operation(
            resp,
            lambda: self._apply_field_values.execute(operations),
            ResultAggregator.field_values,
            self._timeout,
        )
