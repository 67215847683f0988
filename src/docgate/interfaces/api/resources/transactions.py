"""Transaction resource."""

import falcon
import falcon.asgi

from docgate.application.result_aggregator import ResultAggregator
from docgate.application.use_cases.transaction.run_transaction import TransactionOrchestrator
from docgate.domain.exceptions import ValidationError
from docgate.interfaces.api.resources.base import read_body, run_operation, send_error
from docgate.interfaces.api.schemas import TransactionRequest


class TransactionResource:
    """POST /v1/transactions - reads, optional condition, writes; all or nothing.

    A condition that evaluates falsy returns 409, one that cannot be
    evaluated returns 422. Neither commits anything.
    """

    def __init__(self, orchestrator: TransactionOrchestrator, timeout: float) -> None:
        self._orchestrator = orchestrator
        self._timeout = timeout

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            body = await read_body(req, TransactionRequest)
        except ValidationError as e:
            send_error(resp, falcon.HTTP_400, str(e))
            return

        spec = body.to_domain()
        await run_operation(
            resp,
            lambda: self._orchestrator.run_transaction(spec),
            ResultAggregator.transaction,
            self._timeout,
        )
