"""Read-decide-write transaction use case."""

from dataclasses import dataclass, field

import structlog

from docgate.application.authorization import Authorizer
from docgate.application.dto.results import TransactionResult, WriteResult
from docgate.application.ports import DocumentStore, PermissionChecker, Transaction
from docgate.application.write_operations import apply_write
from docgate.domain.entities import ReadOutcome, WriteOperation
from docgate.domain.exceptions import ConditionFailed
from docgate.domain.services import Condition, compile_condition
from docgate.domain.services.condition import DEFAULT_MAX_LENGTH

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TransactionSpec:
    """Paths to read, writes to apply, and an optional gating condition."""

    reads: list[str] = field(default_factory=list)
    operations: list[WriteOperation] = field(default_factory=list)
    condition_script: str | None = None


class TransactionOrchestrator:
    """Runs reads, the optional condition and writes as one store transaction."""

    def __init__(
        self,
        document_store: DocumentStore,
        permission_checker: PermissionChecker,
        condition_max_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        self._store = document_store
        self._authorizer = Authorizer(permission_checker)
        self._condition_max_length = condition_max_length

    async def run_transaction(self, spec: TransactionSpec) -> TransactionResult:
        """Authorize, then hand the read-decide-write callback to the store.

        Raises PermissionDenied before the transaction starts, ConditionFailed
        or ConditionEvaluationError from inside it (nothing is committed), and
        StoreError for store failures.
        """
        self._authorizer.require_reads(spec.reads)
        self._authorizer.require_writes(spec.operations)
        condition = (
            compile_condition(spec.condition_script, self._condition_max_length)
            if spec.condition_script
            else None
        )

        async def callback(transaction: Transaction) -> TransactionResult:
            # Re-run from scratch on contention retries; no side effects here.
            read_results = await self._read_phase(transaction, spec.reads)
            if condition is not None:
                self._decide(condition, read_results)
            write_results = self._write_phase(transaction, spec.operations)
            return TransactionResult(read_results=read_results, write_results=write_results)

        result = await self._store.run_transaction(callback)
        logger.info(
            "transaction_committed",
            read_count=len(result.read_results),
            write_count=len(result.write_results),
            conditional=condition is not None,
        )
        return result

    async def _read_phase(
        self, transaction: Transaction, paths: list[str]
    ) -> dict[str, ReadOutcome]:
        read_results: dict[str, ReadOutcome] = {}
        for path in paths:
            snapshot = await transaction.get(self._store.document(path))
            read_results[path] = ReadOutcome(
                path=path,
                exists=snapshot.exists,
                data=snapshot.data if snapshot.exists else None,
            )
        return read_results

    @staticmethod
    def _decide(condition: Condition, read_results: dict[str, ReadOutcome]) -> None:
        binding = {
            path: {"exists": outcome.exists, "data": outcome.data}
            for path, outcome in read_results.items()
        }
        if not condition.evaluate(binding):
            raise ConditionFailed()

    def _write_phase(
        self, transaction: Transaction, operations: list[WriteOperation]
    ) -> list[WriteResult]:
        return [apply_write(transaction, self._store, op) for op in operations]
