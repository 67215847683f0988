"""Operation result DTOs."""

from dataclasses import dataclass

from docgate.domain.entities import FieldValueOperation, ReadOutcome


@dataclass(frozen=True)
class WriteResult:
    """Outcome of one applied write; ``id`` is set for creates."""

    type: str
    path: str
    id: str | None = None


@dataclass(frozen=True)
class BatchResult:
    operations: list[WriteResult]

    @property
    def operation_count(self) -> int:
        return len(self.operations)


@dataclass(frozen=True)
class TransactionResult:
    read_results: dict[str, ReadOutcome]
    write_results: list[WriteResult]


@dataclass(frozen=True)
class FieldValueBatchResult:
    operations: list[FieldValueOperation]

    @property
    def operation_count(self) -> int:
        return len(self.operations)
