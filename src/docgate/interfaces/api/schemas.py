"""Request bodies accepted by the HTTP API.

Keys are camelCase on the wire (``collectionPath``, ``conditionScript``);
snake_case names are accepted too.
"""

from typing import Annotated, Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from docgate.application.dto.query import FilterOperator, OrderBy, QueryFilter, SortDirection
from docgate.application.use_cases.transaction.run_transaction import TransactionSpec
from docgate.domain.entities import (
    ArrayRemoveOperation,
    ArrayUnionOperation,
    CreateOperation,
    DeleteFieldOperation,
    DeleteOperation,
    FieldValueOperation,
    IncrementOperation,
    ServerTimestampOperation,
    UpdateOperation,
    WriteOperation,
)
from docgate.domain.exceptions import ValidationError

M = TypeVar("M", bound=BaseModel)


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateOperationModel(RequestModel):
    type: Literal["create"]
    collection_path: str = Field(alias="collectionPath", min_length=1)
    document_id: str | None = Field(default=None, alias="documentId")
    data: dict[str, Any] = Field(default_factory=dict)

    def to_domain(self) -> CreateOperation:
        return CreateOperation(
            collection_path=self.collection_path,
            data=self.data,
            document_id=self.document_id,
        )


class UpdateOperationModel(RequestModel):
    type: Literal["update"]
    document_path: str = Field(alias="documentPath", min_length=1)
    data: dict[str, Any]

    def to_domain(self) -> UpdateOperation:
        return UpdateOperation(document_path=self.document_path, data=self.data)


class DeleteOperationModel(RequestModel):
    type: Literal["delete"]
    document_path: str = Field(alias="documentPath", min_length=1)

    def to_domain(self) -> DeleteOperation:
        return DeleteOperation(document_path=self.document_path)


WriteOperationModel = Annotated[
    CreateOperationModel | UpdateOperationModel | DeleteOperationModel,
    Field(discriminator="type"),
]


class BatchWriteRequest(RequestModel):
    operations: list[WriteOperationModel]

    def to_domain(self) -> list[WriteOperation]:
        return [op.to_domain() for op in self.operations]


class BatchReadRequest(RequestModel):
    document_paths: list[str] = Field(alias="documentPaths")


class TransactionRequest(RequestModel):
    reads: list[str] = Field(default_factory=list)
    operations: list[WriteOperationModel] = Field(default_factory=list)
    condition_script: str | None = Field(default=None, alias="conditionScript")

    def to_domain(self) -> TransactionSpec:
        return TransactionSpec(
            reads=list(self.reads),
            operations=[op.to_domain() for op in self.operations],
            condition_script=self.condition_script,
        )


class IncrementModel(RequestModel):
    type: Literal["increment"]
    document_path: str = Field(alias="documentPath", min_length=1)
    field: str = Field(min_length=1)
    increment_by: int | float = Field(alias="incrementBy")

    def to_domain(self) -> IncrementOperation:
        return IncrementOperation(self.document_path, self.field, self.increment_by)


class ArrayUnionModel(RequestModel):
    type: Literal["arrayUnion"]
    document_path: str = Field(alias="documentPath", min_length=1)
    field: str = Field(min_length=1)
    elements: list[Any]

    def to_domain(self) -> ArrayUnionOperation:
        return ArrayUnionOperation(self.document_path, self.field, tuple(self.elements))


class ArrayRemoveModel(RequestModel):
    type: Literal["arrayRemove"]
    document_path: str = Field(alias="documentPath", min_length=1)
    field: str = Field(min_length=1)
    elements: list[Any]

    def to_domain(self) -> ArrayRemoveOperation:
        return ArrayRemoveOperation(self.document_path, self.field, tuple(self.elements))


class ServerTimestampModel(RequestModel):
    type: Literal["serverTimestamp"]
    document_path: str = Field(alias="documentPath", min_length=1)
    fields: list[str]

    def to_domain(self) -> ServerTimestampOperation:
        return ServerTimestampOperation(self.document_path, tuple(self.fields))


class DeleteFieldModel(RequestModel):
    type: Literal["deleteField"]
    document_path: str = Field(alias="documentPath", min_length=1)
    fields: list[str]

    def to_domain(self) -> DeleteFieldOperation:
        return DeleteFieldOperation(self.document_path, tuple(self.fields))


FieldValueOperationModel = Annotated[
    IncrementModel | ArrayUnionModel | ArrayRemoveModel | ServerTimestampModel | DeleteFieldModel,
    Field(discriminator="type"),
]


class FieldValueBatchRequest(RequestModel):
    operations: list[FieldValueOperationModel]

    def to_domain(self) -> list[FieldValueOperation]:
        return [op.to_domain() for op in self.operations]


class DocumentDataRequest(RequestModel):
    data: dict[str, Any]
    document_id: str | None = Field(default=None, alias="documentId")


class FilterModel(RequestModel):
    field: str = Field(min_length=1)
    operator: FilterOperator
    value: Any = None


class OrderByModel(RequestModel):
    field: str = Field(min_length=1)
    direction: SortDirection = SortDirection.ASC


class QueryRequest(RequestModel):
    filters: list[FilterModel] = Field(default_factory=list)
    order_by: OrderByModel | None = Field(default=None, alias="orderBy")
    limit: int | None = None

    def query_filters(self) -> list[QueryFilter]:
        return [QueryFilter(f.field, f.operator, f.value) for f in self.filters]

    def ordering(self) -> OrderBy | None:
        if self.order_by is None:
            return None
        return OrderBy(self.order_by.field, self.order_by.direction)


def parse_body(model: type[M], body: Any) -> M:
    """Validate a decoded JSON body. Raises ValidationError with pydantic's details."""
    if body is None:
        body = {}
    try:
        return model.model_validate(body)
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(f"Invalid request body: {details}") from e
