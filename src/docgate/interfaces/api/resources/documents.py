"""Document API resources - single documents and collection listings by path."""

import falcon
import falcon.asgi

from docgate.application.result_aggregator import ResultAggregator
from docgate.application.use_cases.collection.query_collection import ListDocumentsUseCase
from docgate.application.use_cases.document.create_document import CreateDocumentUseCase
from docgate.application.use_cases.document.delete_document import DeleteDocumentUseCase
from docgate.application.use_cases.document.get_document import GetDocumentUseCase
from docgate.application.use_cases.document.update_document import UpdateDocumentUseCase
from docgate.domain.exceptions import ValidationError
from docgate.domain.value_objects import is_document_path
from docgate.interfaces.api.resources.base import read_body, run_operation, send_error
from docgate.interfaces.api.schemas import DocumentDataRequest


class DocumentResource:
    """GET/POST/PATCH/DELETE /v1/documents/{path}.

    GET on a document path returns the document, on a collection path the
    documents of that collection. POST creates a document in a collection.
    """

    def __init__(
        self,
        get_document: GetDocumentUseCase,
        list_documents: ListDocumentsUseCase,
        create_document: CreateDocumentUseCase,
        update_document: UpdateDocumentUseCase,
        delete_document: DeleteDocumentUseCase,
        timeout: float,
    ) -> None:
        self._get_document = get_document
        self._list_documents = list_documents
        self._create_document = create_document
        self._update_document = update_document
        self._delete_document = delete_document
        self._timeout = timeout

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, path: str
    ) -> None:
        if is_document_path(path):
            await run_operation(
                resp,
                lambda: self._get_document.execute(path),
                ResultAggregator.document,
                self._timeout,
            )
        else:
            await run_operation(
                resp,
                lambda: self._list_documents.execute(path),
                ResultAggregator.documents,
                self._timeout,
            )

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, path: str
    ) -> None:
        """Create a document in collection ``path``; body ``{"data": {...}, "documentId"?}``."""
        try:
            body = await read_body(req, DocumentDataRequest)
        except ValidationError as e:
            send_error(resp, falcon.HTTP_400, str(e))
            return

        await run_operation(
            resp,
            lambda: self._create_document.execute(path, body.data, body.document_id),
            ResultAggregator.document,
            self._timeout,
            status=falcon.HTTP_201,
        )

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, path: str
    ) -> None:
        """Merge ``data`` into document ``path``; keys may be dotted field paths."""
        try:
            body = await read_body(req, DocumentDataRequest)
        except ValidationError as e:
            send_error(resp, falcon.HTTP_400, str(e))
            return

        await run_operation(
            resp,
            lambda: self._update_document.execute(path, body.data),
            ResultAggregator.document,
            self._timeout,
        )

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, path: str
    ) -> None:
        await run_operation(
            resp,
            lambda: self._delete_document.execute(path),
            lambda _: ResultAggregator.deleted(path),
            self._timeout,
        )
