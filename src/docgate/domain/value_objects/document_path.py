"""Slash-delimited document and collection paths."""

import secrets
import string
from dataclasses import dataclass

from docgate.domain.exceptions import ValidationError

PATH_SEPARATOR = "/"

_AUTO_ID_ALPHABET = string.ascii_letters + string.digits
AUTO_ID_LENGTH = 20


def root_collection(path: str) -> str:
    """Authorization scope of a path: everything before the first separator.

    No normalization is applied. ``"/users"`` resolves to ``""`` and
    ``"users//x"`` resolves to ``"users"``.
    """
    return path.split(PATH_SEPARATOR, 1)[0]


def segments(path: str) -> list[str]:
    return path.split(PATH_SEPARATOR)


def is_collection_path(path: str) -> bool:
    """Collections sit at odd depths: ``users``, ``users/u1/orders``."""
    return len(segments(path)) % 2 == 1


def is_document_path(path: str) -> bool:
    return len(segments(path)) % 2 == 0


def parent_path(path: str) -> str:
    """Path one level up, or ``""`` for a root collection."""
    head, _, _ = path.rpartition(PATH_SEPARATOR)
    return head


def last_segment(path: str) -> str:
    return path.rpartition(PATH_SEPARATOR)[2]


def generate_document_id() -> str:
    """Random 20-character alphanumeric id for documents created without one."""
    return "".join(secrets.choice(_AUTO_ID_ALPHABET) for _ in range(AUTO_ID_LENGTH))


@dataclass(frozen=True)
class DocumentRef:
    """Reference to a document by full path."""

    path: str

    @property
    def id(self) -> str:
        return last_segment(self.path)

    @property
    def collection_path(self) -> str:
        return parent_path(self.path)


@dataclass(frozen=True)
class CollectionRef:
    """Reference to a collection by full path."""

    path: str

    @property
    def id(self) -> str:
        return last_segment(self.path)

    def document(self, document_id: str | None = None) -> DocumentRef:
        """Reference a document in this collection, generating an id when omitted.

        The generated id is fixed at reference time so the caller can report it
        before the write is committed.
        """
        if document_id is None:
            document_id = generate_document_id()
        if not document_id or PATH_SEPARATOR in document_id:
            raise ValidationError(f"Invalid document id: {document_id!r}")
        return DocumentRef(f"{self.path}{PATH_SEPARATOR}{document_id}")


def _check_segments(path: str) -> None:
    if not path or any(not part for part in segments(path)):
        raise ValidationError(f"Invalid path: {path!r}")


def require_collection_path(path: str) -> str:
    """Return ``path`` if it names a collection, else raise ValidationError."""
    _check_segments(path)
    if not is_collection_path(path):
        raise ValidationError(f"Not a collection path: {path}")
    return path


def require_document_path(path: str) -> str:
    """Return ``path`` if it names a document, else raise ValidationError."""
    _check_segments(path)
    if not is_document_path(path):
        raise ValidationError(f"Not a document path: {path}")
    return path
