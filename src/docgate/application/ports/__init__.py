"""Application ports - interfaces for external adapters."""

from docgate.application.ports.document_store import DocumentStore, Transaction, WriteBatch
from docgate.application.ports.permission_checker import PermissionChecker

__all__ = [
    "DocumentStore",
    "PermissionChecker",
    "Transaction",
    "WriteBatch",
]
