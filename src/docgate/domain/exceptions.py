"""Domain exceptions."""


class DocGateError(Exception):
    """Base exception for DocGate."""

    pass


class PermissionDenied(DocGateError):
    """Caller does not have permission for the requested operation on a path."""

    def __init__(self, operation: str, path: str, message: str | None = None) -> None:
        self.operation = operation
        self.path = path
        super().__init__(message or f"Access denied for {operation} operation on path: {path}")


class ConditionFailed(DocGateError):
    """Transaction condition evaluated to a falsy value."""

    def __init__(self, message: str = "Transaction condition failed") -> None:
        super().__init__(message)


class ConditionEvaluationError(DocGateError):
    """Transaction condition could not be parsed or evaluated."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Condition evaluation failed: {reason}")


class StoreError(DocGateError):
    """Read or commit failure reported by the document store."""

    pass


class DocumentNotFound(StoreError):
    """Requested document does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Document not found: {path}")


class TransactionContention(StoreError):
    """Transaction kept conflicting with concurrent writers and was given up."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"Transaction aborted after {attempts} attempts due to contention")


class ValidationError(DocGateError):
    """Validation failed for input data."""

    pass


class ConfigurationError(DocGateError):
    """Permission configuration is missing or malformed."""

    pass
