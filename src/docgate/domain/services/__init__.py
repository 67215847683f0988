"""Pure domain services."""

from docgate.domain.services.condition import Condition, compile_condition
from docgate.domain.services.update import apply_update, resolve_set

__all__ = [
    "Condition",
    "apply_update",
    "compile_condition",
    "resolve_set",
]
