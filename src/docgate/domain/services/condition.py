"""Restricted boolean conditions over transaction read results.

Conditions are parsed with :mod:`ast` and interpreted node by node. Only
comparisons, boolean combinators, arithmetic and field-path lookups are
accepted; there is no way to call functions or reach host objects.

Examples::

    readResults["accounts/alice"]["data"]["balance"] >= 10
    readResults["accounts/alice"].exists and not readResults["locks/a"].exists
    balance >= 10 and status in ["open", "pending"]

Bare names other than ``readResults`` resolve to top-level fields of the
documents that were read, first document (in read order) wins.
"""

import ast
import operator
from collections.abc import Callable, Mapping
from typing import Any

from docgate.domain.exceptions import ConditionEvaluationError

READ_RESULTS_NAMES = frozenset({"readResults", "read_results"})

_LITERAL_NAMES: dict[str, Any] = {"true": True, "false": False, "null": None}

_COMPARISONS: dict[type[ast.cmpop], Callable[[Any, Any], Any]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.In: lambda a, b: a in b,
    ast.NotIn: lambda a, b: a not in b,
    ast.Is: operator.is_,
    ast.IsNot: operator.is_not,
}

_BINARY: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
}

_UNARY: dict[type[ast.unaryop], Callable[[Any], Any]] = {
    ast.Not: operator.not_,
    ast.USub: operator.neg,
    ast.UAdd: operator.pos,
}

_ALLOWED_NODES: tuple[type[ast.AST], ...] = (
    ast.Expression,
    ast.BoolOp,
    ast.And,
    ast.Or,
    ast.UnaryOp,
    ast.BinOp,
    ast.Compare,
    ast.Name,
    ast.Load,
    ast.Attribute,
    ast.Subscript,
    ast.Constant,
    ast.List,
    ast.Tuple,
    *_COMPARISONS,
    *_BINARY,
    *_UNARY,
)

_CONSTANT_TYPES = (str, int, float, bool, type(None))

DEFAULT_MAX_LENGTH = 2000


def _validate(tree: ast.Expression) -> None:
    for node in ast.walk(tree):
        if not isinstance(node, _ALLOWED_NODES):
            raise ConditionEvaluationError(
                f"unsupported syntax: {type(node).__name__}"
            )
        if isinstance(node, ast.Constant) and not isinstance(node.value, _CONSTANT_TYPES):
            raise ConditionEvaluationError(
                f"unsupported constant: {type(node.value).__name__}"
            )
        if isinstance(node, ast.Attribute) and node.attr.startswith("_"):
            raise ConditionEvaluationError(f"unsupported attribute: {node.attr}")
        if isinstance(node, ast.Subscript) and not isinstance(node.slice, ast.Constant):
            raise ConditionEvaluationError("subscripts must be literal keys or indexes")


def _lookup(container: Any, key: Any) -> Any:
    """Field-path step. Missing keys yield None; stepping into a scalar is an error."""
    if isinstance(container, Mapping):
        return container.get(key)
    if isinstance(container, (list, tuple)) and isinstance(key, int) and not isinstance(key, bool):
        try:
            return container[key]
        except IndexError:
            return None
    if container is None:
        raise ConditionEvaluationError(f"cannot read {key!r} of null")
    raise ConditionEvaluationError(
        f"cannot read {key!r} of {type(container).__name__}"
    )


class _Evaluator(ast.NodeVisitor):
    """Interprets a validated expression tree."""

    def __init__(self, read_results: Mapping[str, Any]) -> None:
        self._read_results = read_results

    def generic_visit(self, node: ast.AST) -> Any:
        raise ConditionEvaluationError(f"unsupported syntax: {type(node).__name__}")

    def visit_Expression(self, node: ast.Expression) -> Any:
        return self.visit(node.body)

    def visit_Constant(self, node: ast.Constant) -> Any:
        return node.value

    def visit_List(self, node: ast.List) -> list[Any]:
        return [self.visit(e) for e in node.elts]

    def visit_Tuple(self, node: ast.Tuple) -> tuple[Any, ...]:
        return tuple(self.visit(e) for e in node.elts)

    def visit_Name(self, node: ast.Name) -> Any:
        name = node.id
        if name in READ_RESULTS_NAMES:
            return self._read_results
        if name in _LITERAL_NAMES:
            return _LITERAL_NAMES[name]
        for result in self._read_results.values():
            data = result.get("data") if isinstance(result, Mapping) else None
            if isinstance(data, Mapping) and name in data:
                return data[name]
        raise ConditionEvaluationError(f"unknown name '{name}'")

    def visit_Attribute(self, node: ast.Attribute) -> Any:
        return _lookup(self.visit(node.value), node.attr)

    def visit_Subscript(self, node: ast.Subscript) -> Any:
        return _lookup(self.visit(node.value), self.visit(node.slice))

    def visit_BoolOp(self, node: ast.BoolOp) -> Any:
        value: Any = None
        for operand in node.values:
            value = self.visit(operand)
            if isinstance(node.op, ast.And) and not value:
                return value
            if isinstance(node.op, ast.Or) and value:
                return value
        return value

    def visit_UnaryOp(self, node: ast.UnaryOp) -> Any:
        return _UNARY[type(node.op)](self.visit(node.operand))

    def visit_BinOp(self, node: ast.BinOp) -> Any:
        left = self.visit(node.left)
        right = self.visit(node.right)
        if isinstance(node.op, ast.Mult) and (
            isinstance(left, (str, list, tuple)) or isinstance(right, (str, list, tuple))
        ):
            raise ConditionEvaluationError("sequence repetition is not supported")
        return _BINARY[type(node.op)](left, right)

    def visit_Compare(self, node: ast.Compare) -> bool:
        left = self.visit(node.left)
        for op, comparator in zip(node.ops, node.comparators):
            right = self.visit(comparator)
            if not _COMPARISONS[type(op)](left, right):
                return False
            left = right
        return True


class Condition:
    """A parsed, validated condition ready to be evaluated against read results."""

    def __init__(self, source: str, tree: ast.Expression) -> None:
        self.source = source
        self._tree = tree

    def evaluate(self, read_results: Mapping[str, Any]) -> bool:
        """Evaluate against ``{path: {"exists": bool, "data": dict | None}}``.

        Raises ConditionEvaluationError when the expression cannot be
        evaluated for this data (unknown name, type mismatch, ...).
        """
        try:
            value = _Evaluator(read_results).visit(self._tree)
        except ConditionEvaluationError:
            raise
        except (TypeError, ValueError, ArithmeticError, RecursionError) as e:
            raise ConditionEvaluationError(str(e)) from e
        return bool(value)

    def __repr__(self) -> str:
        return f"Condition({self.source!r})"


def compile_condition(source: str, max_length: int = DEFAULT_MAX_LENGTH) -> Condition:
    """Parse and validate a condition. Raises ConditionEvaluationError on bad input."""
    text = source.strip()
    if not text:
        raise ConditionEvaluationError("condition is empty")
    if len(text) > max_length:
        raise ConditionEvaluationError(
            f"condition exceeds {max_length} characters"
        )
    try:
        tree = ast.parse(text, mode="eval")
    except (SyntaxError, ValueError) as e:
        raise ConditionEvaluationError(f"invalid syntax: {e}") from e
    except RecursionError as e:
        raise ConditionEvaluationError("condition is nested too deeply") from e
    _validate(tree)
    return Condition(text, tree)
