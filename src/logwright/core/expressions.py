# src/logwright/core/expressions.py
"""Safe filter expressions over log events.

Expressions are parsed with the ast module and checked against an allow-list
of node types before they are ever evaluated. Nothing reaches eval().

Names visible to an expression:
- event: the event properties, read as event['Name'] or event.get('Name'[, default])
- level: the level name in title case ("Information", "Warning", ...).
  Ordering comparisons against another level name compare severity, so
  "level >= 'Warning'" holds for Warning, Error and Fatal.
- template: the raw message template
- exception: the exception type name, or None

Examples:
    level == 'Error' or event.get('Retry', 0) > 3
    exception is not None and 'timeout' in template
    event['Elapsed'] / 1000 > 2 if event.get('Elapsed') is not None else False
"""

from __future__ import annotations

import ast
import operator
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from logwright.contracts.enums import parse_level
from logwright.contracts.errors import ConfigurationError

if TYPE_CHECKING:
    from logwright.contracts.events import LogEvent


class ExpressionSecurityError(ConfigurationError):
    """The expression uses a construct outside the allowed subset."""


class ExpressionSyntaxError(ConfigurationError):
    """The expression does not parse."""


class ExpressionEvaluationError(Exception):
    """A valid expression failed against one particular event.

    Missing properties, type mismatches and division by zero end up here;
    the underlying exception is chained.
    """


_EVENT = "event"
_SCOPE_NAMES = frozenset({_EVENT, "level", "template", "exception"})
_CONSTANT_NAMES: dict[str, Any] = {"True": True, "False": False, "None": None}

_COMPARE: dict[type[ast.cmpop], Callable[[Any, Any], bool]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.Is: operator.is_,
    ast.IsNot: operator.is_not,
    ast.In: lambda a, b: a in b,
    ast.NotIn: lambda a, b: a not in b,
}

_ARITHMETIC: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
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

# Node types an expression may contain at all; operators are checked separately
_ALLOWED_NODES: tuple[type[ast.AST], ...] = (
    ast.Expression,
    ast.Name,
    ast.Load,
    ast.Constant,
    ast.Subscript,
    ast.Attribute,
    ast.Call,
    ast.Compare,
    ast.BoolOp,
    ast.And,
    ast.Or,
    ast.BinOp,
    ast.UnaryOp,
    ast.IfExp,
    ast.List,
    ast.Tuple,
    ast.Set,
    ast.Dict,
    *_COMPARE,
    *_ARITHMETIC,
    *_UNARY,
)

_FORBIDDEN_LABELS: dict[type[ast.AST], str] = {
    ast.Lambda: "lambda expressions",
    ast.ListComp: "comprehensions",
    ast.SetComp: "comprehensions",
    ast.DictComp: "comprehensions",
    ast.GeneratorExp: "generator expressions",
    ast.JoinedStr: "f-strings",
    ast.NamedExpr: "assignment expressions (:=)",
    ast.Slice: "slices",
    ast.Starred: "starred expressions",
    ast.Await: "await expressions",
    ast.Yield: "yield expressions",
    ast.YieldFrom: "yield expressions",
}


class _Level(str):
    """A level name whose ordering comparisons follow severity."""

    __slots__ = ()

    def _severity(self, other: object) -> tuple[int, int]:
        if not isinstance(other, str):
            raise TypeError(f"cannot compare a level with {type(other).__name__}")
        return parse_level(self), parse_level(other)

    def __lt__(self, other: object) -> bool:
        mine, theirs = self._severity(other)
        return mine < theirs

    def __le__(self, other: object) -> bool:
        mine, theirs = self._severity(other)
        return mine <= theirs

    def __gt__(self, other: object) -> bool:
        mine, theirs = self._severity(other)
        return mine > theirs

    def __ge__(self, other: object) -> bool:
        mine, theirs = self._severity(other)
        return mine >= theirs


def _is_event_get(node: ast.AST) -> bool:
    return (
        isinstance(node, ast.Attribute)
        and isinstance(node.value, ast.Name)
        and node.value.id == _EVENT
        and node.attr == "get"
    )


def _reads_event(node: ast.AST) -> bool:
    """event, event[...] chains, and event.get(...) results."""
    if isinstance(node, ast.Name):
        return node.id == _EVENT
    if isinstance(node, ast.Subscript):
        return _reads_event(node.value)
    return isinstance(node, ast.Call) and _is_event_get(node.func)


def _is_none(node: ast.AST) -> bool:
    return isinstance(node, ast.Constant) and node.value is None


def _problems(tree: ast.Expression) -> list[str]:
    """Every reason the tree is not an acceptable filter expression."""
    problems: list[str] = []
    get_calls = {id(node.func) for node in ast.walk(tree) if isinstance(node, ast.Call) and _is_event_get(node.func)}

    for node in ast.walk(tree):
        if not isinstance(node, _ALLOWED_NODES):
            label = _FORBIDDEN_LABELS.get(type(node))
            problems.append(f"{label} are not allowed" if label else f"{type(node).__name__} is not allowed")
            continue

        if isinstance(node, ast.Name) and node.id not in _SCOPE_NAMES and node.id not in _CONSTANT_NAMES:
            problems.append(f"unknown name {node.id!r}")
        elif isinstance(node, ast.Attribute):
            if not _is_event_get(node):
                problems.append(f"attribute access {node.attr!r} is not allowed")
            elif id(node) not in get_calls:
                problems.append("'event.get' must be called, as event.get(key) or event.get(key, default)")
        elif isinstance(node, ast.Call):
            if not _is_event_get(node.func):
                problems.append(f"calling {ast.unparse(node.func)!r} is not allowed")
            elif not 1 <= len(node.args) <= 2 or node.keywords:
                problems.append(f"event.get() requires 1 or 2 arguments, got {ast.unparse(node)!r}")
        elif isinstance(node, ast.Subscript) and not _reads_event(node.value):
            problems.append(f"indexing is only allowed on event data, not {ast.unparse(node.value)!r}")
        elif isinstance(node, ast.Compare):
            operands = [node.left, *node.comparators]
            for position, op in enumerate(node.ops):
                identity = isinstance(op, ast.Is | ast.IsNot)
                if identity and not (_is_none(operands[position]) or _is_none(operands[position + 1])):
                    problems.append("'is' and 'is not' may only compare with None")
        elif isinstance(node, ast.Constant) and not (node.value is None or isinstance(node.value, str | int | float)):
            problems.append(f"{type(node.value).__name__} literals are not allowed")
        elif isinstance(node, ast.Dict) and any(key is None for key in node.keys):
            problems.append("dict unpacking is not allowed")
    return problems


class _Evaluation:
    """One evaluation of a checked tree against one event's scope."""

    def __init__(self, scope: dict[str, Any]) -> None:
        self.scope = scope

    def value(self, node: ast.AST) -> Any:
        handler = getattr(self, f"_{type(node).__name__.lower()}")
        return handler(node)

    def _name(self, node: ast.Name) -> Any:
        if node.id in self.scope:
            return self.scope[node.id]
        return _CONSTANT_NAMES[node.id]

    def _constant(self, node: ast.Constant) -> Any:
        return node.value

    def _subscript(self, node: ast.Subscript) -> Any:
        container = self.value(node.value)
        key = self.value(node.slice)
        try:
            return container[key]
        except KeyError as e:
            raise ExpressionEvaluationError(f"property {key!r} is not present") from e
        except (IndexError, TypeError) as e:
            raise ExpressionEvaluationError(f"cannot index {type(container).__name__} with {key!r}") from e

    def _call(self, node: ast.Call) -> Any:
        properties = self.scope[_EVENT]
        try:
            return properties.get(*(self.value(arg) for arg in node.args))
        except TypeError as e:
            raise ExpressionEvaluationError(f"event.get() failed: {e}") from e

    def _compare(self, node: ast.Compare) -> bool:
        left = self.value(node.left)
        for op, right_node in zip(node.ops, node.comparators, strict=True):
            right = self.value(right_node)
            try:
                if not _COMPARE[type(op)](left, right):
                    return False
            except (TypeError, ValueError) as e:
                raise ExpressionEvaluationError(
                    f"cannot compare {type(left).__name__} with {type(right).__name__}"
                ) from e
            left = right
        return True

    def _boolop(self, node: ast.BoolOp) -> Any:
        stop_when = isinstance(node.op, ast.Or)
        result: Any = None
        for operand in node.values:
            result = self.value(operand)
            if bool(result) is stop_when:
                break
        return result

    def _binop(self, node: ast.BinOp) -> Any:
        left, right = self.value(node.left), self.value(node.right)
        try:
            return _ARITHMETIC[type(node.op)](left, right)
        except (TypeError, ZeroDivisionError) as e:
            raise ExpressionEvaluationError(f"{type(node.op).__name__} failed: {e}") from e

    def _unaryop(self, node: ast.UnaryOp) -> Any:
        operand = self.value(node.operand)
        try:
            return _UNARY[type(node.op)](operand)
        except TypeError as e:
            raise ExpressionEvaluationError(f"{type(node.op).__name__} failed: {e}") from e

    def _ifexp(self, node: ast.IfExp) -> Any:
        return self.value(node.body) if self.value(node.test) else self.value(node.orelse)

    def _list(self, node: ast.List) -> list[Any]:
        return [self.value(element) for element in node.elts]

    def _tuple(self, node: ast.Tuple) -> tuple[Any, ...]:
        return tuple(self.value(element) for element in node.elts)

    def _set(self, node: ast.Set) -> set[Any]:
        try:
            return {self.value(element) for element in node.elts}
        except TypeError as e:
            raise ExpressionEvaluationError(f"unhashable set element: {e}") from e

    def _dict(self, node: ast.Dict) -> dict[Any, Any]:
        try:
            return {self.value(k): self.value(v) for k, v in zip(node.keys, node.values, strict=True) if k is not None}
        except TypeError as e:
            raise ExpressionEvaluationError(f"unhashable dict key: {e}") from e


class FilterExpression:
    """A checked filter expression, evaluated per event.

    Example:
        expr = FilterExpression("level >= 'Warning' and event.get('Tenant') == 'acme'")
        expr.matches(event)
    """

    def __init__(self, expression: str) -> None:
        """Parse and check expression.

        Raises:
            ExpressionSyntaxError: If expression does not parse.
            ExpressionSecurityError: If expression leaves the allowed subset.
        """
        self._expression = expression
        try:
            self._tree = ast.parse(expression.strip(), mode="eval")
        except SyntaxError as e:
            raise ExpressionSyntaxError(f"Invalid filter expression {expression!r}: {e.msg}") from e

        problems = _problems(self._tree)
        if problems:
            raise ExpressionSecurityError(f"Invalid filter expression {expression!r}: " + "; ".join(problems))

    @property
    def expression(self) -> str:
        return self._expression

    def evaluate(self, event: LogEvent) -> Any:
        scope = {
            _EVENT: event.properties,
            "level": _Level(event.level.label),
            "template": event.message_template,
            "exception": type(event.exception).__name__ if event.exception is not None else None,
        }
        return _Evaluation(scope).value(self._tree.body)

    def matches(self, event: LogEvent) -> bool:
        """Whether the expression holds for event.

        An expression that cannot be evaluated for this event does not match.
        """
        try:
            return bool(self.evaluate(event))
        except ExpressionEvaluationError:
            return False

    def __repr__(self) -> str:
        return f"FilterExpression({self._expression!r})"
