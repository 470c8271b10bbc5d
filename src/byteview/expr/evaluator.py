# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tree-walking evaluator for the template expression language.

The evaluator knows nothing about the data it runs against: references and
calls are resolved through hooks supplied by the caller.

Value conventions: None stands for both nil and "no value". Arithmetic and
relational operators coerce their operands to numbers (nil reads as 0) and
follow IEEE-754: division by zero, overflow and invalid powers produce
infinities or NaN rather than raising. ``eq``/``ne`` are type-sensitive; see
apply_operator.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from byteview.expr.terms import (
    BooleanLiteral,
    Call,
    Expression,
    ExprBlock,
    MatchExpr,
    NilLiteral,
    Operator,
    Ref,
    Term,
    TextLiteral,
    UintLiteral,
)

# ###############
# Public Interface
# ###############


class EvaluationError(Exception):
    """Raised when a single evaluation cannot proceed.

    Attributes:
        kind: One of ``calls_unsupported``, ``unknown_item``,
            ``missing_operand``, ``unsupported_operator``, ``unknown_function``,
            ``call_failed``.
    """

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class ReferenceResolver(Protocol):
    def __call__(self, ref_id: str) -> Any: ...


class CallInvoker(Protocol):
    def __call__(
        self,
        callee: Any,
        call: Call,
        eval_term: Callable[[Term], Any],
        eval_expression: Callable[[Sequence[Term]], Any],
    ) -> Any: ...


@dataclass(frozen=True)
class EvalHooks:
    """Host bindings for reference resolution and call invocation.

    Attributes:
        get_ref: Resolves a Ref term's id to a value.
        call: Invokes a call suffix. Without it, any Call term in an
            expression is an error.
    """

    get_ref: ReferenceResolver
    call: CallInvoker | None = None


def eval_term(hooks: EvalHooks, term: Term | ExprBlock) -> Any:
    """Evaluate a single term.

    An Operator evaluates to its own symbol and a bare Call evaluates to the
    Call term itself; both are only meaningful inside eval_expression.
    """
    if isinstance(term, Ref):
        return hooks.get_ref(term.id)
    if isinstance(term, (UintLiteral, TextLiteral, BooleanLiteral)):
        return term.value
    if isinstance(term, NilLiteral):
        return None
    if isinstance(term, (Expression, ExprBlock)):
        return eval_expression(hooks, term.expr)
    if isinstance(term, Operator):
        return term.value
    if isinstance(term, MatchExpr):
        return _eval_match(hooks, term)
    if isinstance(term, Call):
        return term
    raise EvaluationError("unknown_item", f"Cannot evaluate term: {term!r}")


def eval_expression(hooks: EvalHooks, expr: Sequence[Term]) -> Any:
    """Fold an expression left to right.

    Returns None for an empty expression.

    Raises:
        EvaluationError: On a Call without a call hook, an operator with no
            right operand, an unsupported operator, or any other term kind in a
            non-leading position.
    """
    if not expr:
        return None
    acc = eval_term(hooks, expr[0])
    i = 1
    while i < len(expr):
        term = expr[i]
        if isinstance(term, Operator):
            if i + 1 >= len(expr):
                raise EvaluationError(
                    "missing_operand", f"Expression syntax error: operator {term.value!r} has no right operand"
                )
            right = eval_term(hooks, expr[i + 1])
            acc = apply_operator(term.value, acc, right)
            i += 2
            continue
        if isinstance(term, Call):
            if hooks.call is None:
                raise EvaluationError("calls_unsupported", "Function calls are not supported in this context")
            acc = hooks.call(
                acc,
                term,
                lambda t: eval_term(hooks, t),
                lambda e: eval_expression(hooks, e),
            )
            i += 1
            continue
        raise EvaluationError("unknown_item", f"Expression syntax error, unknown item: {term.type}")
    return acc


def apply_operator(op: str, left: Any, right: Any) -> Any:
    """Apply a binary operator.

    ``eq`` and ``ne`` decide in this order: if either side is a string,
    compare as strings; else if either is a boolean, compare truthiness; else
    two nils are equal; else exactly one nil is unequal; else compare as
    numbers. ``access`` looks up *right* (stringified) on *left*, returning
    None when either side is nil.

    Raises:
        EvaluationError: If the operator symbol is not supported.
    """
    if op in _ARITHMETIC:
        return _bounded(_ARITHMETIC[op](ensure_number(left), ensure_number(right)))
    if op in _RELATIONAL:
        return _RELATIONAL[op](ensure_number(left), ensure_number(right))
    if op == "eq":
        return _equals(left, right)
    if op == "ne":
        return not _equals(left, right)
    if op == "access":
        return _access(left, right)
    raise EvaluationError("unsupported_operator", f"Unsupported operator: {op}")


def ensure_number(value: Any) -> int | float:
    """Coerce a value to a number.

    Nil reads as 0, integers too large for a double read as infinity, and
    values with no numeric reading become NaN.
    """
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, (int, float)):
        return _bounded(value)
    if isinstance(value, str):
        return _bounded(_parse_number(value))
    if value is None:
        return 0
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def to_text(value: Any) -> str:
    """Stringify a value the way string comparison and key lookup see it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    value = _bounded(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def is_truthy(value: Any) -> bool:
    """Truthiness with NaN counted as false."""
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


# ################
# Implementation
# ################

_INTEGER_TEXT_RE = re.compile(r"[+-]?\d+")
_FLOAT_TEXT_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def _parse_number(text: str) -> int | float:
    stripped = text.strip()
    if not stripped:
        return 0
    if _INTEGER_TEXT_RE.fullmatch(stripped):
        try:
            return int(stripped)
        except ValueError:
            # Past the interpreter's digit limit; far beyond a double anyway.
            return float(stripped)
    if _FLOAT_TEXT_RE.fullmatch(stripped):
        return float(stripped)
    if stripped in ("Infinity", "+Infinity"):
        return math.inf
    if stripped == "-Infinity":
        return -math.inf
    return math.nan


def _bounded(value: Any) -> Any:
    """Map an integer outside the range of a double to a signed infinity.

    Other values pass through unchanged. Exact integers stay exact while a
    double can hold them, so ``2 + 3`` is still ``5``.
    """
    if isinstance(value, int) and not isinstance(value, bool) and value.bit_length() > 1023:
        try:
            float(value)
        except OverflowError:
            return math.copysign(math.inf, value)
    return value


def _divide(left: int | float, right: int | float) -> float:
    left, right = float(left), float(right)
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _power(left: int | float, right: int | float) -> float:
    left, right = float(left), float(right)
    try:
        return math.pow(left, right)
    except OverflowError:
        odd = right.is_integer() and int(right) % 2 == 1
        return math.copysign(math.inf, left) if odd else math.inf
    except ValueError:
        # 0 to a negative power is +inf; a negative base with a fractional exponent is NaN.
        if left == 0 and right < 0:
            return math.copysign(math.inf, left) if right.is_integer() and int(right) % 2 == 1 else math.inf
        return math.nan


_ARITHMETIC: dict[str, Callable[[Any, Any], Any]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _divide,
    "pow": _power,
}

_RELATIONAL: dict[str, Callable[[Any, Any], bool]] = {
    "ge": lambda a, b: a >= b,
    "le": lambda a, b: a <= b,
    "gt": lambda a, b: a > b,
    "lt": lambda a, b: a < b,
}


def _equals(left: Any, right: Any) -> bool:
    if isinstance(left, str) or isinstance(right, str):
        return to_text(left) == to_text(right)
    if isinstance(left, bool) or isinstance(right, bool):
        return is_truthy(left) == is_truthy(right)
    if left is None and right is None:
        return True
    if left is None or right is None:
        return False
    return ensure_number(left) == ensure_number(right)


def _access(container: Any, key: Any) -> Any:
    if key is None or container is None:
        return None
    name = key if isinstance(key, str) else to_text(key)
    if isinstance(container, Mapping):
        if name in container:
            return container[name]
        if _INTEGER_TEXT_RE.fullmatch(name):
            return container.get(int(name))
        return None
    if isinstance(container, (str, bytes, bytearray, list, tuple)):
        if name == "length":
            return len(container)
        if name.isdigit():
            index = int(name)
            return container[index] if index < len(container) else None
        return None
    if name.startswith("_"):
        return None
    return getattr(container, name, None)


def _strictly_identical(left: Any, right: Any) -> bool:
    """Identity as used by match: no coercion between kinds of value."""
    if left is None or right is None:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if isinstance(left, bytes) and isinstance(right, bytes):
        return left == right
    return left is right


def _eval_match(hooks: EvalHooks, term: MatchExpr) -> Any:
    condition = eval_term(hooks, term.condition)
    for case in term.cases:
        if _strictly_identical(eval_term(hooks, case.item), condition):
            return eval_term(hooks, case.children)
    return None
