# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the expression evaluator."""

import math
from collections.abc import Callable, Sequence
from typing import Any

import pytest

from byteview.expr.evaluator import (
    EvalHooks,
    EvaluationError,
    apply_operator,
    ensure_number,
    eval_expression,
    eval_term,
    is_truthy,
    to_text,
)
from byteview.expr.terms import (
    BooleanLiteral,
    Call,
    Expression,
    ExprBlock,
    MatchCase,
    MatchExpr,
    NilLiteral,
    Operator,
    Ref,
    Term,
    TextLiteral,
    UintLiteral,
)

# ###############
# Test Helpers
# ###############


def _hooks(variables: dict[str, Any] | None = None, call: Any = None) -> EvalHooks:
    values = variables or {}
    return EvalHooks(get_ref=lambda ref_id: values.get(ref_id), call=call)


def _num(value: int | float) -> UintLiteral:
    return UintLiteral(value=value)


def _text(value: str) -> TextLiteral:
    return TextLiteral(value=value)


def _op(symbol: str) -> Operator:
    return Operator(value=symbol)


# ###############
# Single Terms
# ###############


class TestEvalTerm:
    def test_literals(self) -> None:
        hooks = _hooks()
        assert eval_term(hooks, _num(7)) == 7
        assert eval_term(hooks, _text("x")) == "x"
        assert eval_term(hooks, BooleanLiteral(value=False)) is False
        assert eval_term(hooks, NilLiteral()) is None

    def test_ref_uses_hook(self) -> None:
        assert eval_term(_hooks({"size": 12}), Ref(id="size")) == 12

    def test_operator_evaluates_to_symbol(self) -> None:
        assert eval_term(_hooks(), _op("+")) == "+"

    def test_bare_call_evaluates_to_itself(self) -> None:
        call = Call(children=[_num(1)])
        assert eval_term(_hooks(), call) is call

    def test_nested_expression(self) -> None:
        term = Expression(expr=[_num(2), _op("*"), _num(4)])
        assert eval_term(_hooks(), term) == 8

    def test_expr_block(self) -> None:
        assert eval_term(_hooks(), ExprBlock(expr=[_text("a")])) == "a"


# ###############
# Expressions
# ###############


class TestEvalExpression:
    def test_addition(self) -> None:
        assert eval_expression(_hooks(), [_num(2), _op("+"), _num(3)]) == 5

    def test_text_equality(self) -> None:
        assert eval_expression(_hooks(), [_text("a"), _op("eq"), _text("a")]) is True

    def test_empty_expression_is_none(self) -> None:
        assert eval_expression(_hooks(), []) is None

    def test_left_to_right_without_precedence(self) -> None:
        expr: list[Term] = [_num(2), _op("+"), _num(3), _op("*"), _num(4)]
        assert eval_expression(_hooks(), expr) == 20

    def test_grouping_with_nested_expression(self) -> None:
        expr: list[Term] = [_num(2), _op("+"), Expression(expr=[_num(3), _op("*"), _num(4)])]
        assert eval_expression(_hooks(), expr) == 14

    def test_ref_operand(self) -> None:
        expr: list[Term] = [Ref(id="n"), _op("gt"), _num(3)]
        assert eval_expression(_hooks({"n": 4}), expr) is True

    def test_operator_without_right_operand(self) -> None:
        with pytest.raises(EvaluationError) as exc_info:
            eval_expression(_hooks(), [_num(1), _op("+")])
        assert exc_info.value.kind == "missing_operand"

    def test_call_without_hook(self) -> None:
        with pytest.raises(EvaluationError) as exc_info:
            eval_expression(_hooks(), [Ref(id="f"), Call()])
        assert exc_info.value.kind == "calls_unsupported"
        assert str(exc_info.value) == "Function calls are not supported in this context"

    def test_unknown_item_in_operator_position(self) -> None:
        with pytest.raises(EvaluationError) as exc_info:
            eval_expression(_hooks(), [_num(1), _num(2)])
        assert exc_info.value.kind == "unknown_item"
        assert str(exc_info.value) == "Expression syntax error, unknown item: uint_literal"

    def test_call_hook_receives_accumulator_and_evaluators(self) -> None:
        seen: dict[str, Any] = {}

        def invoke(
            callee: Any,
            call: Call,
            eval_one: Callable[[Term], Any],
            eval_many: Callable[[Sequence[Term]], Any],
        ) -> Any:
            seen["callee"] = callee
            args = [eval_one(c) for c in call.children]
            return sum(args) + eval_many([_num(1), _op("+"), _num(1)])

        expr: list[Term] = [_text("sum"), Call(children=[_num(3), _num(4)])]
        assert eval_expression(_hooks(call=invoke), expr) == 9
        assert seen["callee"] == "sum"

    def test_call_result_feeds_following_operator(self) -> None:
        def invoke(callee: Any, call: Call, eval_one: Any, eval_many: Any) -> Any:
            return 10

        expr: list[Term] = [_text("f"), Call(), _op("-"), _num(4)]
        assert eval_expression(_hooks(call=invoke), expr) == 6


# ###############
# Nil Awareness
# ###############


class TestNilEquality:
    def test_nil_equals_nil(self) -> None:
        assert eval_expression(_hooks(), [NilLiteral(), _op("eq"), NilLiteral()]) is True

    def test_nil_does_not_equal_zero(self) -> None:
        assert eval_expression(_hooks(), [NilLiteral(), _op("eq"), _num(0)]) is False

    def test_nil_ne_zero(self) -> None:
        assert eval_expression(_hooks(), [NilLiteral(), _op("ne"), _num(0)]) is True


# ###############
# Operators
# ###############


class TestArithmetic:
    @pytest.mark.parametrize(
        ("op", "left", "right", "expected"),
        [
            ("+", 2, 3, 5),
            ("-", 2, 3, -1),
            ("*", 2, 3, 6),
            ("/", 3, 2, 1.5),
            ("pow", 2, 10, 1024),
            ("pow", 4, 0.5, 2.0),
            ("+", "2", 3, 5),
            ("+", True, 1, 2),
        ],
    )
    def test_results(self, op: str, left: Any, right: Any, expected: Any) -> None:
        assert apply_operator(op, left, right) == expected

    def test_division_by_zero_is_infinite(self) -> None:
        assert apply_operator("/", 1, 0) == math.inf
        assert apply_operator("/", -1, 0) == -math.inf

    def test_zero_by_zero_is_nan(self) -> None:
        assert math.isnan(apply_operator("/", 0, 0))

    def test_non_numeric_operand_is_nan(self) -> None:
        assert math.isnan(apply_operator("+", "abc", 1))
        assert math.isnan(apply_operator("+", [1], 1))

    def test_nil_operand_reads_as_zero(self) -> None:
        assert eval_expression(_hooks(), [NilLiteral(), _op("+"), _num(1)]) == 1
        assert apply_operator("*", None, 5) == 0

    def test_invalid_power_is_nan(self) -> None:
        assert math.isnan(apply_operator("pow", -8, 0.5))

    def test_power_is_floating_point(self) -> None:
        result = apply_operator("pow", 2, 10)
        assert isinstance(result, float)
        assert result == 1024.0

    def test_zero_to_negative_power_is_infinite(self) -> None:
        assert apply_operator("pow", 0, -1) == math.inf

    def test_power_overflow_is_infinite(self) -> None:
        expr: list[Term] = [_num(2), _op("pow"), _num(1100), _op("+"), _num(0.5)]
        assert eval_expression(_hooks(), expr) == math.inf
        assert apply_operator("pow", -2, 1101) == -math.inf

    def test_huge_integer_operands_do_not_raise(self) -> None:
        assert apply_operator("/", 10**400, 3) == math.inf
        assert apply_operator("*", 10**300, 10**300) == math.inf
        assert apply_operator("-", -(10**400), 1) == -math.inf
        assert apply_operator("gt", 10**400, 1) is True


class TestRelational:
    @pytest.mark.parametrize(
        ("op", "left", "right", "expected"),
        [
            ("gt", 3, 2, True),
            ("lt", 3, 2, False),
            ("ge", 2, 2, True),
            ("le", 1, 2, True),
            ("gt", "10", 9, True),
        ],
    )
    def test_results(self, op: str, left: Any, right: Any, expected: bool) -> None:
        assert apply_operator(op, left, right) is expected

    def test_nan_compares_false(self) -> None:
        assert apply_operator("gt", "abc", 0) is False
        assert apply_operator("le", "abc", 0) is False

    def test_nil_compares_as_zero(self) -> None:
        assert eval_expression(_hooks(), [NilLiteral(), _op("lt"), _num(1)]) is True
        assert apply_operator("ge", None, 0) is True


class TestEquality:
    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [
            ("1", 1, True),
            ("1.0", 1, False),
            (1.0, 1, True),
            ("true", True, True),
            (True, 1, True),
            (False, None, True),
            (None, None, True),
            (None, 0, False),
            (0, None, False),
            (2, 3, False),
        ],
    )
    def test_eq(self, left: Any, right: Any, expected: bool) -> None:
        assert apply_operator("eq", left, right) is expected
        assert apply_operator("ne", left, right) is (not expected)

    def test_huge_integer_against_text(self) -> None:
        assert apply_operator("eq", 10**5000, "x") is False
        assert apply_operator("eq", 10**5000, "Infinity") is True


class TestAccess:
    def test_mapping_key(self) -> None:
        assert apply_operator("access", {"a": 1}, "a") == 1

    def test_mapping_integer_key(self) -> None:
        assert apply_operator("access", {3: "x"}, 3) == "x"

    def test_sequence_index_and_length(self) -> None:
        assert apply_operator("access", [10, 20], 1) == 20
        assert apply_operator("access", [10, 20], "length") == 2
        assert apply_operator("access", [10, 20], 5) is None

    def test_attribute(self) -> None:
        class Box:
            width = 4

        assert apply_operator("access", Box(), "width") == 4

    def test_private_attribute_is_hidden(self) -> None:
        class Box:
            _secret = 1

        assert apply_operator("access", Box(), "_secret") is None

    def test_nil_sides(self) -> None:
        assert apply_operator("access", None, "a") is None
        assert apply_operator("access", {"a": 1}, None) is None


class TestUnsupportedOperator:
    def test_raises(self) -> None:
        with pytest.raises(EvaluationError) as exc_info:
            apply_operator("%", 1, 2)
        assert exc_info.value.kind == "unsupported_operator"


# ###############
# Match
# ###############


class TestMatch:
    def _match(self, condition: Term, *cases: tuple[Term, Any]) -> MatchExpr:
        return MatchExpr(condition=condition, cases=[MatchCase(item=i, children=c) for i, c in cases])

    def test_first_matching_case_wins(self) -> None:
        term = self._match(_num(2), (_num(1), _text("one")), (_num(2), _text("two")), (_num(2), _text("again")))
        assert eval_term(_hooks(), term) == "two"

    def test_strict_identity_skips_coercible_case(self) -> None:
        # Both items equal 1 numerically; only the boolean is strictly identical.
        term = self._match(
            BooleanLiteral(value=True),
            (_num(1), _text("number")),
            (BooleanLiteral(value=True), _text("boolean")),
        )
        assert eval_term(_hooks(), term) == "boolean"

    def test_text_does_not_match_number(self) -> None:
        term = self._match(_text("1"), (_num(1), _text("number")))
        assert eval_term(_hooks(), term) is None

    def test_no_match_yields_no_value(self) -> None:
        term = self._match(_num(9), (_num(1), _text("one")))
        assert eval_term(_hooks(), term) is None

    def test_nil_only_matches_nil(self) -> None:
        term = self._match(Ref(id="missing"), (_num(0), _text("zero")), (NilLiteral(), _text("nil")))
        assert eval_term(_hooks(), term) == "nil"

    def test_expr_block_body(self) -> None:
        body = ExprBlock(expr=[Ref(id="n"), _op("*"), _num(2)])
        term = self._match(_text("x"), (_text("x"), body))
        assert eval_term(_hooks({"n": 21}), term) == 42


# ###############
# Coercions
# ###############


class TestCoercions:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (True, 1),
            (False, 0),
            (None, 0),
            (5, 5),
            (2.5, 2.5),
            ("  7 ", 7),
            ("", 0),
            ("1e3", 1000.0),
            ("-Infinity", -math.inf),
        ],
    )
    def test_ensure_number(self, value: Any, expected: Any) -> None:
        assert ensure_number(value) == expected

    def test_ensure_number_nan(self) -> None:
        assert math.isnan(ensure_number("abc"))
        assert math.isnan(ensure_number([1]))

    def test_ensure_number_beyond_double_range(self) -> None:
        assert ensure_number("9" * 5000) == math.inf
        assert ensure_number(-(10**400)) == -math.inf
        assert to_text(10**5000) == "Infinity"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, "null"), (True, "true"), (3.0, "3"), (2.5, "2.5"), (math.nan, "NaN"), (-math.inf, "-Infinity")],
    )
    def test_to_text(self, value: Any, expected: str) -> None:
        assert to_text(value) == expected

    def test_nan_is_falsy(self) -> None:
        assert is_truthy(math.nan) is False
        assert is_truthy(1) is True
        assert is_truthy("") is False
