# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Term model for the template expression language.

An expression is a flat list of terms folded left to right: an operand,
then any number of ``operator operand`` pairs or ``call`` suffixes. There is
no operator precedence; grouping is written with nested ``expression`` terms.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

OPERATORS: frozenset[str] = frozenset({"+", "-", "*", "/", "pow", "eq", "ne", "gt", "lt", "ge", "le", "access"})


class Ref(BaseModel):
    """A reference resolved by the host's reference hook."""

    model_config = ConfigDict(frozen=True)

    type: Literal["ref"] = "ref"
    id: str


class UintLiteral(BaseModel):
    """A numeric literal."""

    model_config = ConfigDict(frozen=True)

    type: Literal["uint_literal"] = "uint_literal"
    value: int | float


class TextLiteral(BaseModel):
    """A string literal."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text_literal"] = "text_literal"
    value: str


class NilLiteral(BaseModel):
    """The nil literal; evaluates to None."""

    model_config = ConfigDict(frozen=True)

    type: Literal["nil_literal"] = "nil_literal"


class BooleanLiteral(BaseModel):
    """A boolean literal."""

    model_config = ConfigDict(frozen=True)

    type: Literal["boolean_literal"] = "boolean_literal"
    value: bool


class Operator(BaseModel):
    """A binary operator marker inside an expression (see OPERATORS)."""

    model_config = ConfigDict(frozen=True)

    type: Literal["operator"] = "operator"
    value: str


class Call(BaseModel):
    """Call suffix: invokes the accumulated value with the child terms as arguments."""

    model_config = ConfigDict(frozen=True)

    type: Literal["call"] = "call"
    children: list[Term] = _Field(default_factory=list)


class Expression(BaseModel):
    """A nested expression, used for grouping."""

    model_config = ConfigDict(frozen=True)

    type: Literal["expression"] = "expression"
    expr: list[Term] = _Field(default_factory=list)


class ExprBlock(BaseModel):
    """Wrapper allowed as a match case body: an expression list to evaluate."""

    model_config = ConfigDict(frozen=True)

    type: Literal["expr"] = "expr"
    expr: list[Term] = _Field(default_factory=list)


class MatchCase(BaseModel):
    """One arm of a match: taken when ``item`` is strictly identical to the condition."""

    model_config = ConfigDict(frozen=True)

    item: Term
    children: CaseBody


class MatchExpr(BaseModel):
    """Evaluates the first case whose item matches the condition, else no value."""

    model_config = ConfigDict(frozen=True)

    type: Literal["match"] = "match"
    condition: Term
    cases: list[MatchCase] = _Field(default_factory=list)


# Any term of the language; `type` is the discriminator.
Term = Annotated[
    Ref | UintLiteral | TextLiteral | NilLiteral | BooleanLiteral | Operator | Call | Expression | MatchExpr,
    _Field(discriminator="type"),
]

# A match case body: a term or an `expr` wrapper.
CaseBody = Annotated[
    Ref
    | UintLiteral
    | TextLiteral
    | NilLiteral
    | BooleanLiteral
    | Operator
    | Call
    | Expression
    | MatchExpr
    | ExprBlock,
    _Field(discriminator="type"),
]


def parse_term(data: object) -> Term:
    """Validate plain data (e.g. loaded from YAML) into a term."""
    return _TERM_ADAPTER.validate_python(data)


def parse_expression(data: object) -> list[Term]:
    """Validate a plain list into an expression (a list of terms)."""
    return _EXPRESSION_ADAPTER.validate_python(data)


# Resolve forward references for the recursive models.
Call.model_rebuild()
Expression.model_rebuild()
ExprBlock.model_rebuild()
MatchCase.model_rebuild()
MatchExpr.model_rebuild()

_TERM_ADAPTER: TypeAdapter[Term] = TypeAdapter(Term)
_EXPRESSION_ADAPTER: TypeAdapter[list[Term]] = TypeAdapter(list[Term])
