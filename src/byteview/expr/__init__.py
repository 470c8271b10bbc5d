# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Template expression language: term model, evaluator, function registry, templates."""

from byteview.expr.context import EvalContext, resolve_path
from byteview.expr.evaluator import (
    CallInvoker,
    EvalHooks,
    EvaluationError,
    ReferenceResolver,
    apply_operator,
    ensure_number,
    eval_expression,
    eval_term,
)
from byteview.expr.registry import FunctionRegistry, RegistryError
from byteview.expr.template import (
    DisplayNode,
    Template,
    TemplateError,
    TemplateField,
    evaluate_template,
    load_template,
    parse_template,
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
    parse_expression,
    parse_term,
)

__all__ = [
    # Terms
    "Term",
    "Ref",
    "UintLiteral",
    "TextLiteral",
    "NilLiteral",
    "BooleanLiteral",
    "Operator",
    "Call",
    "Expression",
    "ExprBlock",
    "MatchCase",
    "MatchExpr",
    "parse_term",
    "parse_expression",
    # Evaluation
    "EvalHooks",
    "ReferenceResolver",
    "CallInvoker",
    "EvaluationError",
    "eval_term",
    "eval_expression",
    "apply_operator",
    "ensure_number",
    "EvalContext",
    "resolve_path",
    # Registry
    "FunctionRegistry",
    "RegistryError",
    # Templates
    "Template",
    "TemplateField",
    "TemplateError",
    "DisplayNode",
    "parse_template",
    "load_template",
    "evaluate_template",
]
