# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Default evaluation hooks: scoped variable lookup and registry-backed calls."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from byteview.expr.evaluator import EvalHooks, EvaluationError, apply_operator
from byteview.expr.registry import FunctionRegistry
from byteview.expr.terms import Call, Term

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

SCOPE_PREFIX = "$."


class EvalContext:
    """Variables and scopes for one template evaluation.

    Reference ids are dotted paths. ``$.path`` resolves against the innermost
    scope only. A bare ``path`` resolves against the innermost scope first and
    falls back to the root variables when the scope yields no value.

    Not thread-safe; create one context per evaluation.
    """

    def __init__(self, variables: Mapping[str, Any], registry: FunctionRegistry | None = None) -> None:
        self._variables = variables
        self._registry = registry
        self._scopes: list[Any] = []

    @contextmanager
    def push_scope(self, item: Any) -> Iterator[None]:
        """Bind *item* as the innermost scope for the duration of the block."""
        self._scopes.append(item)
        try:
            yield
        finally:
            self._scopes.pop()

    def get_ref(self, ref_id: str) -> Any:
        scope = self._scopes[-1] if self._scopes else None
        if ref_id.startswith(SCOPE_PREFIX):
            return resolve_path(scope, ref_id[len(SCOPE_PREFIX) :])
        in_scope = resolve_path(scope, ref_id)
        if in_scope is not None:
            return in_scope
        return resolve_path(self._variables, ref_id)

    def call(
        self,
        callee: Any,
        call: Call,
        eval_term: Callable[[Term], Any],
        eval_expression: Callable[[Sequence[Term]], Any],
    ) -> Any:
        """Invoke *callee* with the call's children evaluated as arguments.

        A callable is invoked directly; a string is looked up in the registry.

        Raises:
            EvaluationError: If the callee cannot be resolved to a function
                (``unknown_function``) or the function itself raises
                (``call_failed``, chained to the original exception).
        """
        fn = callee if callable(callee) else None
        if fn is None and isinstance(callee, str) and self._registry is not None:
            fn = self._registry.get_function(callee)
        if fn is None:
            raise EvaluationError("unknown_function", f"Unknown function: {callee!r}")
        args = [eval_term(child) for child in call.children]
        logger.debug("calling %r with %d argument(s)", callee, len(args))
        try:
            return fn(*args)
        except EvaluationError:
            raise
        except Exception as exc:
            raise EvaluationError("call_failed", f"Call to {callee!r} failed: {exc}") from exc

    def hooks(self) -> EvalHooks:
        return EvalHooks(get_ref=self.get_ref, call=self.call)


def resolve_path(root: Any, path: str) -> Any:
    """Follow a dotted path through mappings, sequences, and attributes.

    Returns None as soon as a step yields no value.
    """
    if root is None:
        return None
    current = root
    for part in (p for p in path.split(".") if p):
        if current is None:
            return None
        current = apply_operator("access", current, part)
    return current
