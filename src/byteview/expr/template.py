# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declarative display templates and their evaluation into display nodes.

A template is a YAML document::

    name: pdf-summary
    fields:
      - id: version
        label: Version
        value: [{type: ref, id: model.version}]
      - id: objects
        each: [{type: ref, id: model.objects}]
        fields:
          - id: number
            value: [{type: ref, id: $.num}]

``value``, ``when`` and ``each`` are expressions (lists of terms). A field
with ``each`` produces one child node per item of the evaluated sequence,
with the item bound as the ``$.`` scope while its nested fields are
evaluated. A field whose ``when`` evaluates falsy is omitted.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic import Field as _Field

from byteview.expr.context import EvalContext
from byteview.expr.evaluator import eval_expression, is_truthy
from byteview.expr.registry import FunctionRegistry
from byteview.expr.terms import Term

# ###############
# Public Interface
# ###############


class TemplateError(Exception):
    """Raised when a template cannot be read or does not match the template schema."""


class TemplateField(BaseModel):
    """One field of a display template."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    label: str | None = None
    value: list[Term] = _Field(default_factory=list)
    when: list[Term] | None = None
    each: list[Term] | None = None
    fields: list[TemplateField] = _Field(default_factory=list)


class Template(BaseModel):
    """A named list of display fields."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    description: str | None = None
    fields: list[TemplateField] = _Field(default_factory=list)


class DisplayNode(BaseModel):
    """An evaluated template field, ready for a renderer."""

    id: str
    label: str
    value: Any = None
    children: list[DisplayNode] = _Field(default_factory=list)


def parse_template(text: str, source_label: str = "<string>") -> Template:
    """Parse template YAML text.

    Raises:
        TemplateError: If the YAML is invalid or does not match the schema.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise TemplateError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise TemplateError(f"{source_label}: template must be a YAML mapping")

    try:
        return Template.model_validate(data)
    except ValidationError as exc:
        raise TemplateError(f"Invalid template {source_label}: {exc}") from exc


def load_template(path: Path) -> Template:
    """Load and validate a template file.

    Raises:
        TemplateError: If the file cannot be read or is not a valid template.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateError(f"Cannot read template '{path}': {exc}") from exc
    return parse_template(text, source_label=str(path))


def evaluate_template(
    template: Template,
    variables: Mapping[str, Any],
    registry: FunctionRegistry | None = None,
) -> list[DisplayNode]:
    """Evaluate every field of *template* against *variables*.

    Raises:
        EvaluationError: If any field expression fails to evaluate.
    """
    context = EvalContext(variables, registry)
    return _evaluate_fields(context, template.fields)


# ################
# Implementation
# ################


def _evaluate_fields(context: EvalContext, fields: list[TemplateField]) -> list[DisplayNode]:
    nodes: list[DisplayNode] = []
    hooks = context.hooks()
    for field in fields:
        if field.when is not None and not is_truthy(eval_expression(hooks, field.when)):
            continue
        node = DisplayNode(id=field.id, label=field.label or field.id)
        if field.value:
            node.value = eval_expression(hooks, field.value)
        if field.each is not None:
            items = eval_expression(hooks, field.each)
            if not isinstance(items, (list, tuple)):
                items = []
            for index, item in enumerate(items):
                with context.push_scope(item):
                    children = _evaluate_fields(context, field.fields)
                node.children.append(DisplayNode(id=f"{field.id}[{index}]", label=str(index), children=children))
        elif field.fields:
            node.children = _evaluate_fields(context, field.fields)
        nodes.append(node)
    return nodes


TemplateField.model_rebuild()
DisplayNode.model_rebuild()
