# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the byteview command-line interface."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from byteview.config import ConfigError, InspectConfig, find_config, load_config
from byteview.expr.evaluator import EvaluationError, to_text
from byteview.expr.template import DisplayNode, TemplateError, evaluate_template, load_template
from byteview.model.container import ContainerModel
from byteview.model.values import display_string
from byteview.plugins import default_registry
from byteview.syntax.container import build_container_model
from byteview.syntax.export import serialize, value_to_json
from byteview.syntax.lexer import tokenize
from byteview.syntax.stream import StructuralParseError

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the byteview CLI."""
    parser = argparse.ArgumentParser(
        prog="byteview",
        description="byteview: inspect the structure of binary container files",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics to stderr")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a config file (default: .byteview.yaml next to the inspected file)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # inspect subcommand
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show a summary of a file",
        description="Parse a PDF file and print its version, trailer, and document information.",
    )
    inspect_parser.add_argument("file", help="File to inspect")
    inspect_parser.add_argument("--json", action="store_true", help="Print the full model as JSON")

    # objects subcommand
    objects_parser = subparsers.add_parser(
        "objects",
        help="List the indirect objects of a file",
        description="Print one line per indirect object with its type and stream length.",
    )
    objects_parser.add_argument("file", help="File to inspect")

    # eval subcommand
    eval_parser = subparsers.add_parser(
        "eval",
        help="Evaluate a display template against a file",
        description=(
            "Parse a file and evaluate a YAML display template against it. The template "
            "sees the parsed model as 'model' and file facts as 'file'."
        ),
    )
    eval_parser.add_argument("file", help="File to inspect")
    eval_parser.add_argument("template", help="Template YAML file")
    eval_parser.add_argument("--json", action="store_true", help="Print the evaluated nodes as JSON")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "inspect":
        return _cmd_inspect(args)
    if args.command == "objects":
        return _cmd_objects(args)
    if args.command == "eval":
        return _cmd_eval(args)
    return 0


def _prepare(args: argparse.Namespace) -> tuple[InspectConfig, Path] | None:
    """Resolve the input file and configuration; print an error and return None on failure."""
    path = Path(args.file).resolve()
    if not path.is_file():
        print(f"Error: file '{path}' does not exist.", file=sys.stderr)
        return None

    try:
        config = load_config(Path(args.config)) if args.config else find_config(path.parent)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None

    level = logging.DEBUG if args.verbose else config.log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    return config, path


def _load_model(path: Path, config: InspectConfig) -> ContainerModel | None:
    """Parse a file into a model; print an error and return None on failure."""
    try:
        buffer = path.read_bytes()
    except OSError as exc:
        print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
        return None

    try:
        return build_container_model(
            tokenize(buffer),
            buffer,
            recover=config.recover,
            text_encoding=config.text_encoding,
        )
    except StructuralParseError as exc:
        print(f"Error: '{path.name}' is malformed: {exc}", file=sys.stderr)
        print("Hint: set 'on-parse-error: partial' to inspect the rest of the file.", file=sys.stderr)
        return None


def _cmd_inspect(args: argparse.Namespace) -> int:
    """Handle the inspect subcommand."""
    prepared = _prepare(args)
    if prepared is None:
        return 1
    config, path = prepared
    model = _load_model(path, config)
    if model is None:
        return 1

    if args.json:
        print(serialize(model, config.preview_bytes))
        return 0

    streams = sum(1 for o in model.objects if o.is_stream)
    print(f"File:      {path.name}")
    print(f"Version:   {model.version}")
    print(f"Objects:   {len(model.objects)} ({streams} with streams)")
    print(f"startxref: {model.startxref if model.startxref is not None else '-'}")
    if model.trailer is not None:
        print("Trailer:")
        for key, value in model.trailer.items():
            print(f"  /{key} {display_string(value, config.text_encoding)}")
    else:
        print("Trailer:   -")
    if model.info_rows:
        print("Info:")
        for row in model.info_rows:
            print(f"  {row.key}: {row.value}")
    for issue in model.issues:
        print(f"Warning: skipped {issue.section}: {issue.message}")
    return 0


def _cmd_objects(args: argparse.Namespace) -> int:
    """Handle the objects subcommand."""
    prepared = _prepare(args)
    if prepared is None:
        return 1
    config, path = prepared
    model = _load_model(path, config)
    if model is None:
        return 1

    if not model.objects:
        print("No objects found.")
        return 0

    for obj in model.objects:
        kind = display_string(obj.dictionary.get("Type") or obj.dictionary.get("Subtype") or "-")
        line = f"{obj.num:>6} {obj.gen:>3}  {kind:<16}"
        if obj.is_stream:
            length = obj.stream_length if obj.stream_length is not None else "?"
            line += f" stream {length} bytes"
        print(line.rstrip())
    return 0


def _cmd_eval(args: argparse.Namespace) -> int:
    """Handle the eval subcommand."""
    prepared = _prepare(args)
    if prepared is None:
        return 1
    config, path = prepared

    try:
        template = load_template(Path(args.template))
    except TemplateError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    model = _load_model(path, config)
    if model is None:
        return 1

    registry = default_registry(text_encoding=config.text_encoding, preview_bytes=config.preview_bytes)
    variables = {
        "model": model,
        "file": {"name": path.name, "size": path.stat().st_size},
    }
    try:
        nodes = evaluate_template(template, variables, registry)
    except EvaluationError as exc:
        print(f"Error: template '{template.name}' failed ({exc.kind}): {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([_node_to_json(n) for n in nodes], indent=2, default=str))
    else:
        for node in nodes:
            _print_node(node, 0)
    return 0


def _print_node(node: DisplayNode, depth: int) -> None:
    indent = "  " * depth
    if node.value is None:
        print(f"{indent}{node.label}")
    else:
        print(f"{indent}{node.label}: {_format_value(node.value)}")
    for child in node.children:
        _print_node(child, depth + 1)


def _format_value(value: Any) -> str:
    if isinstance(value, (bool, int, float, str)):
        return to_text(value)
    return display_string(value)


def _node_to_json(node: DisplayNode) -> dict[str, Any]:
    value = node.value
    if isinstance(value, (bytes, bytearray)):
        value = value.hex()
    return {
        "id": node.id,
        "label": node.label,
        "value": value_to_json(value),
        "children": [_node_to_json(c) for c in node.children],
    }
