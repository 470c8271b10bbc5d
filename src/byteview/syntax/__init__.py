# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexing, object parsing, and container model building for PDF files."""

from byteview.syntax.container import build_container_model
from byteview.syntax.lexer import tokenize
from byteview.syntax.objects import parse_value
from byteview.syntax.stream import StructuralParseError, TokenStream
from byteview.syntax.tokens import Token, TokenKind

__all__ = [
    "Token",
    "TokenKind",
    "TokenStream",
    "StructuralParseError",
    "tokenize",
    "parse_value",
    "build_container_model",
]
