# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Token types shared by the lexer, the token stream, and the container builder."""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenKind(enum.Enum):
    """All token kinds produced by the PDF lexer."""

    COMMENT = "comment"
    NAME = "name"
    STRING = "string"
    HEX_STRING = "hex_string"
    DICT_START = "dict_start"
    DICT_END = "dict_end"
    ARRAY_START = "array_start"
    ARRAY_END = "array_end"
    KEYWORD_OR_NUMBER = "keyword_or_number"


@dataclass(frozen=True)
class Token:
    """A lexical token with its absolute byte span in the source buffer.

    Attributes:
        kind: The kind of token, or None for bytes the lexer could not classify.
        value: Token text. Names and comments exclude their leading ``/`` and
            ``%``; hex strings exclude the angle brackets.
        start_offset: Offset of the first byte of the token.
        end_offset: Offset one past the last byte of the token.
        raw_bytes: For STRING tokens, the bytes between the outer parentheses
            with escape sequences still encoded.
    """

    kind: TokenKind | None
    value: str | None
    start_offset: int
    end_offset: int
    raw_bytes: bytes | None = None

    def describe(self) -> str:
        """Return a short human-readable form used in diagnostics."""
        if self.value:
            return self.value
        if self.kind is None:
            return "<undefined>"
        return self.kind.value
