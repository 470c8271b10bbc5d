# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for PDF files.

Converts a raw byte buffer into a flat sequence of tokens with absolute byte
offsets. The scanner never fails: bytes it cannot classify become tokens of
undefined kind, which the token stream filters out.
"""

from byteview.syntax.tokens import Token, TokenKind

# ###############
# Public Interface
# ###############


def tokenize(buffer: bytes) -> list[Token]:
    """Tokenize a PDF byte buffer.

    Whitespace is consumed and not included in the output. Comments are kept
    as COMMENT tokens. Stream payloads (the bytes between a ``stream`` keyword
    and the next ``endstream``) produce no tokens.

    Args:
        buffer: The complete file contents.

    Returns:
        A list of Token objects in source order.
    """
    return _Lexer(buffer).tokenize()


# ################
# Implementation
# ################

_WHITESPACE = frozenset(b"\x00\t\n\x0c\r ")
_DELIMITERS = frozenset(b"()<>[]{}/%")
_TERMINATORS = _WHITESPACE | _DELIMITERS

_ENDSTREAM = b"endstream"


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, buffer: bytes) -> None:
        self._buffer = bytes(buffer)
        self._pos = 0
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens."""
        while self._pos < len(self._buffer):
            self._skip_whitespace()
            if self._pos >= len(self._buffer):
                break
            self._scan_token()
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level byte access helpers
    # ------------------------------------------------------------------

    def _current(self) -> int:
        """Return the byte at the current position, or -1 at end of input."""
        if self._pos < len(self._buffer):
            return self._buffer[self._pos]
        return -1

    def _peek(self) -> int:
        """Return the byte one position ahead, or -1 at end of input."""
        if self._pos + 1 < len(self._buffer):
            return self._buffer[self._pos + 1]
        return -1

    def _text(self, start: int, end: int) -> str:
        return self._buffer[start:end].decode("latin-1")

    def _emit(self, kind: TokenKind | None, value: str | None, start: int, raw: bytes | None = None) -> None:
        self._tokens.append(Token(kind, value, start, self._pos, raw))

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._buffer) and self._buffer[self._pos] in _WHITESPACE:
            self._pos += 1

    def _read_until_terminator(self) -> None:
        while self._pos < len(self._buffer) and self._buffer[self._pos] not in _TERMINATORS:
            self._pos += 1

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current byte."""
        ch = self._current()
        start = self._pos

        if ch == ord("%"):
            self._scan_comment(start)
        elif ch == ord("/"):
            self._pos += 1
            self._read_until_terminator()
            self._emit(TokenKind.NAME, self._text(start + 1, self._pos), start)
        elif ch == ord("("):
            self._scan_string(start)
        elif ch == ord("<"):
            if self._peek() == ord("<"):
                self._pos += 2
                self._emit(TokenKind.DICT_START, None, start)
            else:
                self._scan_hex_string(start)
        elif ch == ord(">"):
            if self._peek() == ord(">"):
                self._pos += 2
                self._emit(TokenKind.DICT_END, None, start)
            else:
                self._pos += 1
                self._emit(None, None, start)
        elif ch == ord("["):
            self._pos += 1
            self._emit(TokenKind.ARRAY_START, None, start)
        elif ch == ord("]"):
            self._pos += 1
            self._emit(TokenKind.ARRAY_END, None, start)
        elif ch in _DELIMITERS:
            # Stray ')', '{' or '}' outside of any construct we model.
            self._pos += 1
            self._emit(None, None, start)
        else:
            self._scan_keyword_or_number(start)

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_comment(self, start: int) -> None:
        """Scan from '%' up to, but not including, the end-of-line byte."""
        self._pos += 1
        while self._pos < len(self._buffer) and self._buffer[self._pos] not in b"\r\n":
            self._pos += 1
        self._emit(TokenKind.COMMENT, self._text(start + 1, self._pos), start)

    def _scan_string(self, start: int) -> None:
        """Scan a parenthesised literal string with balanced nesting.

        Escape sequences are kept encoded in ``raw_bytes``; an escaped
        parenthesis does not affect nesting. An unterminated string runs to
        the end of the buffer.
        """
        self._pos += 1  # (
        nesting = 1
        content_start = self._pos
        while self._pos < len(self._buffer):
            ch = self._buffer[self._pos]
            if ch == ord("\\"):
                self._pos = min(self._pos + 2, len(self._buffer))
                continue
            if ch == ord("("):
                nesting += 1
            elif ch == ord(")"):
                nesting -= 1
                if nesting == 0:
                    raw = self._buffer[content_start : self._pos]
                    self._pos += 1  # )
                    self._emit(TokenKind.STRING, None, start, raw)
                    return
            self._pos += 1
        self._emit(TokenKind.STRING, None, start, self._buffer[content_start : self._pos])

    def _scan_hex_string(self, start: int) -> None:
        """Scan '<' hex digits '>'; a missing '>' runs to the end of the buffer."""
        self._pos += 1  # <
        end = self._buffer.find(b">", self._pos)
        if end < 0:
            end = len(self._buffer)
        value = self._text(self._pos, end)
        self._pos = min(end + 1, len(self._buffer))
        self._emit(TokenKind.HEX_STRING, value, start)

    def _scan_keyword_or_number(self, start: int) -> None:
        """Scan a bare keyword or number; after ``stream`` skip the payload."""
        self._read_until_terminator()
        value = self._text(start, self._pos)
        self._emit(TokenKind.KEYWORD_OR_NUMBER, value, start)
        if value == "stream":
            end = self._buffer.find(_ENDSTREAM, self._pos)
            if end >= 0:
                self._pos = end
