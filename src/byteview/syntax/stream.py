# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Cursor-based view over a pre-lexed token sequence."""

from __future__ import annotations

from collections.abc import Iterable

from byteview.syntax.tokens import Token, TokenKind

# ###############
# Public Interface
# ###############

CONTEXT_WINDOW = 3


class StructuralParseError(Exception):
    """Raised when a syntactically required token is missing or of the wrong kind.

    Attributes:
        kind: Always ``"structural"``.
        expected: The token kind that was required.
        actual: The kind of the token found, or None at end of input.
        cursor: Index of the offending token in the filtered token sequence.
        context: Two tuples with the text of up to three tokens before and
            after the cursor.
    """

    kind = "structural"

    def __init__(
        self,
        expected: TokenKind,
        actual: TokenKind | None,
        cursor: int,
        context: tuple[tuple[str, ...], tuple[str, ...]],
    ) -> None:
        actual_label = actual.value if actual is not None else "end of input"
        before, after = context
        super().__init__(
            f"Expected token type {expected.value}, but got {actual_label} at cursor {cursor}. "
            f"Context: ...{' '.join(before)} <|> {' '.join(after)}..."
        )
        self.expected = expected
        self.actual = actual
        self.cursor = cursor
        self.context = context


class TokenStream:
    """Forward-only cursor over tokens, with comment and undefined tokens removed.

    Lookahead is limited to ``peek``; there is no backtracking.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: tuple[Token, ...] = tuple(
            t for t in tokens if t.kind is not None and t.kind is not TokenKind.COMMENT
        )
        self._cursor = 0

    @property
    def tokens(self) -> tuple[Token, ...]:
        """The filtered tokens this stream walks over."""
        return self._tokens

    def at(self, position: int) -> TokenStream:
        """Return a new stream over the same filtered tokens, positioned at *position*."""
        stream = TokenStream.__new__(TokenStream)
        stream._tokens = self._tokens
        stream._cursor = max(0, position)
        return stream

    def cursor(self) -> int:
        return self._cursor

    def peek(self, offset: int = 0) -> Token | None:
        """Return the token *offset* positions past the cursor without consuming it."""
        index = self._cursor + offset
        if index >= len(self._tokens):
            return None
        return self._tokens[index]

    def consume(self) -> Token | None:
        """Return the token at the cursor and advance past it."""
        token = self.peek()
        if token is not None:
            self._cursor += 1
        return token

    def expect_and_consume(self, kind: TokenKind) -> Token:
        """Consume the next token, which must be of the given kind.

        Raises:
            StructuralParseError: If the next token is missing or of another kind.
                The cursor is left on the offending token.
        """
        token = self.peek()
        if token is None or token.kind is not kind:
            raise StructuralParseError(
                expected=kind,
                actual=token.kind if token is not None else None,
                cursor=self._cursor,
                context=self._context(),
            )
        self._cursor += 1
        return token

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def _context(self) -> tuple[tuple[str, ...], tuple[str, ...]]:
        start = max(0, self._cursor - CONTEXT_WINDOW)
        before = tuple(t.describe() for t in self._tokens[start : self._cursor])
        after = tuple(t.describe() for t in self._tokens[self._cursor : self._cursor + CONTEXT_WINDOW])
        return before, after
