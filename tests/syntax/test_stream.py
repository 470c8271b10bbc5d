# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the token stream cursor."""

import pytest

from byteview.syntax.stream import StructuralParseError, TokenStream
from byteview.syntax.tokens import Token, TokenKind

# ###############
# Test Helpers
# ###############


def _kw(value: str, offset: int = 0) -> Token:
    return Token(TokenKind.KEYWORD_OR_NUMBER, value, offset, offset + len(value))


# ###############
# Filtering
# ###############


class TestFiltering:
    def test_comments_and_undefined_tokens_are_removed(self) -> None:
        tokens = [
            Token(TokenKind.COMMENT, "PDF-1.4", 0, 8),
            _kw("1"),
            Token(None, None, 10, 11),
            _kw("2"),
        ]
        stream = TokenStream(tokens)
        assert [t.value for t in stream.tokens] == ["1", "2"]


# ###############
# Cursor Operations
# ###############


class TestCursor:
    def test_peek_does_not_advance(self) -> None:
        stream = TokenStream([_kw("a"), _kw("b")])
        assert stream.peek().value == "a"
        assert stream.peek(1).value == "b"
        assert stream.cursor() == 0

    def test_peek_past_end_returns_none(self) -> None:
        stream = TokenStream([_kw("a")])
        assert stream.peek(1) is None

    def test_consume_returns_current_and_advances(self) -> None:
        stream = TokenStream([_kw("a"), _kw("b")])
        assert stream.consume().value == "a"
        assert stream.cursor() == 1

    def test_consume_at_end_returns_none_and_stays(self) -> None:
        stream = TokenStream([])
        assert stream.consume() is None
        assert stream.cursor() == 0

    def test_at_shares_tokens_with_new_cursor(self) -> None:
        stream = TokenStream([_kw("a"), _kw("b"), _kw("c")])
        other = stream.at(2)
        assert other.peek().value == "c"
        assert other.tokens is stream.tokens
        assert stream.cursor() == 0


# ###############
# expect_and_consume
# ###############


class TestExpectAndConsume:
    def test_matching_kind_is_consumed(self) -> None:
        stream = TokenStream([Token(TokenKind.ARRAY_END, None, 0, 1)])
        tok = stream.expect_and_consume(TokenKind.ARRAY_END)
        assert tok.kind == TokenKind.ARRAY_END
        assert stream.cursor() == 1

    def test_mismatch_raises_with_context(self) -> None:
        values = ["a", "b", "c", "d", "e", "f", "g", "h"]
        stream = TokenStream([_kw(v) for v in values]).at(4)
        with pytest.raises(StructuralParseError) as exc_info:
            stream.expect_and_consume(TokenKind.DICT_END)
        err = exc_info.value
        assert err.kind == "structural"
        assert err.expected == TokenKind.DICT_END
        assert err.actual == TokenKind.KEYWORD_OR_NUMBER
        assert err.cursor == 4
        assert err.context == (("b", "c", "d"), ("e", "f", "g"))
        assert "dict_end" in str(err)

    def test_end_of_input_raises(self) -> None:
        stream = TokenStream([_kw("a")]).at(1)
        with pytest.raises(StructuralParseError) as exc_info:
            stream.expect_and_consume(TokenKind.ARRAY_END)
        assert exc_info.value.actual is None
        assert "end of input" in str(exc_info.value)

    def test_mismatch_does_not_consume(self) -> None:
        stream = TokenStream([_kw("a")])
        with pytest.raises(StructuralParseError):
            stream.expect_and_consume(TokenKind.NAME)
        assert stream.cursor() == 0
