# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for PDF object syntax.

Consumes a TokenStream and produces parsed values (see byteview.model.values).
The grammar needs at most two tokens of lookahead, used to recognise
indirect references.
"""

import re

from byteview.model.values import HexString, IndirectRef, LiteralString, ParsedValue
from byteview.syntax.stream import StructuralParseError, TokenStream
from byteview.syntax.tokens import Token, TokenKind

# ###############
# Public Interface
# ###############


def parse_value(stream: TokenStream) -> ParsedValue:
    """Parse one value starting at the stream's cursor.

    Returns None both for the ``null`` keyword and when no value could be
    parsed (end of input or a token that cannot start a value; such a token
    is consumed so the caller always makes progress).

    Raises:
        StructuralParseError: If an array or dictionary is missing its closing token.
    """
    value = _parse(stream)
    if value is _NOTHING:
        return None
    return value


def decode_literal_string(raw: bytes) -> bytes:
    """Decode backslash escapes in the raw content of a literal string.

    Recognised escapes are ``\\n \\r \\t \\b \\f \\( \\) \\\\``. Any other
    escaped byte is passed through unchanged, which also means octal escapes
    are not decoded. A trailing lone backslash is dropped.
    """
    decoded = bytearray()
    i = 0
    while i < len(raw):
        b = raw[i]
        if b == 0x5C:
            i += 1
            if i >= len(raw):
                break
            decoded.append(_ESCAPES.get(raw[i], raw[i]))
        else:
            decoded.append(b)
        i += 1
    return bytes(decoded)


def decode_hex_string(text: str) -> bytes:
    """Decode the text of a hex string into bytes.

    Whitespace is ignored. An odd trailing nibble is dropped and a pair with
    non-hex digits decodes as zero.
    """
    digits = "".join(text.split())
    decoded = bytearray()
    for i in range(0, len(digits) - 1, 2):
        try:
            decoded.append(int(digits[i : i + 2], 16))
        except ValueError:
            decoded.append(0)
    return bytes(decoded)


# ################
# Implementation
# ################

# Marker for "no value could be parsed", distinct from the PDF null (None).
_NOTHING = object()

_INTEGER_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(\d+\.\d*|\.\d+)")

_KEYWORD_VALUES: dict[str, ParsedValue] = {
    "true": True,
    "false": False,
    "null": None,
}

_ESCAPES: dict[int, int] = {
    ord("n"): 0x0A,
    ord("r"): 0x0D,
    ord("t"): 0x09,
    ord("b"): 0x08,
    ord("f"): 0x0C,
    ord("("): 0x28,
    ord(")"): 0x29,
    ord("\\"): 0x5C,
}


def _parse(stream: TokenStream) -> object:
    token = stream.peek()
    if token is None:
        return _NOTHING

    kind = token.kind
    if kind is TokenKind.KEYWORD_OR_NUMBER:
        stream.consume()
        return _parse_keyword_or_number(stream, token.value or "")
    if kind is TokenKind.NAME:
        stream.consume()
        return f"/{token.value or ''}"
    if kind is TokenKind.STRING:
        stream.consume()
        return LiteralString(decode_literal_string(token.raw_bytes or b""))
    if kind is TokenKind.HEX_STRING:
        stream.consume()
        return HexString(decode_hex_string(token.value or ""))
    if kind is TokenKind.ARRAY_START:
        return _parse_array(stream)
    if kind is TokenKind.DICT_START:
        return _parse_dict(stream)

    # Closing tokens out of place: consume so the caller makes progress.
    stream.consume()
    return _NOTHING


def _parse_keyword_or_number(stream: TokenStream, text: str) -> ParsedValue:
    """Interpret a bare token that has already been consumed."""
    if text in _KEYWORD_VALUES:
        return _KEYWORD_VALUES[text]
    if _INTEGER_RE.fullmatch(text):
        ref = _try_indirect_ref(stream, int(text))
        if ref is not None:
            return ref
        return int(text)
    if _FLOAT_RE.fullmatch(text):
        return float(text)
    return text


def _try_indirect_ref(stream: TokenStream, num: int) -> IndirectRef | None:
    """Consume ``gen R`` after an object number if they follow."""
    gen_token = stream.peek(0)
    r_token = stream.peek(1)
    if not (_is_keyword(gen_token) and _is_keyword(r_token, "R")):
        return None
    if not _INTEGER_RE.fullmatch(gen_token.value or ""):
        return None
    stream.consume()  # gen
    stream.consume()  # R
    return IndirectRef(num=num, gen=int(gen_token.value or "0"))


def _is_keyword(token: Token | None, text: str | None = None) -> bool:
    if token is None or token.kind is not TokenKind.KEYWORD_OR_NUMBER:
        return False
    return text is None or token.value == text


def _parse_array(stream: TokenStream) -> list[ParsedValue]:
    stream.expect_and_consume(TokenKind.ARRAY_START)
    items: list[ParsedValue] = []
    while not _next_is(stream, TokenKind.ARRAY_END):
        item = _parse(stream)
        if item is _NOTHING:
            break
        items.append(item)
    stream.expect_and_consume(TokenKind.ARRAY_END)
    return items


def _parse_dict(stream: TokenStream) -> dict[str, ParsedValue]:
    stream.expect_and_consume(TokenKind.DICT_START)
    entries: dict[str, ParsedValue] = {}
    while True:
        token = stream.peek()
        if token is None or token.kind is TokenKind.DICT_END:
            break
        if token.kind is not TokenKind.NAME:
            # Malformed key: stop reading entries and resynchronise.
            if not _skip_to_dict_end(stream):
                return entries
            break
        stream.consume()
        if _next_is(stream, TokenKind.DICT_END):
            break
        value = _parse(stream)
        if value is _NOTHING:
            break
        entries[token.value or ""] = value
    stream.expect_and_consume(TokenKind.DICT_END)
    return entries


def _skip_to_dict_end(stream: TokenStream) -> bool:
    """Discard values up to this dictionary's ``>>``.

    Returns True when positioned on ``>>``; False if an enclosing ``]`` or
    the end of input was reached first (left unconsumed). Values that fail to
    parse are skipped as well.
    """
    while True:
        token = stream.peek()
        if token is None or token.kind is TokenKind.ARRAY_END:
            return False
        if token.kind is TokenKind.DICT_END:
            return True
        try:
            _parse(stream)
        except StructuralParseError:
            # The failed value consumed at least its opening token.
            continue


def _next_is(stream: TokenStream, kind: TokenKind) -> bool:
    token = stream.peek()
    return token is not None and token.kind is kind
