# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Multi-pass builder turning a token sequence and its buffer into a ContainerModel.

Pass 1 harvests ``num gen obj`` definitions and slices stream payloads out of
the buffer. Pass 2 locates the trailer. Pass 3 derives summary data: the
document information rows, the ``startxref`` offset, and the header version.

Only the object bodies are structurally required. Missing or malformed
optional sections leave the corresponding model field absent.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from byteview.model.container import UNKNOWN_VERSION, ContainerModel, IndirectObject, InfoRow, ParseIssue
from byteview.model.values import IndirectRef, display_string
from byteview.syntax.objects import parse_value
from byteview.syntax.stream import StructuralParseError, TokenStream
from byteview.syntax.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def build_container_model(
    tokens: Sequence[Token],
    buffer: bytes,
    *,
    recover: bool = False,
    text_encoding: str = "cp1252",
) -> ContainerModel:
    """Build the container model for one file.

    Args:
        tokens: The full token sequence of the file, comments included.
        buffer: The original bytes the token offsets refer to.
        recover: If True, a structural error inside an object body or the
            trailer is recorded in ``ContainerModel.issues`` and that section
            is left out. If False, the error propagates.
        text_encoding: Codec used to render byte strings in the info rows.

    Returns:
        A ContainerModel. Building twice from the same input yields equal models.

    Raises:
        StructuralParseError: When ``recover`` is False and an object body or
            the trailer is missing a required closing token.
    """
    builder = _Builder(tokens, buffer, recover)
    objects = builder.harvest_objects()
    trailer = builder.find_trailer()
    info_rows = _info_rows(trailer, objects, text_encoding)
    return ContainerModel(
        version=_version(tokens),
        objects=list(objects.values()),
        trailer=trailer,
        info_rows=info_rows,
        startxref=_startxref(builder.stream.tokens),
        issues=builder.issues,
    )


# ################
# Implementation
# ################

_VERSION_RE = re.compile(r"PDF-(\d\.\d)")


class _Builder:
    """Holds the filtered tokens and buffer shared by the structural passes."""

    def __init__(self, tokens: Sequence[Token], buffer: bytes, recover: bool) -> None:
        self.stream = TokenStream(tokens)
        self._buffer = buffer
        self._recover = recover
        self.issues: list[ParseIssue] = []

    # ------------------------------------------------------------------
    # Pass 1: object harvesting
    # ------------------------------------------------------------------

    def harvest_objects(self) -> dict[tuple[int, int], IndirectObject]:
        objects: dict[tuple[int, int], IndirectObject] = {}
        tokens = self.stream.tokens
        for i in range(len(tokens) - 2):
            t0, t1, t2 = tokens[i], tokens[i + 1], tokens[i + 2]
            if not (
                t0.kind is TokenKind.KEYWORD_OR_NUMBER
                and t1.kind is TokenKind.KEYWORD_OR_NUMBER
                and _is_keyword(t2, "obj")
            ):
                continue
            try:
                num = int(t0.value or "")
                gen = int(t1.value or "")
            except ValueError:
                continue
            obj = self._parse_object(num, gen, i + 3)
            if obj is not None:
                objects[(num, gen)] = obj
        return objects

    def _parse_object(self, num: int, gen: int, position: int) -> IndirectObject | None:
        stream = self.stream.at(position)
        try:
            value = parse_value(stream)
        except StructuralParseError as exc:
            self._record(f"object {num} {gen}", exc)
            return None

        after = stream.peek()
        if not _is_keyword(after, "stream"):
            return IndirectObject(num=num, gen=gen, value=value)

        start = self._skip_eol(after.end_offset)
        end_token = self._find_endstream(stream.cursor() + 1)
        if end_token is None:
            logger.debug("object %d %d: no endstream after stream keyword", num, gen)
            return IndirectObject(num=num, gen=gen, value=value, is_stream=True, stream_offset=start)

        payload = bytes(self._buffer[start : end_token.start_offset])
        return IndirectObject(
            num=num,
            gen=gen,
            value=value,
            is_stream=True,
            stream_offset=start,
            stream_bytes=payload,
            stream_length=len(payload),
        )

    def _skip_eol(self, offset: int) -> int:
        """Skip the end-of-line marker that follows the ``stream`` keyword."""
        if self._buffer[offset : offset + 2] == b"\r\n":
            return offset + 2
        if self._buffer[offset : offset + 1] in (b"\n", b"\r"):
            return offset + 1
        return offset

    def _find_endstream(self, position: int) -> Token | None:
        tokens = self.stream.tokens
        for j in range(position, len(tokens)):
            if _is_keyword(tokens[j], "endstream"):
                return tokens[j]
        return None

    # ------------------------------------------------------------------
    # Pass 2: trailer
    # ------------------------------------------------------------------

    def find_trailer(self) -> dict | None:
        # Incremental updates append trailers; the last one takes precedence.
        tokens = self.stream.tokens
        for i in range(len(tokens) - 1, -1, -1):
            if not _is_keyword(tokens[i], "trailer"):
                continue
            try:
                value = parse_value(self.stream.at(i + 1))
            except StructuralParseError as exc:
                self._record("trailer", exc)
                return None
            if not isinstance(value, dict):
                logger.debug("trailer keyword is not followed by a dictionary")
                return None
            return value
        logger.debug("no trailer found")
        return None

    def _record(self, section: str, exc: StructuralParseError) -> None:
        if not self._recover:
            raise exc
        logger.debug("recovered from structural error in %s: %s", section, exc)
        self.issues.append(ParseIssue(section=section, message=str(exc), cursor=exc.cursor))


# ------------------------------------------------------------------
# Pass 3: derived summary
# ------------------------------------------------------------------


def _info_rows(
    trailer: dict | None,
    objects: dict[tuple[int, int], IndirectObject],
    encoding: str,
) -> list[InfoRow]:
    ref = trailer.get("Info") if trailer is not None else None
    if not isinstance(ref, IndirectRef):
        return []
    info = objects.get((ref.num, ref.gen))
    if info is None or not isinstance(info.value, dict):
        logger.debug("Info reference %s does not resolve to a dictionary", ref)
        return []
    return [InfoRow(key=key, value=display_string(val, encoding)) for key, val in info.value.items()]


def _startxref(tokens: Sequence[Token]) -> int | None:
    for i, token in enumerate(tokens):
        if not _is_keyword(token, "startxref"):
            continue
        if i + 1 >= len(tokens):
            return None
        try:
            return int(tokens[i + 1].value or "")
        except ValueError:
            logger.debug("startxref is not followed by an integer")
            return None
    return None


def _version(tokens: Sequence[Token]) -> str:
    """Read the version from the first comment starting with ``PDF-``."""
    for token in tokens:
        if token.kind is TokenKind.COMMENT and (token.value or "").startswith("PDF-"):
            match = _VERSION_RE.match(token.value or "")
            return match.group(1) if match else UNKNOWN_VERSION
    return UNKNOWN_VERSION


def _is_keyword(token: Token | None, text: str) -> bool:
    return token is not None and token.kind is TokenKind.KEYWORD_OR_NUMBER and token.value == text
