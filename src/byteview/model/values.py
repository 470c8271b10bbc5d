# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parsed value representations for the PDF object model.

Scalars map onto Python built-ins: ``None``, ``bool``, ``int``, ``float``.
Names are ``str`` values that keep their leading ``/``; any other ``str`` is
an opaque keyword. Arrays are lists and dictionaries are dicts keyed by the
name without its slash. Only the variants with no natural built-in get a
dedicated type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class LiteralString:
    """A parenthesised string after escape decoding."""

    data: bytes


@dataclass(frozen=True)
class HexString:
    """A ``<...>`` hex string decoded to bytes."""

    data: bytes


@dataclass(frozen=True)
class IndirectRef:
    """A reference ``num gen R`` to an indirect object."""

    num: int
    gen: int

    def __str__(self) -> str:
        return f"{self.num} {self.gen} R"


ParsedValue: TypeAlias = (
    None | bool | int | float | str | LiteralString | HexString | IndirectRef | list[Any] | dict[str, Any]
)


def is_name(value: object) -> bool:
    """Return True if *value* is a Name (a string with a leading slash)."""
    return isinstance(value, str) and value.startswith("/")


def display_string(value: object, encoding: str = "cp1252") -> str:
    """Render a parsed value as display text.

    Byte strings are decoded with *encoding*; bytes the codec cannot map fall
    back to a one-to-one byte-to-character mapping for the whole string.
    """
    if value is None:
        return ""
    if isinstance(value, (LiteralString, HexString)):
        try:
            return value.data.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            return value.data.decode("latin-1")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return "[" + " ".join(display_string(v, encoding) for v in value) + "]"
    if isinstance(value, dict):
        inner = " ".join(f"/{k} {display_string(v, encoding)}" for k, v in value.items())
        return f"<< {inner} >>"
    return str(value)
