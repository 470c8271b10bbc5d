# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""``bin::`` helpers shared by binary formats: fixed-point numbers, packed codes, hex."""

import math
from collections.abc import Iterable
from typing import Any

from byteview.expr.evaluator import ensure_number
from byteview.expr.registry import FunctionRegistry

# ###############
# Public Interface
# ###############


def register_binary(registry: FunctionRegistry) -> None:
    """Register the binary helpers into *registry*."""
    registry.register("bin::fixed_16_16", fixed_16_16)
    registry.register("bin::fixed_8_8", fixed_8_8)
    registry.register("bin::language_code", language_code)
    registry.register("bin::to_hex", to_hex)
    registry.register("bin::be_uint", be_uint)
    registry.register("bin::ascii", ascii_text)


def fixed_16_16(raw: Any) -> float:
    """Decode an unsigned 32-bit 16.16 fixed-point value."""
    v = _uint(raw, 0xFFFFFFFF)
    return (v >> 16) + (v & 0xFFFF) / 65536


def fixed_8_8(raw: Any) -> float:
    """Decode an unsigned 16-bit 8.8 fixed-point value."""
    v = _uint(raw, 0xFFFF)
    return (v >> 8) + (v & 0xFF) / 256


def language_code(raw: Any) -> str:
    """Unpack a 15-bit ISO-639-2/T code (three 5-bit letters offset by 0x60)."""
    v = _uint(raw, 0x7FFF)
    return "".join(chr(((v >> shift) & 0x1F) + 0x60) for shift in (10, 5, 0))


def to_hex(raw: Any, pad: Any = 2) -> str:
    """Format an unsigned integer as ``0x``-prefixed upper-case hex."""
    return "0x" + format(_uint(raw, 0xFFFFFFFF), "X").rjust(_uint(pad, 0xFF), "0")


def be_uint(data: Any) -> int:
    """Fold a big-endian byte sequence into an integer."""
    result = 0
    for b in _byte_values(data):
        result = (result << 8) | b
    return result


def ascii_text(data: Any) -> str:
    """Render bytes as ASCII, with non-printable bytes shown as '.'."""
    return "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in _byte_values(data))


# ################
# Implementation
# ################


def _uint(raw: Any, mask: int) -> int:
    number = ensure_number(raw)
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number) & mask


def _byte_values(data: Any) -> Iterable[int]:
    if isinstance(data, (bytes, bytearray)):
        return data
    if isinstance(data, (list, tuple)):
        return [_uint(b, 0xFF) for b in data]
    return []
