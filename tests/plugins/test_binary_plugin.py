# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the bin:: helper functions."""

import math

import pytest

from byteview.expr.registry import FunctionRegistry
from byteview.plugins.binary import (
    ascii_text,
    be_uint,
    fixed_8_8,
    fixed_16_16,
    language_code,
    register_binary,
    to_hex,
)

# ###############
# Fixed Point
# ###############


class TestFixedPoint:
    def test_16_16(self) -> None:
        assert fixed_16_16(0x00018000) == 1.5
        assert fixed_16_16(0x00480000) == 72.0

    def test_8_8(self) -> None:
        assert fixed_8_8(0x0100) == 1.0
        assert fixed_8_8(0x0180) == 1.5

    def test_non_numeric_is_zero(self) -> None:
        assert fixed_16_16("abc") == 0.0
        assert fixed_8_8(math.inf) == 0.0


# ###############
# Packed Codes
# ###############


class TestLanguageCode:
    def test_english(self) -> None:
        assert language_code(0x15C7) == "eng"

    def test_upper_bit_is_ignored(self) -> None:
        assert language_code(0x8000 | 0x15C7) == "eng"


class TestToHex:
    @pytest.mark.parametrize(
        ("raw", "pad", "expected"),
        [(255, 2, "0xFF"), (10, 4, "0x000A"), (0, 2, "0x00"), (0x1234, 2, "0x1234")],
    )
    def test_format(self, raw: int, pad: int, expected: str) -> None:
        assert to_hex(raw, pad) == expected

    def test_default_pad(self) -> None:
        assert to_hex(1) == "0x01"


# ###############
# Byte Sequences
# ###############


class TestByteSequences:
    def test_be_uint(self) -> None:
        assert be_uint(b"\x01\x02") == 0x0102
        assert be_uint([0, 0, 1, 0]) == 256
        assert be_uint(b"") == 0

    def test_ascii(self) -> None:
        assert ascii_text(b"ftyp\x00\xff") == "ftyp.."
        assert ascii_text([0x41, 0x42]) == "AB"

    def test_unsupported_input(self) -> None:
        assert be_uint(None) == 0
        assert ascii_text(42) == ""


# ###############
# Registration
# ###############


class TestRegisterBinary:
    def test_all_names_in_bin_namespace(self) -> None:
        registry = FunctionRegistry()
        register_binary(registry)
        assert registry.names() == [
            "bin::ascii",
            "bin::be_uint",
            "bin::fixed_16_16",
            "bin::fixed_8_8",
            "bin::language_code",
            "bin::to_hex",
        ]
