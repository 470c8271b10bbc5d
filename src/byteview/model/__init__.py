# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parsed values and the container model for inspected files."""

from byteview.model.container import (
    UNKNOWN_VERSION,
    ContainerModel,
    IndirectObject,
    InfoRow,
    ParseIssue,
)
from byteview.model.values import (
    HexString,
    IndirectRef,
    LiteralString,
    ParsedValue,
    display_string,
    is_name,
)

__all__ = [
    # Parsed values
    "ParsedValue",
    "LiteralString",
    "HexString",
    "IndirectRef",
    "display_string",
    "is_name",
    # Container
    "UNKNOWN_VERSION",
    "IndirectObject",
    "InfoRow",
    "ParseIssue",
    "ContainerModel",
]
