# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Format plugins that register helper functions into a FunctionRegistry."""

from byteview.expr.registry import FunctionRegistry
from byteview.plugins.binary import register_binary
from byteview.plugins.pdf import register_pdf

__all__ = [
    "default_registry",
    "register_binary",
    "register_pdf",
]


def default_registry(text_encoding: str = "cp1252", preview_bytes: int = 32) -> FunctionRegistry:
    """Create a registry populated with every bundled plugin."""
    registry = FunctionRegistry()
    register_binary(registry)
    register_pdf(registry, text_encoding=text_encoding, preview_bytes=preview_bytes)
    return registry
