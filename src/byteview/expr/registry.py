# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Named host functions invocable from template call terms.

Function names are grouped by owning plugin with a double-colon namespace,
e.g. ``pdf::decode_text``. A registry is an ordinary object: it is created
and populated at the application's composition root and handed to whatever
builds the evaluation hooks.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

# ###############
# Public Interface
# ###############

HostFunction = Callable[..., Any]


class RegistryError(Exception):
    """Raised when a function name does not follow the ``namespace::name`` form."""


class FunctionRegistry:
    """Table of named host functions."""

    def __init__(self) -> None:
        self._functions: dict[str, HostFunction] = {}

    def register(self, name: str, fn: HostFunction) -> None:
        """Register *fn* under *name*, replacing any previous registration.

        Raises:
            RegistryError: If *name* is not of the form ``namespace::name``.
        """
        if not _NAME_RE.fullmatch(name):
            raise RegistryError(f"Invalid function name {name!r}: expected 'namespace::name'")
        self._functions[name] = fn

    def function(self, name: str) -> Callable[[HostFunction], HostFunction]:
        """Decorator form of :meth:`register`."""

        def decorator(fn: HostFunction) -> HostFunction:
            self.register(name, fn)
            return fn

        return decorator

    def get_function(self, name: str) -> HostFunction | None:
        return self._functions.get(name)

    def names(self, namespace: str | None = None) -> list[str]:
        """Return registered names, sorted, optionally limited to one namespace."""
        if namespace is None:
            return sorted(self._functions)
        prefix = f"{namespace}::"
        return sorted(n for n in self._functions if n.startswith(prefix))

    def namespaces(self) -> list[str]:
        return sorted({n.split("::", 1)[0] for n in self._functions})

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __len__(self) -> int:
        return len(self._functions)


# ################
# Implementation
# ################

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*::[A-Za-z_][A-Za-z0-9_]*")
