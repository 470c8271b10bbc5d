# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Container model produced by the syntactic analysis of one file."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from byteview.model.values import IndirectRef, display_string

# ###############
# Public Interface
# ###############

UNKNOWN_VERSION = "Unknown"


class IndirectObject(BaseModel):
    """A numbered, generation-versioned object, optionally carrying a stream payload.

    Attributes:
        num: Object number.
        gen: Generation number.
        value: The parsed object body; normally a dictionary.
        is_stream: True if the body is followed by a ``stream`` keyword.
        stream_offset: Absolute offset of the first payload byte.
        stream_bytes: The payload, excluding the end-of-line after ``stream``
            and every byte of ``endstream``. None if no ``endstream`` was found.
        stream_length: ``len(stream_bytes)`` when the payload is known.
    """

    model_config = ConfigDict(frozen=True)

    num: int
    gen: int
    value: Any = None
    is_stream: bool = False
    stream_offset: int | None = None
    stream_bytes: bytes | None = None
    stream_length: int | None = None

    @property
    def key(self) -> tuple[int, int]:
        return (self.num, self.gen)

    @property
    def dictionary(self) -> dict[str, Any]:
        """The body if it is a dictionary, else an empty dict."""
        return self.value if isinstance(self.value, dict) else {}

    @property
    def is_image(self) -> bool:
        return self.dictionary.get("Subtype") == "/Image"

    def hex_preview(self, limit: int = 32) -> str:
        """Return the first *limit* payload bytes as space-separated hex pairs."""
        if not self.stream_bytes:
            return ""
        return " ".join(f"{b:02x}" for b in self.stream_bytes[:limit])

    def dict_preview(self, encoding: str = "cp1252") -> str:
        """Return the dictionary as one ``/Key value`` line per entry."""
        return "\n".join(f"/{key} {display_string(value, encoding)}" for key, value in self.dictionary.items())

    @property
    def dict_text_preview(self) -> str:
        return self.dict_preview()


class InfoRow(BaseModel):
    """One document information entry rendered as display text."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class ParseIssue(BaseModel):
    """A structural error recovered from while building a partial model.

    Attributes:
        section: What was being parsed, e.g. ``"object 4 0"`` or ``"trailer"``.
        message: The error message.
        cursor: Token index where the error was detected.
    """

    model_config = ConfigDict(frozen=True)

    section: str
    message: str
    cursor: int


class ContainerModel(BaseModel):
    """The navigable object graph of one inspected file. Read-only once built."""

    model_config = ConfigDict(frozen=True)

    version: str = UNKNOWN_VERSION
    objects: list[IndirectObject] = _Field(default_factory=list)
    trailer: dict[str, Any] | None = None
    info_rows: list[InfoRow] = _Field(default_factory=list)
    startxref: int | None = None
    issues: list[ParseIssue] = _Field(default_factory=list)

    def get_object(self, num: int, gen: int = 0) -> IndirectObject | None:
        """Return the object with the given number and generation, if present."""
        for obj in self.objects:
            if obj.num == num and obj.gen == gen:
                return obj
        return None

    def resolve(self, value: Any) -> Any:
        """Follow an IndirectRef to its object body; other values pass through."""
        if isinstance(value, IndirectRef):
            obj = self.get_object(value.num, value.gen)
            return obj.value if obj is not None else None
        return value
