# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""JSON rendition of a ContainerModel.

The output is versioned so consumers can detect format changes. Parsed
values that have no JSON counterpart are tagged objects: byte strings become
``{"t": "string" | "hex_string", "hex": ...}`` and references become
``{"t": "ref", "num": ..., "gen": ...}``.
"""

from __future__ import annotations

import json
from typing import Any

from byteview.model.container import ContainerModel, IndirectObject
from byteview.model.values import HexString, IndirectRef, LiteralString

# ###############
# Public Interface
# ###############

EXPORT_FORMAT_VERSION = "1"


def model_to_dict(model: ContainerModel, preview_bytes: int = 32) -> dict[str, Any]:
    """Convert a model to plain JSON-compatible data.

    Stream payloads are not included; each stream object carries its length
    and a hex preview of the first *preview_bytes* bytes instead.
    """
    return {
        "v": EXPORT_FORMAT_VERSION,
        "version": model.version,
        "objects": [_object_to_dict(o, preview_bytes) for o in model.objects],
        "trailer": value_to_json(model.trailer) if model.trailer is not None else None,
        "info": [{"key": row.key, "value": row.value} for row in model.info_rows],
        "startxref": model.startxref,
        "issues": [issue.model_dump() for issue in model.issues],
    }


def serialize(model: ContainerModel, preview_bytes: int = 32) -> str:
    """Serialize a model to an indented JSON string."""
    return json.dumps(model_to_dict(model, preview_bytes), indent=2)


def value_to_json(value: Any) -> Any:
    """Convert one parsed value to JSON-compatible data."""
    if isinstance(value, LiteralString):
        return {"t": "string", "hex": value.data.hex()}
    if isinstance(value, HexString):
        return {"t": "hex_string", "hex": value.data.hex()}
    if isinstance(value, IndirectRef):
        return {"t": "ref", "num": value.num, "gen": value.gen}
    if isinstance(value, list):
        return [value_to_json(v) for v in value]
    if isinstance(value, dict):
        return {k: value_to_json(v) for k, v in value.items()}
    return value


# ################
# Implementation
# ################


def _object_to_dict(obj: IndirectObject, preview_bytes: int) -> dict[str, Any]:
    d: dict[str, Any] = {"num": obj.num, "gen": obj.gen, "value": value_to_json(obj.value)}
    if obj.is_stream:
        d["stream"] = {
            "offset": obj.stream_offset,
            "length": obj.stream_length,
            "preview": obj.hex_preview(preview_bytes),
        }
    if obj.is_image:
        d["image"] = True
    return d
