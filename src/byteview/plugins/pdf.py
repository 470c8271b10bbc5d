# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""``pdf::`` helper functions for display templates."""

import base64
from typing import Any

from byteview.expr.registry import FunctionRegistry
from byteview.model.container import ContainerModel, IndirectObject
from byteview.model.values import IndirectRef, display_string

# ###############
# Public Interface
# ###############


def register_pdf(registry: FunctionRegistry, text_encoding: str = "cp1252", preview_bytes: int = 32) -> None:
    """Register the PDF helpers into *registry*."""

    @registry.function("pdf::decode_text")
    def decode_text(value: Any) -> str:
        return display_string(value, text_encoding)

    @registry.function("pdf::hex_preview")
    def hex_preview(obj: Any, limit: Any = None) -> str:
        count = preview_bytes if limit is None else int(limit)
        if isinstance(obj, IndirectObject):
            return obj.hex_preview(count)
        if isinstance(obj, (bytes, bytearray)):
            return " ".join(f"{b:02x}" for b in obj[:count])
        return ""

    @registry.function("pdf::dict_text_preview")
    def dict_text_preview(obj: Any) -> str:
        return obj.dict_preview(text_encoding) if isinstance(obj, IndirectObject) else ""

    registry.register("pdf::is_image", is_image)
    registry.register("pdf::ref_key", ref_key)
    registry.register("pdf::resolve", resolve)
    registry.register("pdf::object_count", object_count)
    registry.register("pdf::build_image_data_url", build_image_data_url)


def is_image(obj: Any) -> bool:
    return isinstance(obj, IndirectObject) and obj.is_image


def ref_key(ref: Any) -> str:
    """Format a reference (or an object's own key) as ``num gen R``."""
    if isinstance(ref, IndirectRef):
        return str(ref)
    if isinstance(ref, IndirectObject):
        return f"{ref.num} {ref.gen} R"
    return ""


def resolve(model: Any, ref: Any) -> Any:
    """Resolve *ref* against *model*; non-references pass through."""
    if not isinstance(model, ContainerModel):
        return None
    return model.resolve(ref)


def object_count(model: Any) -> int:
    return len(model.objects) if isinstance(model, ContainerModel) else 0


def build_image_data_url(obj: Any) -> str | None:
    """Build a ``data:`` URL for an image stream object.

    JPEG payloads (``/DCTDecode``) are embedded base64-encoded. Any other
    filter yields a ``data:text/plain,unsupported_filter:<filter>`` URL so the
    viewer can say why no image is shown. Returns None for anything that is
    not an image stream.
    """
    if not isinstance(obj, IndirectObject) or not obj.is_stream or not obj.is_image:
        return None
    image_filter = obj.dictionary.get("Filter")
    if isinstance(image_filter, list) and len(image_filter) == 1:
        image_filter = image_filter[0]
    if image_filter == "/DCTDecode":
        return "data:image/jpeg;base64," + base64.b64encode(obj.stream_bytes or b"").decode("ascii")
    return f"data:text/plain,unsupported_filter:{display_string(image_filter).lstrip('/')}"
