"""Reference encoder, used to build fixtures and to check decode round trips."""

from __future__ import annotations

import struct

from .tags import Tag, TagType

_SCALAR_FORMATS = {
    TagType.BYTE: ">b",
    TagType.SHORT: ">h",
    TagType.INT: ">i",
    TagType.LONG: ">q",
    TagType.FLOAT: ">f",
    TagType.DOUBLE: ">d",
}

_ARRAY_CODES = {
    TagType.BYTE_ARRAY: "b",
    TagType.INT_ARRAY: "i",
    TagType.LONG_ARRAY: "q",
}


def _string(text: str) -> bytes:
    raw = text.encode("utf-8")
    return struct.pack(">H", len(raw)) + raw


def _payload(tag: Tag) -> bytes:
    if tag.type in _SCALAR_FORMATS:
        return struct.pack(_SCALAR_FORMATS[tag.type], tag.value)
    if tag.type in _ARRAY_CODES:
        values = tuple(tag.value)
        return struct.pack(f">i{len(values)}{_ARRAY_CODES[tag.type]}", len(values), *values)
    if tag.type is TagType.STRING:
        return _string(tag.value)
    if tag.type is TagType.LIST:
        items = tuple(tag.value)
        header = struct.pack(">Bi", tag.element_type, len(items))
        return header + b"".join(_payload(item) for item in items)
    if tag.type is TagType.COMPOUND:
        parts = [struct.pack(">B", child.type) + _string(name) + _payload(child) for name, child in tag.value.items()]
        return b"".join(parts) + b"\x00"
    raise ValueError(f"{tag.type.label} tag has no payload")


def encode(root: Tag, name: str = "") -> bytes:
    """Encode a root Compound with the given name."""
    if root.type is not TagType.COMPOUND:
        raise ValueError(f"root tag must be Compound, got {root.type.label}")
    return struct.pack(">B", TagType.COMPOUND) + _string(name) + _payload(root)
