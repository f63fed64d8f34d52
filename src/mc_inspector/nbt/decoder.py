"""Recursive-descent decoder for big-endian NBT records.

Every tag is discovered by following the grammar from the cursor, so field
names are never matched against arbitrary bytes. Nested Compounds and Lists
recurse one Python frame per level and are bounded by ``max_depth``.
"""

from __future__ import annotations

import struct
from types import MappingProxyType

from mc_inspector.errors import (
    DepthExceededError,
    InvalidLengthError,
    InvalidStringError,
    InvalidTypeError,
    TruncatedError,
)

from .tags import Tag, TagType

DEFAULT_MAX_DEPTH = 512
# Each nesting level costs one Python frame; deeper limits would hit the
# interpreter recursion limit before the decoder could report them.
MAX_DEPTH_CEILING = 512

_UBYTE = struct.Struct(">B")
_USHORT = struct.Struct(">H")
_LENGTH = struct.Struct(">i")

_SCALARS = {
    TagType.BYTE: struct.Struct(">b"),
    TagType.SHORT: struct.Struct(">h"),
    TagType.INT: struct.Struct(">i"),
    TagType.LONG: struct.Struct(">q"),
    TagType.FLOAT: struct.Struct(">f"),
    TagType.DOUBLE: struct.Struct(">d"),
}

_ARRAYS = {
    TagType.BYTE_ARRAY: ("b", 1),
    TagType.INT_ARRAY: ("i", 4),
    TagType.LONG_ARRAY: ("q", 8),
}

# Smallest number of bytes one payload of each type can occupy.
_MIN_PAYLOAD_SIZE = {
    TagType.END: 0,
    TagType.BYTE: 1,
    TagType.SHORT: 2,
    TagType.INT: 4,
    TagType.LONG: 8,
    TagType.FLOAT: 4,
    TagType.DOUBLE: 8,
    TagType.BYTE_ARRAY: 4,
    TagType.STRING: 2,
    TagType.LIST: 5,
    TagType.COMPOUND: 1,
    TagType.INT_ARRAY: 4,
    TagType.LONG_ARRAY: 4,
}


class _Reader:
    __slots__ = ("_data", "_pos", "_max_depth")

    def __init__(self, data: bytes, max_depth: int) -> None:
        self._data = memoryview(bytes(data))
        self._pos = 0
        self._max_depth = max_depth

    def root(self) -> tuple[str, Tag]:
        root_type = self._type_byte("root tag type")
        if root_type is not TagType.COMPOUND:
            raise InvalidTypeError(f"root tag must be Compound, found {root_type.label}", offset=0)
        name = self._string("root tag name")
        return name, self._read(TagType.COMPOUND, 1)

    @property
    def position(self) -> int:
        return self._pos

    def _remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, size: int, what: str) -> memoryview:
        if size > self._remaining():
            raise TruncatedError(f"unexpected end of data while reading {what}", offset=self._pos)
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def _unpack(self, fmt: struct.Struct, what: str):
        return fmt.unpack(self._take(fmt.size, what))[0]

    def _type_byte(self, what: str) -> TagType:
        offset = self._pos
        raw = self._unpack(_UBYTE, what)
        try:
            return TagType(raw)
        except ValueError:
            raise InvalidTypeError(f"unknown tag type {raw}", offset=offset) from None

    def _string(self, what: str) -> str:
        length = self._unpack(_USHORT, f"{what} length")
        offset = self._pos
        raw = self._take(length, what)
        try:
            return bytes(raw).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidStringError(f"{what} is not valid UTF-8: {exc.reason}", offset=offset + exc.start) from None

    def _length(self, what: str, item_size: int) -> int:
        offset = self._pos
        length = self._unpack(_LENGTH, f"{what} length")
        if length < 0:
            raise InvalidLengthError(f"negative {what} length {length}", offset=offset)
        if length * item_size > self._remaining():
            raise TruncatedError(
                f"{what} declares {length} items but only {self._remaining()} bytes remain",
                offset=self._pos,
            )
        return length

    def _read(self, tag_type: TagType, depth: int) -> Tag:
        scalar = _SCALARS.get(tag_type)
        if scalar is not None:
            return Tag(tag_type, self._unpack(scalar, tag_type.label))

        if tag_type in _ARRAYS:
            code, width = _ARRAYS[tag_type]
            length = self._length(tag_type.label, width)
            chunk = self._take(length * width, tag_type.label)
            return Tag(tag_type, struct.unpack(f">{length}{code}", chunk))

        if tag_type is TagType.STRING:
            return Tag(tag_type, self._string("String"))

        if depth > self._max_depth:
            raise DepthExceededError(f"nesting deeper than {self._max_depth} levels", offset=self._pos)

        if tag_type is TagType.LIST:
            type_offset = self._pos
            element_type = self._type_byte("List element type")
            length = self._length("List", _MIN_PAYLOAD_SIZE[element_type])
            if element_type is TagType.END and length:
                raise InvalidTypeError(f"List of End cannot hold {length} elements", offset=type_offset)
            items: list[Tag] = []
            for _ in range(length):
                items.append(self._read(element_type, depth + 1))
            return Tag(tag_type, tuple(items), element_type=element_type)

        if tag_type is TagType.COMPOUND:
            entries: dict[str, Tag] = {}
            while True:
                child_type = self._type_byte("tag type")
                if child_type is TagType.END:
                    return Tag(tag_type, MappingProxyType(entries))
                name = self._string("tag name")
                entries[name] = self._read(child_type, depth + 1)

        raise InvalidTypeError("End tag has no payload", offset=self._pos)


def decode_named(data: bytes, *, max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[str, Tag]:
    """Decode one record and return the root's name with its Compound.

    ``max_depth`` must lie between 1 and ``MAX_DEPTH_CEILING``.
    """
    if not 1 <= max_depth <= MAX_DEPTH_CEILING:
        raise ValueError(f"max_depth must be between 1 and {MAX_DEPTH_CEILING}, got {max_depth}")
    reader = _Reader(data, max_depth)
    try:
        return reader.root()
    except RecursionError:
        raise DepthExceededError("nesting exhausted the interpreter stack", offset=reader.position) from None


def decode(data: bytes, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Tag:
    """Decode one record into its root Compound. Trailing bytes are ignored."""
    return decode_named(data, max_depth=max_depth)[1]
