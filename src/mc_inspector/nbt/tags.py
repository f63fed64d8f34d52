"""In-memory model of a decoded NBT tag tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Iterable, Mapping


class TagType(IntEnum):
    """Type ids as they appear on the wire."""

    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11
    LONG_ARRAY = 12

    @property
    def label(self) -> str:
        return "".join(part.capitalize() for part in self.name.split("_"))


@dataclass(frozen=True, slots=True)
class Tag:
    """One node of the tree. Compound values are read-only mappings.

    Names are not stored on the tag: inside a Compound they are the keys of
    ``value``, inside a List elements are unnamed. ``element_type`` is only set
    for List tags and is kept even when the list is empty.
    """

    type: TagType
    value: Any
    element_type: TagType | None = None

    @property
    def is_compound(self) -> bool:
        return self.type is TagType.COMPOUND

    def __repr__(self) -> str:
        if self.type is TagType.LIST:
            return f"List[{self.element_type.label}]({list(self.value)!r})"
        if self.type is TagType.COMPOUND:
            return f"Compound({dict(self.value)!r})"
        return f"{self.type.label}({self.value!r})"


def compound(entries: Mapping[str, Tag] | None = None) -> Tag:
    return Tag(TagType.COMPOUND, MappingProxyType(dict(entries or {})))


def list_of(element_type: TagType, items: Iterable[Tag] = ()) -> Tag:
    items = tuple(items)
    for item in items:
        if item.type is not element_type:
            raise ValueError(f"List[{element_type.label}] cannot hold {item.type.label}")
    return Tag(TagType.LIST, items, element_type=element_type)


def to_python(tag: Tag) -> Any:
    """Convert a tag tree into plain dicts, lists and scalars."""
    if tag.type is TagType.COMPOUND:
        return {name: to_python(child) for name, child in tag.value.items()}
    if tag.type is TagType.LIST:
        return [to_python(child) for child in tag.value]
    if tag.type in (TagType.BYTE_ARRAY, TagType.INT_ARRAY, TagType.LONG_ARRAY):
        return list(tag.value)
    return tag.value
