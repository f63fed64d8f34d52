"""Path lookup and typed accessors over decoded tag trees."""

from __future__ import annotations

from typing import Mapping, Sequence

from mc_inspector.errors import InvalidShapeError, TypeMismatchError

from .tags import Tag, TagType


def get(root: Tag, path: Sequence[str] | str) -> Tag | None:
    """Follow ``path`` through nested Compounds.

    Returns ``None`` as soon as a name is missing or an intermediate tag is not
    a Compound; absence is not an error.
    """
    if isinstance(path, str):
        path = (path,)

    current = root
    for name in path:
        if current.type is not TagType.COMPOUND:
            return None
        current = current.value.get(name)
        if current is None:
            return None
    return current


def _expect(tag: Tag, expected: TagType, path: str | None):
    if tag.type is not expected:
        raise TypeMismatchError(expected=expected.label, actual=tag.type.label, path=path)
    return tag.value


def as_byte(tag: Tag, path: str | None = None) -> int:
    return _expect(tag, TagType.BYTE, path)


def as_short(tag: Tag, path: str | None = None) -> int:
    return _expect(tag, TagType.SHORT, path)


def as_int(tag: Tag, path: str | None = None) -> int:
    return _expect(tag, TagType.INT, path)


def as_long(tag: Tag, path: str | None = None) -> int:
    return _expect(tag, TagType.LONG, path)


def as_float(tag: Tag, path: str | None = None) -> float:
    return _expect(tag, TagType.FLOAT, path)


def as_double(tag: Tag, path: str | None = None) -> float:
    return _expect(tag, TagType.DOUBLE, path)


def as_string(tag: Tag, path: str | None = None) -> str:
    return _expect(tag, TagType.STRING, path)


def as_compound(tag: Tag, path: str | None = None) -> Mapping[str, Tag]:
    return _expect(tag, TagType.COMPOUND, path)


def as_list(tag: Tag, path: str | None = None) -> tuple[Tag, ...]:
    return _expect(tag, TagType.LIST, path)


def as_double_triplet(tag: Tag, path: str | None = None) -> tuple[float, float, float]:
    """Read a List of exactly three Doubles, e.g. an entity's ``Pos``."""
    if tag.type is not TagType.LIST:
        raise InvalidShapeError(f"expected List of 3 Double, found {tag.type.label}", path=path)
    if tag.element_type is not TagType.DOUBLE:
        raise InvalidShapeError(f"expected List of 3 Double, found List of {tag.element_type.label}", path=path)
    if len(tag.value) != 3:
        raise InvalidShapeError(f"expected List of 3 Double, found {len(tag.value)} elements", path=path)
    x, y, z = (item.value for item in tag.value)
    return x, y, z
