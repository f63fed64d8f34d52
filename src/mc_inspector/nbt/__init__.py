"""NBT tag-tree model, decoder and navigation helpers."""

from .decoder import DEFAULT_MAX_DEPTH, MAX_DEPTH_CEILING, decode, decode_named
from .encoder import encode
from .navigation import (
    as_byte,
    as_compound,
    as_double,
    as_double_triplet,
    as_float,
    as_int,
    as_list,
    as_long,
    as_short,
    as_string,
    get,
)
from .tags import Tag, TagType, compound, list_of, to_python

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_CEILING",
    "Tag",
    "TagType",
    "as_byte",
    "as_compound",
    "as_double",
    "as_double_triplet",
    "as_float",
    "as_int",
    "as_list",
    "as_long",
    "as_short",
    "as_string",
    "compound",
    "decode",
    "decode_named",
    "encode",
    "get",
    "list_of",
    "to_python",
]
