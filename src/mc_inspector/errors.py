"""Failure vocabulary shared by the decoder, the extractor and the scan runtime."""

from __future__ import annotations


class InspectorError(Exception):
    """Base class for every recoverable, per-file failure."""

    kind = "error"

    def describe(self) -> str:
        return f"{self.kind}: {self}"


class RecordReadError(InspectorError):
    """Raised when a record file cannot be read from disk."""

    kind = "io_error"


class DecompressionError(InspectorError):
    """Raised when a record file is not a valid gzip/zlib stream."""

    kind = "decompression_error"


class DecodeError(InspectorError):
    """Structural violation of the tag grammar at a given byte offset."""

    kind = "decode_error"

    def __init__(self, message: str, *, offset: int) -> None:
        super().__init__(f"{message} (at byte {offset})")
        self.offset = offset


class TruncatedError(DecodeError):
    kind = "truncated"


class InvalidTypeError(DecodeError):
    kind = "invalid_type"


class InvalidStringError(DecodeError):
    kind = "invalid_string"


class InvalidLengthError(DecodeError):
    kind = "invalid_length"


class DepthExceededError(DecodeError):
    kind = "depth_exceeded"


class ExtractionError(InspectorError):
    """The tag tree is well formed but a required field is missing or misshapen."""

    kind = "extraction_error"

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class FieldMissingError(ExtractionError):
    kind = "field_missing"

    def __init__(self, path: str) -> None:
        super().__init__("required field is missing", path=path)


class TypeMismatchError(ExtractionError):
    kind = "type_mismatch"

    def __init__(self, *, expected: str, actual: str, path: str | None = None) -> None:
        super().__init__(f"expected {expected} tag, found {actual}", path=path)
        self.expected = expected
        self.actual = actual


class InvalidShapeError(ExtractionError):
    kind = "invalid_shape"


class UsernameLookupError(InspectorError):
    """Raised by username lookup backends; only ever degrades presentation."""

    kind = "lookup_error"
