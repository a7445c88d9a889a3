"""Exceptions raised while reading and parsing softnet statistics."""

from typing import Optional


class SoftnetError(Exception):
    """Base exception for all softnet_stat errors."""
    pass


class SourceUnavailableError(SoftnetError):
    """Raised when the statistics file cannot be opened or fully read."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not read {source}: {reason}")


class SoftnetParseError(SoftnetError):
    """Base exception for grammar failures.

    Attributes:
        source: Name of the input the buffer came from
        offset: Byte offset where parsing could not continue
        line: 1-based line number containing the offset
        expected: What the grammar expected at that offset
        context: Short excerpt of the remaining input
    """

    kind = "parse error"

    def __init__(self, source: str, offset: int, line: int, expected: str,
                 context: bytes = b'', detail: Optional[str] = None):
        self.source = source
        self.offset = offset
        self.line = line
        self.expected = expected
        self.context = context
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        message = f"{self.source}: {self.kind} at line {self.line}, byte {self.offset}: expected {self.expected}"
        if self.detail:
            message += f" ({self.detail})"
        if self.context:
            message += f", found {self.context!r}"
        else:
            message += ", found end of input"
        return message


class IncompleteInputError(SoftnetParseError):
    """Raised when the buffer ends before a record is complete."""

    kind = "incomplete input"


class MalformedInputError(SoftnetParseError):
    """Raised when a token, separator or line terminator is invalid."""

    kind = "malformed input"


class FieldOverflowError(MalformedInputError, OverflowError):
    """Raised when a hexadecimal field does not fit in 32 bits."""

    kind = "field overflow"


class SerializationError(SoftnetError):
    """Raised when records cannot be encoded to or decoded from JSON."""
    pass
