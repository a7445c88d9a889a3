"""Parser for /proc/net/softnet_stat content."""

import re
from typing import List, Optional, Type, Union

from .exceptions import (
    FieldOverflowError,
    IncompleteInputError,
    MalformedInputError,
    SoftnetParseError,
)
from .models import U32_MAX, SoftnetStat

HEX_PATTERN = re.compile(rb'[0-9a-fA-F]+')
SPACE_PATTERN = re.compile(rb' +')
LINE_END_PATTERN = re.compile(rb'\r?\n')

# Columns every kernel prints, in order. The five unnamed columns were
# fastroute and related counters that now always read 0.
MANDATORY_FIELDS = (
    'processed',
    'dropped',
    'time_squeeze',
    'unused field 1',
    'unused field 2',
    'unused field 3',
    'unused field 4',
    'unused field 5',
    'cpu_collision',
)

# Bytes of remaining input quoted in error messages
CONTEXT_LENGTH = 24


class SoftnetParser:
    """Parser for softnet statistics.

    Each line holds the mandatory hexadecimal columns followed by up to two
    optional ones: received_rps (kernel 2.6.36+) and flow_limit_count
    (kernel 3.11+). The whole buffer must parse; any bad line aborts the run.
    """

    def __init__(self, data: Union[bytes, bytearray, str], source: str = '<buffer>'):
        """Initialize the parser.

        Args:
            data: Full content of the statistics file
            source: Name of the input, used in error messages
        """
        if isinstance(data, str):
            data = data.encode('utf-8')
        self.data = bytes(data)
        self.source = source
        self.pos = 0

    def parse(self) -> List[SoftnetStat]:
        """Parse the buffer and return one record per CPU, CPU 0 first.

        Raises:
            IncompleteInputError: If the buffer ends before a line is complete,
                including an empty buffer
            MalformedInputError: If a token, separator or terminator is invalid
        """
        self.pos = 0
        stats: List[SoftnetStat] = []

        # At least one line, then keep going until the buffer is consumed
        while True:
            stats.append(self._parse_line())
            if self.pos >= len(self.data):
                break

        return stats

    def _parse_line(self) -> SoftnetStat:
        """Parse a single CPU line, including its terminator."""
        fields = [self._parse_hex(MANDATORY_FIELDS[0])]
        for name in MANDATORY_FIELDS[1:]:
            self._parse_space(name)
            fields.append(self._parse_hex(name))

        # Optional columns are positional: flow_limit_count only follows received_rps
        received_rps = self._parse_optional('received_rps')
        flow_limit_count = None
        if received_rps is not None:
            flow_limit_count = self._parse_optional('flow_limit_count')

        self._parse_line_end()

        return SoftnetStat(
            processed=fields[0],
            dropped=fields[1],
            time_squeeze=fields[2],
            cpu_collision=fields[-1],
            received_rps=received_rps,
            flow_limit_count=flow_limit_count,
        )

    def _parse_hex(self, name: str) -> int:
        match = HEX_PATTERN.match(self.data, self.pos)
        if match is None:
            self._fail(f"hexadecimal value for {name}")

        value = int(match.group(), 16)
        if value > U32_MAX:
            self._fail(
                f"32-bit hexadecimal value for {name}",
                error=FieldOverflowError,
                detail=f"0x{match.group().decode('ascii')} exceeds 0x{U32_MAX:x}",
            )

        self.pos = match.end()
        return value

    def _parse_space(self, name: str) -> None:
        match = SPACE_PATTERN.match(self.data, self.pos)
        if match is None:
            self._fail(f"space before {name}")
        self.pos = match.end()

    def _parse_optional(self, name: str) -> Optional[int]:
        """Consume an optional column, or nothing if no hex token follows.

        Trailing spaces before the line terminator are not a column.
        """
        start = self.pos
        space = SPACE_PATTERN.match(self.data, start)
        if space is not None:
            start = space.end()
        if HEX_PATTERN.match(self.data, start) is None:
            return None

        self.pos = start
        return self._parse_hex(name)

    def _parse_line_end(self) -> None:
        match = LINE_END_PATTERN.match(self.data, self.pos)
        if match is None:
            # A lone carriage return at the very end is a truncated CRLF
            if self.data[self.pos:] == b'\r':
                self.pos += 1
            self._fail("line terminator")
        self.pos = match.end()

    def _fail(self, expected: str, error: Optional[Type[SoftnetParseError]] = None,
              detail: Optional[str] = None):
        """Raise a parse error for the current position."""
        offset = self.pos
        if error is None:
            error = IncompleteInputError if offset >= len(self.data) else MalformedInputError

        context = self.data[offset:offset + CONTEXT_LENGTH]
        newline = context.find(b'\n')
        if newline != -1:
            context = context[:newline + 1]

        raise error(
            source=self.source,
            offset=offset,
            line=self.data.count(b'\n', 0, offset) + 1,
            expected=expected,
            context=context,
            detail=detail,
        )


def parse_softnet_stats(data: Union[bytes, bytearray, str], source: str = '<buffer>') -> List[SoftnetStat]:
    """Parse softnet_stat content into records, one per CPU."""
    return SoftnetParser(data, source=source).parse()
