"""Utility functions and constants for softnet_stat."""

import sys
from typing import BinaryIO, Optional

from .exceptions import SourceUnavailableError

DEFAULT_SOURCE = '/proc/net/softnet_stat'
STDIN_SOURCE = '<stdin>'


def cpu_label(cpu: int) -> str:
    """Return the label value used for a CPU index, e.g. "cpu0"."""
    return f"cpu{cpu}"


def format_optional(value: Optional[int]) -> int:
    """Display value of an optional counter. Absent counters are shown as 0."""
    return value if value is not None else 0


def log(message: str, verbose: bool = True) -> None:
    """Print a diagnostic message to stderr when verbose is enabled."""
    if verbose:
        print(message, file=sys.stderr)


def read_stream(handle: BinaryIO, source: str) -> bytes:
    """Read a binary stream to completion."""
    try:
        return handle.read()
    except OSError as e:
        raise SourceUnavailableError(source, e.strerror or str(e)) from e


def read_source(path: Optional[str] = None, use_stdin: bool = False,
                stdin: Optional[BinaryIO] = None) -> bytes:
    """Read the whole statistics source before any parsing happens.
    
    Args:
        path: File to read (default: /proc/net/softnet_stat)
        use_stdin: Read standard input instead of the file
        stdin: Binary stream to use as standard input (default: sys.stdin.buffer)
    
    Returns:
        The raw content as bytes
    
    Raises:
        SourceUnavailableError: If the file cannot be opened or read
    """
    if use_stdin:
        handle = stdin if stdin is not None else sys.stdin.buffer
        return read_stream(handle, STDIN_SOURCE)
    
    path = path or DEFAULT_SOURCE
    try:
        with open(path, 'rb') as f:
            return read_stream(f, path)
    except OSError as e:
        raise SourceUnavailableError(path, e.strerror or str(e)) from e
