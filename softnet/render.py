"""Render parsed softnet statistics as a table, JSON or metrics lines."""

import json
import sys
from typing import List, Optional, Sequence, TextIO

from .exceptions import SerializationError
from .exporter import PrometheusMetricsExporter
from .models import SoftnetStat
from .utils import format_optional

DEFAULT_COLUMN_WIDTH = 15

TABLE_HEADERS = (
    'Cpu',
    'Processed',
    'Dropped',
    'Time Squeezed',
    'Cpu Collision',
    'Received RPS',
    'Flow Limit Count',
)


def _format_row(cells, column_width: int) -> str:
    return ''.join(f"{cell:<{column_width}}" for cell in cells)


def render_table(stats: Sequence[SoftnetStat], column_width: int = DEFAULT_COLUMN_WIDTH,
                 out: Optional[TextIO] = None) -> None:
    """Print a fixed-width table with one row per CPU.
    
    Cells are left-justified and padded to column_width. Absent optional
    counters are shown as 0.
    """
    if out is None:
        out = sys.stdout
    print(_format_row(TABLE_HEADERS, column_width), file=out)
    
    for cpu, stat in enumerate(stats):
        print(_format_row((
            cpu,
            stat.processed,
            stat.dropped,
            stat.time_squeeze,
            stat.cpu_collision,
            format_optional(stat.received_rps),
            format_optional(stat.flow_limit_count),
        ), column_width), file=out)


def render_json(stats: Sequence[SoftnetStat], out: Optional[TextIO] = None,
                indent: Optional[int] = None) -> None:
    """Print all records as one JSON array. Absent optional counters are null.
    
    Raises:
        SerializationError: If the records cannot be encoded
    """
    if out is None:
        out = sys.stdout
    separators = None if indent is not None else (',', ':')
    try:
        data = json.dumps([stat.to_dict() for stat in stats], indent=indent, separators=separators)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode stats into json format: {e}") from e
    print(data, file=out)


def records_from_json(text: str) -> List[SoftnetStat]:
    """Rebuild records from the output of render_json.
    
    Raises:
        SerializationError: If the text is not a JSON array of records
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise SerializationError(f"Invalid JSON: {e}") from e
    
    if not isinstance(data, list):
        raise SerializationError(f"Expected a JSON array, got {type(data).__name__}")
    return [SoftnetStat.from_dict(item) for item in data]


def render_metrics(stats: Sequence[SoftnetStat], out: Optional[TextIO] = None) -> None:
    """Print six metric lines per CPU, e.g. softnet_frames_dropped{cpu="cpu0"} 0."""
    if out is None:
        out = sys.stdout
    exporter = PrometheusMetricsExporter()
    exporter.export_stats(stats)
    
    for metric_name, cpu, value in exporter.samples():
        print(f'{metric_name}{{cpu="{cpu}"}} {int(value)}', file=out)
