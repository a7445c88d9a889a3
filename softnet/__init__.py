"""Parser package for Linux softnet statistics."""

from .models import SoftnetStat
from .parser import SoftnetParser, parse_softnet_stats
from .exporter import PrometheusMetricsExporter
from .render import render_json, render_metrics, render_table, records_from_json

__all__ = [
    'SoftnetStat',
    'SoftnetParser',
    'parse_softnet_stats',
    'PrometheusMetricsExporter',
    'render_json',
    'render_metrics',
    'render_table',
    'records_from_json',
]
