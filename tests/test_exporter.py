from prometheus_client import CollectorRegistry, Counter

from softnet.exporter import METRICS, PrometheusMetricsExporter
from softnet.models import SoftnetStat

STATS = [
    SoftnetStat(processed=5, dropped=1, time_squeeze=2, cpu_collision=0),
    SoftnetStat(processed=6, dropped=0, time_squeeze=0, cpu_collision=3, received_rps=4, flow_limit_count=9),
]


def test_samples_are_grouped_by_cpu():
    exporter = PrometheusMetricsExporter()
    exporter.export_stats(STATS)
    samples = list(exporter.samples())

    metric_names = [name for name, _, _ in METRICS]
    assert [name for name, _, _ in samples] == metric_names * 2
    assert [cpu for _, cpu, _ in samples] == ['cpu0'] * 6 + ['cpu1'] * 6
    assert [value for _, _, value in samples[6:]] == [6, 0, 0, 3, 4, 9]


def test_absent_fields_are_exported_as_zero():
    exporter = PrometheusMetricsExporter()
    exporter.export_stat(0, STATS[0])
    values = {name: value for name, _, value in exporter.samples()}

    assert values['softnet_received_rps'] == 0
    assert values['softnet_flow_limit_count'] == 0


def test_exporting_same_cpu_twice_updates_values():
    exporter = PrometheusMetricsExporter()
    exporter.export_stat(0, STATS[0])
    exporter.export_stat(0, STATS[1])
    samples = list(exporter.samples())

    assert len(samples) == 6
    assert samples[0] == ('softnet_frames_processed', 'cpu0', 6)


def test_shared_registry_ignores_other_collectors():
    registry = CollectorRegistry()
    Counter('unrelated_events', 'Unrelated counter', registry=registry).inc()
    exporter = PrometheusMetricsExporter(registry=registry)
    exporter.export_stats(STATS[:1])

    assert all(name.startswith('softnet_') for name, _, _ in exporter.samples())


def test_generate_latest_exposition():
    exporter = PrometheusMetricsExporter()
    exporter.export_stats(STATS[:1])
    text = exporter.generate_latest()

    assert '# TYPE softnet_frames_processed gauge' in text
    assert 'softnet_frames_processed{cpu="cpu0"} 5.0' in text
    assert '# HELP softnet_flow_limit_count Number of times the RPS flow limit was reached' in text
