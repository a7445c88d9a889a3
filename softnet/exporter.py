"""Export softnet statistics as Prometheus metrics."""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from prometheus_client import CollectorRegistry, Gauge
from prometheus_client.exposition import generate_latest

from .models import SoftnetStat
from .utils import cpu_label

# Metric name, record attribute and help text, in output order
METRICS = (
    ('softnet_frames_processed', 'processed', 'Number of network frames processed'),
    ('softnet_frames_dropped', 'dropped', 'Number of network frames dropped because the processing queue was full'),
    ('softnet_time_squeeze', 'time_squeeze', 'Number of times net_rx_action ran out of budget or time with work remaining'),
    ('softnet_cpu_collisions', 'cpu_collision', 'Number of collisions obtaining the device lock when transmitting'),
    ('softnet_received_rps', 'received_rps', 'Number of times this CPU was woken up via inter-processor interrupt'),
    ('softnet_flow_limit_count', 'flow_limit_count', 'Number of times the RPS flow limit was reached'),
)


class PrometheusMetricsExporter:
    """Export softnet statistics as Prometheus metrics."""
    
    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()
        self._setup_metrics()
    
    def _setup_metrics(self):
        """Set up one gauge per exposed field, labelled by CPU."""
        self.gauges: Dict[str, Gauge] = {}
        for metric_name, _, documentation in METRICS:
            self.gauges[metric_name] = Gauge(
                metric_name,
                documentation,
                ['cpu'],
                registry=self.registry
            )
        
        # CPU labels in the order they were exported
        self.cpus: List[str] = []
    
    def export_stat(self, cpu: int, stat: SoftnetStat):
        """Export metrics for a single CPU. Absent fields are exported as 0."""
        label = cpu_label(cpu)
        for metric_name, attribute, _ in METRICS:
            value = getattr(stat, attribute)
            self.gauges[metric_name].labels(cpu=label).set(value if value is not None else 0)
        
        if label not in self.cpus:
            self.cpus.append(label)
    
    def export_stats(self, stats: Iterable[SoftnetStat]):
        """Export metrics for every CPU; position in the sequence is the CPU index."""
        for cpu, stat in enumerate(stats):
            self.export_stat(cpu, stat)
    
    def samples(self) -> Iterator[Tuple[str, str, float]]:
        """Yield (metric name, cpu label, value), grouped by CPU in export order."""
        values: Dict[Tuple[str, str], float] = {}
        for family in self.registry.collect():
            if family.name not in self.gauges:
                continue
            for sample in family.samples:
                values[(sample.name, sample.labels.get('cpu', ''))] = sample.value
        
        for label in self.cpus:
            for metric_name, _, _ in METRICS:
                value = values.get((metric_name, label))
                if value is not None:
                    yield metric_name, label, value
    
    def generate_latest(self) -> str:
        """Return the registry in the full Prometheus text exposition format."""
        return generate_latest(self.registry).decode('utf-8')
