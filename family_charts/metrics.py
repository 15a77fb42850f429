"""Prometheus metrics for chart generation."""

from prometheus_client import CollectorRegistry, Counter, Histogram

from family_charts.config import settings


REGISTRY = CollectorRegistry(auto_describe=True)

_namespace = settings.metrics.namespace

CHART_RENDER_DURATION = Histogram(
    "chart_render_duration_seconds",
    "Time to generate chart data",
    labelnames=("chart_type",),
    namespace=_namespace,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=REGISTRY,
)

CHART_NODE_COUNT = Histogram(
    "chart_node_count",
    "Number of nodes in generated chart",
    labelnames=("chart_type",),
    namespace=_namespace,
    buckets=(1, 5, 10, 25, 50, 100, 250, 500, 1000),
    registry=REGISTRY,
)

CHART_VIEWS = Counter(
    "chart_views_total",
    "Number of times charts are generated",
    labelnames=("chart_type",),
    namespace=_namespace,
    registry=REGISTRY,
)


def record_chart_metrics(chart_type: str, node_count: int, seconds: float) -> None:
    """Record duration, size and one view for a generated chart."""
    CHART_RENDER_DURATION.labels(chart_type=chart_type).observe(max(seconds, 0.0))
    CHART_NODE_COUNT.labels(chart_type=chart_type).observe(node_count)
    CHART_VIEWS.labels(chart_type=chart_type).inc()
