"""Prometheus metrics for the project data-access layer"""

import logging
from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)


# Authorization metrics
authorization_decisions_total = Counter(
    'authorization_decisions_total',
    'Ownership policy outcomes',
    ['resource', 'action', 'outcome']
)

# Rollup metrics
progress_rollups_total = Counter(
    'progress_rollups_total',
    'Project progress recomputations',
    ['status']
)

progress_rollup_duration_seconds = Histogram(
    'progress_rollup_duration_seconds',
    'Time spent recomputing project progress',
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Write metrics
records_created_total = Counter(
    'records_created_total',
    'Records created per entity type',
    ['entity']
)


class MetricsCollector:
    """Thin recorder over the module-level Prometheus metrics"""

    def record_authorization(self, resource: str, action: str, outcome: str):
        """Record an allow/deny outcome for a read or write"""
        authorization_decisions_total.labels(
            resource=resource,
            action=action,
            outcome=outcome
        ).inc()

    def record_rollup(self, status: str, duration_seconds: float):
        """Record a progress rollup"""
        progress_rollups_total.labels(status=status).inc()
        progress_rollup_duration_seconds.observe(duration_seconds)

    def record_created(self, entity: str):
        """Record a persisted record"""
        records_created_total.labels(entity=entity).inc()


# Global metrics collector instance
metrics_collector = MetricsCollector()
