"""
Prometheus metrics for Pod Pruner
"""

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, start_http_server

from .logger import get_logger
from .models import ResourceKind

logger = get_logger(__name__)


class PrunerMetrics:
    """Counters for pruned pods, containers and jobs, labelled by namespace and state"""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else CollectorRegistry()

        self.pods_pruned = Counter(
            "pods_pruned_total",
            "Total number of pods pruned",
            ["namespace", "state"],
            registry=self.registry,
        )
        self.containers_pruned = Counter(
            "containers_pruned_total",
            "Total number of containers pruned",
            ["namespace", "state"],
            registry=self.registry,
        )
        self.jobs_pruned = Counter(
            "jobs_pruned_total",
            "Total number of jobs pruned",
            ["namespace", "state"],
            registry=self.registry,
        )

    def record_pruned(self, kind: ResourceKind, namespace: str, state: str,
                      containers: int = 0) -> None:
        """Count one successfully deleted resource"""
        if kind is ResourceKind.PODS:
            self.pods_pruned.labels(namespace=namespace, state=state).inc()
            if containers:
                self.containers_pruned.labels(namespace=namespace, state=state).inc(containers)
        else:
            self.jobs_pruned.labels(namespace=namespace, state=state).inc()

    def start_server(self, port: int) -> None:
        """Serve /metrics on a background thread"""
        start_http_server(port, registry=self.registry)
        logger.info("Metrics server started", port=port)
