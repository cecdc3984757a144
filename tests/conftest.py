import pytest
from prometheus_client import CollectorRegistry

from pod_pruner.metrics import PrunerMetrics


@pytest.fixture
def registry():
    return CollectorRegistry()


@pytest.fixture
def metrics(registry):
    return PrunerMetrics(registry)
