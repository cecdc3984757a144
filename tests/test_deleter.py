import threading

from structlog.testing import capture_logs

from pod_pruner.deleter import ResourceDeleter
from pod_pruner.models import ResourceDescriptor, ResourceKind

from tests.helpers import FakeCluster

PODS = ResourceKind.PODS
JOBS = ResourceKind.JOBS


def pod(name, status="Error", namespace="ns1", containers=("main",)):
    return ResourceDescriptor(PODS, namespace, name, status, tuple(containers))


def test_deletes_every_item_and_counts_them(metrics, registry):
    cluster = FakeCluster()
    items = [pod("a"), pod("b"), pod("c", status="Completed", containers=("x", "y"))]

    ResourceDeleter(cluster, metrics).delete(PODS, items)

    assert sorted(call[2] for call in cluster.delete_calls) == ["a", "b", "c"]
    assert registry.get_sample_value(
        "pods_pruned_total", {"namespace": "ns1", "state": "Error"}) == 2
    assert registry.get_sample_value(
        "pods_pruned_total", {"namespace": "ns1", "state": "Completed"}) == 1
    assert registry.get_sample_value(
        "containers_pruned_total", {"namespace": "ns1", "state": "Completed"}) == 2


def test_one_failure_does_not_stop_the_batch(metrics, registry):
    cluster = FakeCluster(fail_delete={"b"})
    items = [pod(name) for name in ("a", "b", "c", "d", "e")]

    with capture_logs() as logs:
        ResourceDeleter(cluster, metrics).delete(PODS, items)

    assert sorted(call[2] for call in cluster.delete_calls) == ["a", "b", "c", "d", "e"]
    assert registry.get_sample_value(
        "pods_pruned_total", {"namespace": "ns1", "state": "Error"}) == 4
    failures = [log for log in logs if log["event"] == "Failed to delete resource"]
    assert len(failures) == 1
    assert failures[0]["name"] == "b"
    assert failures[0]["namespace"] == "ns1"
    assert "refused" in failures[0]["error"]


def test_jobs_are_deleted_in_background(metrics, registry):
    cluster = FakeCluster()
    items = [ResourceDescriptor(JOBS, "ns1", "nightly", "Complete")]

    ResourceDeleter(cluster, metrics).delete(JOBS, items)

    assert cluster.delete_calls == [(JOBS, "ns1", "nightly", "Background")]
    assert registry.get_sample_value(
        "jobs_pruned_total", {"namespace": "ns1", "state": "Complete"}) == 1


def test_pods_use_default_propagation(metrics):
    cluster = FakeCluster()

    ResourceDeleter(cluster, metrics).delete(PODS, [pod("a")])

    assert cluster.delete_calls == [(PODS, "ns1", "a", None)]


def test_malformed_items_are_skipped(metrics):
    cluster = FakeCluster()
    items = [pod("", namespace="ns1"), pod("ok"), pod("orphan", namespace=""), "ns1/raw: Error"]

    with capture_logs() as logs:
        ResourceDeleter(cluster, metrics).delete(PODS, items)

    assert [call[2] for call in cluster.delete_calls] == ["ok"]
    warnings = [log for log in logs if log["log_level"] == "warning"]
    assert len(warnings) == 3


def test_empty_batch_is_a_no_op(metrics):
    cluster = FakeCluster()

    ResourceDeleter(cluster, metrics).delete(PODS, [])

    assert cluster.delete_calls == []


def test_deletions_run_in_parallel(metrics):
    barrier = threading.Barrier(3, timeout=5)

    class BarrierCluster(FakeCluster):
        def delete_resource(self, kind, namespace, name, propagation_policy=None):
            barrier.wait()
            super().delete_resource(kind, namespace, name, propagation_policy)

    cluster = BarrierCluster()

    ResourceDeleter(cluster, metrics).delete(PODS, [pod("a"), pod("b"), pod("c")])

    assert len(cluster.delete_calls) == 3


def test_worker_cap_limits_parallelism(metrics):
    lock = threading.Lock()
    active = {"now": 0, "peak": 0}

    class CountingCluster(FakeCluster):
        def delete_resource(self, kind, namespace, name, propagation_policy=None):
            with lock:
                active["now"] += 1
                active["peak"] = max(active["peak"], active["now"])
            threading.Event().wait(0.01)
            with lock:
                active["now"] -= 1
            super().delete_resource(kind, namespace, name, propagation_policy)

    cluster = CountingCluster()

    ResourceDeleter(cluster, metrics, max_workers=2).delete(
        PODS, [pod(str(i)) for i in range(6)])

    assert len(cluster.delete_calls) == 6
    assert active["peak"] <= 2


def test_errors_after_a_successful_delete_are_logged(metrics):
    class BrokenMetrics:
        def record_pruned(self, kind, namespace, state, containers=0):
            if namespace == "bad":
                raise ValueError("label rejected")
            metrics.record_pruned(kind, namespace, state, containers=containers)

    cluster = FakeCluster()
    items = [pod("a"), pod("b", namespace="bad"), pod("c")]

    with capture_logs() as logs:
        ResourceDeleter(cluster, BrokenMetrics()).delete(PODS, items)

    assert len(cluster.delete_calls) == 3
    errors = [log for log in logs if log["event"] == "Error occurred"]
    assert len(errors) == 1
    assert errors[0]["error"] == "label rejected"
    assert errors[0]["context"] == "deleting pods bad/b"
