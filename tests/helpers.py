"""
Records shaped like kubernetes models and a fake cluster client
"""

import threading
from types import SimpleNamespace

from pod_pruner.models import ResourcePage


def make_container(name, waiting=None, terminated=None, state=True):
    if not state:
        return SimpleNamespace(name=name, state=None)
    return SimpleNamespace(
        name=name,
        state=SimpleNamespace(
            waiting=SimpleNamespace(reason=waiting) if waiting else None,
            terminated=SimpleNamespace(reason=terminated) if terminated else None,
            running=None,
        ),
    )


def make_pod(name, namespace="ns1", containers=()):
    return SimpleNamespace(
        metadata=SimpleNamespace(name=name, namespace=namespace),
        status=SimpleNamespace(container_statuses=list(containers)),
    )


def make_job(name, namespace="ns1", conditions=()):
    return SimpleNamespace(
        metadata=SimpleNamespace(name=name, namespace=namespace),
        status=SimpleNamespace(
            conditions=[SimpleNamespace(type=c, status="True") for c in conditions]
        ),
    )


class FakeCluster:
    """In-memory stand-in for KubernetesClient"""

    def __init__(self, pages=None, fail_delete=(), list_error=None):
        # {(kind, namespace): [[items page 1], [items page 2], ...]}
        self.pages = pages or {}
        self.fail_delete = set(fail_delete)
        self.list_error = list_error
        self.list_calls = []
        self.delete_calls = []
        self._lock = threading.Lock()

    def list_resources(self, kind, namespace, continue_token=None, limit=None, timeout=None):
        self.list_calls.append((kind, namespace, continue_token, limit, timeout))
        if self.list_error is not None:
            raise self.list_error
        pages = self.pages.get((kind, namespace), [[]])
        index = int(continue_token) if continue_token else 0
        next_token = str(index + 1) if index + 1 < len(pages) else None
        return ResourcePage(items=list(pages[index]), continue_token=next_token)

    def delete_resource(self, kind, namespace, name, propagation_policy=None):
        with self._lock:
            self.delete_calls.append((kind, namespace, name, propagation_policy))
        if name in self.fail_delete:
            raise RuntimeError(f"delete of {name} refused")
