"""
Concurrent deletion of listed resources
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Optional, Sequence

from .kubernetes_client import PROPAGATION_POLICIES
from .logger import PrunerLogger
from .metrics import PrunerMetrics
from .models import ResourceDescriptor, ResourceKind


class ResourceDeleter:
    """Deletes a batch of resources in parallel and waits for all of them.

    A failed deletion is logged and otherwise ignored, it never stops the
    rest of the batch. Successful deletions are counted in the metrics.
    """

    def __init__(self, cluster: Any, metrics: PrunerMetrics,
                 logger: Optional[PrunerLogger] = None,
                 max_workers: int = 0):
        self.cluster = cluster
        self.metrics = metrics
        self.logger = logger or PrunerLogger()
        self.max_workers = max_workers

    def delete(self, kind: ResourceKind, items: Sequence[ResourceDescriptor]) -> None:
        valid = []
        for item in items:
            if isinstance(item, ResourceDescriptor) and item.is_valid():
                valid.append(item)
            else:
                self.logger.log_malformed_item(kind.value, item)
        if not valid:
            return

        workers = len(valid)
        if self.max_workers > 0:
            workers = min(workers, self.max_workers)

        with ThreadPoolExecutor(max_workers=workers,
                                thread_name_prefix=f"prune-{kind.value.lower()}") as executor:
            futures = {executor.submit(self._delete_one, kind, item): item for item in valid}
            for future in as_completed(futures):
                error = future.exception()
                if error is not None:
                    item = futures[future]
                    self.logger.log_error(
                        error, context=f"deleting {kind.value.lower()} {item.namespace}/{item.name}")

    def _delete_one(self, kind: ResourceKind, item: ResourceDescriptor) -> bool:
        try:
            self.cluster.delete_resource(
                kind, item.namespace, item.name,
                propagation_policy=PROPAGATION_POLICIES[kind],
            )
        except Exception as e:
            self.logger.log_item_failed(kind.value, item.namespace, item.name, e)
            return False

        self.logger.log_item_deleted(kind.value, item.namespace, item.name, item.observed_status)
        self.metrics.record_pruned(kind, item.namespace, item.observed_status,
                                   containers=len(item.containers))
        return True
