"""
Paginated listing of prunable pods and jobs
"""

import time
from typing import AbstractSet, Any, Callable, List, Optional

from .exceptions import ListTimeout, ResourceListError
from .logger import PrunerLogger, get_logger
from .matcher import matching_containers, matching_job_conditions
from .models import ResourceDescriptor, ResourceKind

logger = get_logger(__name__)

DEFAULT_LIST_TIMEOUT = 30
DEFAULT_PAGE_SIZE = 100


class ResourceLister:
    """Enumerates resources of one kind in a namespace and keeps the matching ones.

    Pages are fetched one after another, following continuation tokens until
    the server stops returning one. The whole listing shares a single time
    budget; each page request gets whatever is left of it.
    """

    def __init__(self, cluster: Any, timeout_seconds: float = DEFAULT_LIST_TIMEOUT,
                 page_size: int = DEFAULT_PAGE_SIZE,
                 clock: Callable[[], float] = time.monotonic,
                 logger: Optional[PrunerLogger] = None):
        self.cluster = cluster
        self.logger = logger or PrunerLogger()
        self.timeout_seconds = timeout_seconds
        self.page_size = page_size
        self.clock = clock

    def list(self, kind: ResourceKind, namespace: str,
             statuses: AbstractSet[str]) -> List[ResourceDescriptor]:
        if not namespace:
            raise ResourceListError(
                f"cannot list {kind.value.lower()}: namespace is empty",
                namespace, kind.value,
            )
        if not statuses:
            logger.debug("No statuses configured, skipping listing",
                         namespace=namespace, resource=kind.value)
            return []

        deadline = self.clock() + self.timeout_seconds
        descriptors: List[ResourceDescriptor] = []
        continue_token: Optional[str] = None
        pages = 0

        while True:
            remaining = deadline - self.clock()
            if remaining <= 0:
                raise ListTimeout(
                    f"listing {kind.value.lower()} in namespace '{namespace}' "
                    f"exceeded {self.timeout_seconds}s after {pages} page(s)",
                    namespace, kind.value,
                )
            try:
                page = self.cluster.list_resources(
                    kind, namespace,
                    continue_token=continue_token,
                    limit=self.page_size or None,
                    timeout=remaining,
                )
            except Exception as e:
                if self.clock() >= deadline:
                    raise ListTimeout(
                        f"listing {kind.value.lower()} in namespace '{namespace}' "
                        f"exceeded {self.timeout_seconds}s: {e}",
                        namespace, kind.value,
                    ) from e
                raise ResourceListError(
                    f"failed to list {kind.value.lower()} in namespace '{namespace}': {e}",
                    namespace, kind.value,
                ) from e

            pages += 1
            for item in page.items:
                descriptors.extend(self._descriptors(kind, namespace, item, statuses))

            if not page.continue_token:
                break
            continue_token = page.continue_token

        logger.debug("Listed resources", namespace=namespace, resource=kind.value,
                     pages=pages, matched=len(descriptors))
        return descriptors

    def _descriptors(self, kind: ResourceKind, namespace: str, item: Any,
                     statuses: AbstractSet[str]) -> List[ResourceDescriptor]:
        metadata = item.metadata
        item_namespace = (metadata.namespace if metadata else None) or namespace
        name = (metadata.name if metadata else None) or ""

        if kind is ResourceKind.PODS:
            containers = matching_containers(item, statuses)
            if not containers:
                return []
            descriptors = [ResourceDescriptor(
                kind=kind,
                namespace=item_namespace,
                name=name,
                observed_status=containers[0][1],
                containers=tuple(container for container, _ in containers),
            )]
        else:
            descriptors = [
                ResourceDescriptor(kind=kind, namespace=item_namespace, name=name,
                                   observed_status=condition)
                for condition in matching_job_conditions(item, statuses)
            ]

        # Unnamed items cannot be deleted
        valid = [descriptor for descriptor in descriptors if descriptor.is_valid()]
        for descriptor in descriptors:
            if not descriptor.is_valid():
                self.logger.log_malformed_item(kind.value, descriptor)
        return valid
