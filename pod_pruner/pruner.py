"""
One pruning pass over the configured namespaces and resource kinds
"""

import time
import uuid
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .deleter import ResourceDeleter
from .exceptions import ResourceListError
from .lister import ResourceLister
from .logger import PrunerLogger
from .models import ResourceKind


@dataclass
class CycleSummary:
    """Counts gathered during one cycle, for logging and tests"""

    cycle_id: str
    matched: int = 0
    failed_listings: int = 0
    deletion_batches: int = 0


class PruneCycle:
    """Lists each (namespace, kind) pair and deletes or reports what matched"""

    def __init__(self, lister: ResourceLister, deleter: ResourceDeleter,
                 kinds: Sequence[ResourceKind], statuses: dict,
                 dry_run: bool = True, logger: Optional[PrunerLogger] = None):
        self.lister = lister
        self.deleter = deleter
        self.kinds = list(kinds)
        self.statuses = statuses
        self.dry_run = dry_run
        self.logger = logger or PrunerLogger()

    @classmethod
    def from_config(cls, config, lister: ResourceLister, deleter: ResourceDeleter,
                    logger: Optional[PrunerLogger] = None) -> "PruneCycle":
        kinds = config.enabled_kinds
        return cls(
            lister, deleter, kinds,
            statuses={kind: config.statuses_for(kind) for kind in kinds},
            dry_run=config.dry_run,
            logger=logger,
        )

    def run(self, namespaces: Iterable[str]) -> CycleSummary:
        """Run one pass; listing failures only skip the affected pair"""
        namespaces = list(namespaces)
        summary = CycleSummary(cycle_id=uuid.uuid4().hex[:8])
        start_time = time.monotonic()
        self.logger.log_cycle_start(summary.cycle_id, namespaces)

        for namespace in namespaces:
            for kind in self.kinds:
                self._prune(namespace, kind, summary)

        self.logger.log_cycle_end(summary.cycle_id, summary.matched,
                                  summary.failed_listings,
                                  time.monotonic() - start_time)
        return summary

    def _prune(self, namespace: str, kind: ResourceKind, summary: CycleSummary) -> None:
        try:
            items = self.lister.list(kind, namespace, self.statuses.get(kind, frozenset()))
        except ResourceListError as e:
            summary.failed_listings += 1
            self.logger.log_listing_failed(namespace, kind.value, e)
            return

        if not items:
            self.logger.log_nothing_to_prune(namespace, kind.value)
            return

        summary.matched += len(items)
        if self.dry_run:
            self.logger.log_dry_run(namespace, kind.value, items)
            return

        self.logger.log_prune_batch(namespace, kind.value, items)
        summary.deletion_batches += 1
        self.deleter.delete(kind, items)
