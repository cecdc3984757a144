"""
Data types shared by the pruning components
"""

import enum
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple


class ResourceKind(str, enum.Enum):
    """Kinds of resources the pruner knows how to list and delete"""

    PODS = "PODS"
    JOBS = "JOBS"

    @classmethod
    def parse(cls, value: str) -> "ResourceKind":
        return cls(value.strip().upper())


@dataclass(frozen=True)
class ResourceDescriptor:
    """One prunable pod or job, built fresh on every listing pass"""

    kind: ResourceKind
    namespace: str
    name: str
    observed_status: str
    # Matching container names, pods only
    containers: Tuple[str, ...] = ()

    def is_valid(self) -> bool:
        return bool(self.namespace) and bool(self.name)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}: {self.observed_status}"


@dataclass
class ResourcePage:
    """A single page returned by the cluster API"""

    items: List[Any] = field(default_factory=list)
    continue_token: Optional[str] = None
