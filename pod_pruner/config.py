"""
Configuration management for Pod Pruner
"""

import os
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple

from dotenv import load_dotenv

from .exceptions import ConfigError
from .models import ResourceKind

# Load environment variables
load_dotenv()


def split_list(value: Optional[str]) -> List[str]:
    """Split a comma-separated value, keeping empty entries"""
    return [item.strip() for item in (value or "").split(",")]


def split_set(value: Optional[str]) -> FrozenSet[str]:
    """Split a comma-separated value into a set of non-empty tokens"""
    return frozenset(item for item in split_list(value) if item)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class Config:
    """Configuration class for Pod Pruner"""

    # Pruning behaviour
    dry_run: bool = True
    namespaces: Tuple[str, ...] = ("",)
    resources: Tuple[str, ...] = ("PODS",)
    container_statuses: FrozenSet[str] = frozenset()
    job_statuses: FrozenSet[str] = frozenset({"Complete"})

    # Metrics endpoint
    port: int = 8080

    # Scheduling and cluster API limits
    run_interval_seconds: int = 60
    list_timeout_seconds: int = 30
    list_page_size: int = 100
    max_concurrent_deletes: int = 0
    run_once: bool = False

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_env(cls) -> "Config":
        """Build the configuration from environment variables"""
        return cls(
            dry_run=os.getenv("DRY_RUN", "true") == "true",
            namespaces=tuple(split_list(os.getenv("NAMESPACES", ""))),
            resources=tuple(split_list(os.getenv("RESOURCES", "PODS"))),
            container_statuses=split_set(os.getenv("CONTAINER_STATUSES")),
            job_statuses=split_set(os.getenv("JOB_STATUSES", "Complete")),
            port=_env_int("PORT", 8080),
            run_interval_seconds=_env_int("RUN_INTERVAL_SECONDS", 60),
            list_timeout_seconds=_env_int("LIST_TIMEOUT_SECONDS", 30),
            list_page_size=_env_int("LIST_PAGE_SIZE", 100),
            max_concurrent_deletes=_env_int("MAX_CONCURRENT_DELETES", 0),
            run_once=os.getenv("RUN_ONCE", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "json"),
        )

    @property
    def enabled_kinds(self) -> List[ResourceKind]:
        """Resource kinds from the allow-list, in configured order"""
        kinds = []
        for token in self.resources:
            try:
                kind = ResourceKind.parse(token)
            except ValueError:
                continue
            if kind not in kinds:
                kinds.append(kind)
        return kinds

    @property
    def unknown_resources(self) -> List[str]:
        unknown = []
        for token in self.resources:
            try:
                ResourceKind.parse(token)
            except ValueError:
                unknown.append(token)
        return unknown

    def statuses_for(self, kind: ResourceKind) -> FrozenSet[str]:
        if kind is ResourceKind.PODS:
            return self.container_statuses
        return self.job_statuses

    def to_dict(self) -> dict:
        return {
            "dry_run": self.dry_run,
            "namespaces": list(self.namespaces),
            "resources": [kind.value for kind in self.enabled_kinds],
            "container_statuses": sorted(self.container_statuses),
            "job_statuses": sorted(self.job_statuses),
            "port": self.port,
            "run_interval_seconds": self.run_interval_seconds,
            "list_timeout_seconds": self.list_timeout_seconds,
            "list_page_size": self.list_page_size,
            "max_concurrent_deletes": self.max_concurrent_deletes,
        }
