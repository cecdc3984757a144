"""
Logging configuration for Pod Pruner
"""

import logging
import sys
from typing import Any, Dict, Iterable, Optional

import structlog
from colorama import init as colorama_init

from . import __version__


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Setup structured logging for the application"""

    if log_format != "json":
        # Initialize colorama for cross-platform colored output
        colorama_init()

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if log_format == "json"
            else structlog.dev.ConsoleRenderer(colors=True)
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    # Suppress verbose kubernetes client logs
    logging.getLogger("kubernetes").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


class PrunerLogger:
    """Specialized logger for Pod Pruner operations"""

    def __init__(self, name: str = "pod-pruner"):
        self.logger = get_logger(name)

    def log_startup(self, config_dict: Dict[str, Any]) -> None:
        """Log application startup"""
        self.logger.info(
            "Pod Pruner starting up",
            version=__version__,
            config=config_dict
        )

    def log_cycle_start(self, cycle_id: str, namespaces: Iterable[str]) -> None:
        self.logger.info(
            "Starting prune cycle",
            cycle_id=cycle_id,
            namespaces=list(namespaces)
        )

    def log_cycle_end(self, cycle_id: str, matched: int, failed_listings: int,
                      duration_seconds: float) -> None:
        self.logger.info(
            "Prune cycle completed",
            cycle_id=cycle_id,
            matched=matched,
            failed_listings=failed_listings,
            duration_seconds=round(duration_seconds, 3)
        )

    def log_nothing_to_prune(self, namespace: str, kind: str) -> None:
        self.logger.info(
            "Nothing to prune",
            namespace=namespace,
            resource=kind
        )

    def log_dry_run(self, namespace: str, kind: str, items: Iterable[Any]) -> None:
        """Log what would have been deleted"""
        self.logger.info(
            "Dry run enabled. The following resources would be deleted",
            namespace=namespace,
            resource=kind,
            items=[str(item) for item in items]
        )

    def log_prune_batch(self, namespace: str, kind: str, items: Iterable[Any]) -> None:
        self.logger.info(
            "Resources to be pruned",
            namespace=namespace,
            resource=kind,
            items=[str(item) for item in items]
        )

    def log_item_deleted(self, kind: str, namespace: str, name: str,
                         status: str) -> None:
        self.logger.info(
            "Successfully deleted resource",
            resource=kind,
            namespace=namespace,
            name=name,
            state=status
        )

    def log_item_failed(self, kind: str, namespace: str, name: str,
                        error: Exception) -> None:
        self.logger.error(
            "Failed to delete resource",
            resource=kind,
            namespace=namespace,
            name=name,
            error=str(error),
            error_type=type(error).__name__
        )

    def log_malformed_item(self, kind: str, item: Any) -> None:
        self.logger.warning(
            "Skipping malformed resource descriptor",
            resource=kind,
            item=repr(item)
        )

    def log_listing_failed(self, namespace: str, kind: str, error: Exception) -> None:
        self.logger.error(
            "Error fetching resources",
            namespace=namespace,
            resource=kind,
            error=str(error),
            error_type=type(error).__name__
        )

    def log_error(self, error: Exception, context: Optional[str] = None) -> None:
        """Log errors with context"""
        self.logger.error(
            "Error occurred",
            error=str(error),
            error_type=type(error).__name__,
            context=context,
            exc_info=True
        )

    def log_fatal(self, error: Exception, context: str) -> None:
        self.logger.critical(
            "Fatal error, exiting",
            error=str(error),
            error_type=type(error).__name__,
            context=context
        )

    def log_warning(self, message: str, **kwargs) -> None:
        """Log warnings"""
        self.logger.warning(message, **kwargs)

    def log_info(self, message: str, **kwargs) -> None:
        self.logger.info(message, **kwargs)
