#!/usr/bin/env python3
"""
Kubernetes Pod Pruner - Main Application
"""

import signal
import sys
from typing import Optional

from .config import Config
from .deleter import ResourceDeleter
from .exceptions import AuthenticationError, ConfigError
from .kubernetes_client import KubernetesClient
from .lister import ResourceLister
from .logger import PrunerLogger, setup_logging
from .metrics import PrunerMetrics
from .pruner import PruneCycle
from .scheduler import Scheduler


def build_cycle(config: Config, cluster, metrics: PrunerMetrics,
                logger: PrunerLogger) -> PruneCycle:
    """Wire the lister and deleter for one cluster client"""
    lister = ResourceLister(
        cluster,
        timeout_seconds=config.list_timeout_seconds,
        page_size=config.list_page_size,
        logger=logger,
    )
    deleter = ResourceDeleter(
        cluster, metrics, logger=logger,
        max_workers=config.max_concurrent_deletes,
    )
    return PruneCycle.from_config(config, lister, deleter, logger=logger)


def main(config: Optional[Config] = None) -> int:
    """Main application entry point"""
    try:
        config = config or Config.from_env()
    except ConfigError as e:
        setup_logging()
        PrunerLogger().log_fatal(e, context="configuration")
        return 1

    setup_logging(config.log_level, config.log_format)
    logger = PrunerLogger()
    logger.log_startup(config.to_dict())

    for token in config.unknown_resources:
        logger.log_warning("Ignoring unknown resource kind", resource=token)
    if config.namespaces == ("",):
        logger.log_warning("NAMESPACES is empty, listings will fail until it is set")
    if config.dry_run:
        logger.log_info("Running in DRY RUN mode - no resources will be deleted")

    try:
        cluster = KubernetesClient.authenticate()
    except AuthenticationError as e:
        logger.log_fatal(e, context="kubernetes authentication")
        return 1
    cluster.test_connection()

    metrics = PrunerMetrics()
    cycle = build_cycle(config, cluster, metrics, logger)

    # Single execution, for jobs and local testing
    if config.run_once:
        cycle.run(config.namespaces)
        return 0

    metrics.start_server(config.port)
    scheduler = Scheduler(lambda: cycle.run(config.namespaces),
                          config.run_interval_seconds, logger=logger)

    def _shutdown(signum, _frame):
        logger.log_info("Received shutdown signal", signal=signum)
        scheduler.stop()

    signal.signal(signal.SIGTERM, _shutdown)

    logger.log_info("Starting main loop", interval_seconds=config.run_interval_seconds)
    try:
        scheduler.run()
    except KeyboardInterrupt:
        logger.log_info("Received interrupt signal, shutting down...")

    return 0


if __name__ == "__main__":
    sys.exit(main())
