"""
Fixed-interval driver for prune cycles
"""

import threading
import time
from typing import Callable, Optional

from .logger import PrunerLogger


class Scheduler:
    """Runs a task every interval on the calling thread until stopped.

    The first run happens one full interval after start. When a run takes
    longer than the interval the next one starts straight away; runs never
    overlap.
    """

    def __init__(self, task: Callable[[], object], interval_seconds: float,
                 logger: Optional[PrunerLogger] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.task = task
        self.interval_seconds = interval_seconds
        self.logger = logger or PrunerLogger()
        self.clock = clock
        self._stop_event = threading.Event()
        self.cycles = 0

    def stop(self) -> None:
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def run(self, max_cycles: Optional[int] = None) -> None:
        next_run = self.clock() + self.interval_seconds
        while not self.stopped:
            if self._stop_event.wait(max(0.0, next_run - self.clock())):
                break

            self.cycles += 1
            try:
                self.task()
            except Exception as e:
                self.logger.log_error(e, context=f"prune cycle #{self.cycles}")

            if max_cycles is not None and self.cycles >= max_cycles:
                break
            next_run = max(next_run + self.interval_seconds, self.clock())
