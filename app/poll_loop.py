"""Repeats a pipeline run at most once per interval."""

from __future__ import annotations

from collections.abc import Callable
import time

from loguru import logger


class PollLoop:
    """Run `job` forever (or `max_runs` times), spacing run starts by `interval`.

    A run that takes longer than the interval is followed immediately by the
    next one; a shorter run is followed by a sleep for the remainder. Runs never
    overlap.
    """

    def __init__(
        self,
        job: Callable[[], object],
        interval_seconds: float,
        *,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._job = job
        self._interval = max(0.0, float(interval_seconds))
        self._sleep = sleep
        self._clock = clock

    def run_once(self) -> None:
        """Run the job, then wait out the rest of the interval."""
        started = self._clock()
        self._job()
        remaining = self._interval - (self._clock() - started)
        if remaining > 0:
            logger.debug("Next run in {:.0f} s", remaining)
            self._sleep(remaining)

    def run(self, max_runs: int | None = None) -> int:
        """Loop until `max_runs` is reached or interrupted; return runs completed."""
        runs = 0
        try:
            while max_runs is None or runs < max_runs:
                self.run_once()
                runs += 1
        except KeyboardInterrupt:
            logger.info("Poll loop interrupted after {} runs", runs)
        return runs
