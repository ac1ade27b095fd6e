import asyncio
import logging
from typing import Callable, Coroutine, List

from .config import parse_interval

logger = logging.getLogger(__name__)


class Scheduler:
    """
    Manages the scheduling and execution of periodic async tasks using asyncio.

    Each job is single-flight: a run starts `interval` after the previous run
    started, or right after it finished if it took longer than the interval.
    Runs of the same job never overlap.
    """

    def __init__(self):
        self.tasks: List[asyncio.Task] = []
        logger.info("AsyncScheduler initialized.")

    async def _run_periodically(self, interval_seconds: float, job_func: Callable[[], Coroutine]):
        """Internal loop to run a job periodically."""
        loop = asyncio.get_running_loop()
        try:
            while True:
                started = loop.time()
                try:
                    await job_func()
                except Exception as e:
                    logger.error(f"Error in scheduled job '{job_func.__name__}': {e}", exc_info=True)

                elapsed = loop.time() - started
                if elapsed > interval_seconds:
                    logger.warning(
                        f"Job '{job_func.__name__}' took {elapsed:.1f}s, longer than its {interval_seconds}s interval."
                    )
                await asyncio.sleep(max(0.0, interval_seconds - elapsed))
        except asyncio.CancelledError:
            logger.info(f"Job '{job_func.__name__}' cancelled.")
            raise

    def add_job(self, job_func: Callable[[], Coroutine], interval_seconds: float):
        """
        Adds a new async job to the schedule. The first run starts immediately.
        """
        if interval_seconds <= 0:
            raise ValueError(f"Interval must be positive, got {interval_seconds}.")
        task = asyncio.create_task(self._run_periodically(interval_seconds, job_func))
        self.tasks.append(task)
        logger.info(f"Scheduled job '{job_func.__name__}' to run every {interval_seconds} second(s).")

    def add_job_from_string(self, job_func: Callable[[], Coroutine], interval_str: str):
        """
        Adds a job based on a duration string like '15s', '5m' or '1h'.
        """
        self.add_job(job_func, parse_interval(interval_str))

    async def stop(self):
        """Cancels all scheduled tasks, abandoning any run in progress."""
        logger.info("Stopping scheduler...")
        for task in self.tasks:
            task.cancel()
        if self.tasks:
            await asyncio.gather(*self.tasks, return_exceptions=True)
        self.tasks.clear()
