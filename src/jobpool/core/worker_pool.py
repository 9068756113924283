"""Bounded pool of worker threads sharing a single job queue.

Usage::

    pool = WorkerPool(size=4)

    for url in urls:
        # Runs in the background on one of the pool's threads
        pool.schedule(download, url)

    pool.start()  # non-blocking; optional, wait() starts the pool if needed
    # ... do something else ...
    pool.wait()   # close the queue and block until every job has run

    for entry in pool.errors:
        print(entry.exception, entry.args)

Notes:

- A pool can be started before any job was scheduled; workers simply wait.
- An empty queue does not mean the work is done: more jobs may be scheduled
  as long as the queue is open.
- ``wait()`` and ``terminate()`` close the queue. ``wait()`` runs every queued
  job, ``terminate()`` discards the jobs no worker has claimed yet.
- ``kill_all()`` abandons the running jobs as well. It is a best-effort
  operation; see ``Worker.kill()``.
- Workers are daemon threads: jobs still running when the main thread exits
  without calling ``wait()`` are lost.
"""

import enum
import itertools
import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.console import Console

from jobpool.core.error_log import ErrorEntry, ErrorLog
from jobpool.core.exceptions import InvalidPoolSize, PoolClosed
from jobpool.core.job import Job
from jobpool.core.job_queue import JobQueue
from jobpool.core.worker import Worker

if TYPE_CHECKING:
    from jobpool.infrastructure.config import PoolSettings

logger = logging.getLogger(__name__)


class PoolState(enum.Enum):
    """Lifecycle states of a ``WorkerPool``."""

    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"
    KILLED = "killed"

    @property
    def is_terminal(self) -> bool:
        return self in (PoolState.STOPPED, PoolState.KILLED)


class WorkerPool:
    """Runs scheduled jobs on a fixed number of worker threads.

    Failures raised by jobs never propagate out of the pool; they are
    collected in ``errors``. The only exceptions callers see are protocol
    errors: ``ClosedQueue`` when scheduling after shutdown, ``PoolClosed``
    when restarting a finished pool, and ``InvalidPoolSize`` at construction.
    """

    def __init__(
        self,
        size: int = 1,
        verbose: bool = False,
        thread_name_prefix: str = "worker",
        console: Console | None = None,
    ):
        """Initialize worker pool.

        Args:
            size: Number of worker threads, fixed for the lifetime of the pool
            verbose: Print lifecycle notices to the console
            thread_name_prefix: Prefix of the worker thread names
            console: Rich console for notices and error reports (default: stderr)

        Raises:
            InvalidPoolSize: If size is not a positive integer
        """
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise InvalidPoolSize(f"Pool size must be a positive integer, got {size!r}")

        self.size = size
        self.verbose = verbose
        self.thread_name_prefix = thread_name_prefix
        self.console = console or Console(stderr=True)

        self.job_queue = JobQueue()
        self.error_log = ErrorLog()
        self.workers: list[Worker] = []

        self._state = PoolState.IDLE
        # Reentrant: wait() starts the pool while holding the lock
        self._state_lock = threading.RLock()
        self._killed = threading.Event()
        self._job_ids = itertools.count(1)

    @classmethod
    def from_config(cls, config: "PoolSettings | None" = None, **kwargs) -> "WorkerPool":
        """Create a pool from configuration.

        Args:
            config: Pool settings. Defaults to the ``pool`` section of the
                global configuration.
            **kwargs: Extra constructor arguments (e.g. ``console``)
        """
        if config is None:
            from jobpool.infrastructure.config import get_config

            config = get_config().pool

        return cls(
            size=config.size,
            verbose=config.verbose,
            thread_name_prefix=config.thread_name_prefix,
            **kwargs,
        )

    def __repr__(self) -> str:
        return (
            f"<WorkerPool size={self.size} state={self.state.value} "
            f"queued={self.job_queue.size()} errors={len(self.error_log)}>"
        )

    def __enter__(self) -> "WorkerPool":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.wait()
        else:
            logger.warning(f"Terminating pool after {exc_type.__name__} in managed block")
            self.terminate()
        return None

    @property
    def state(self) -> PoolState:
        with self._state_lock:
            return self._state

    @property
    def errors(self) -> tuple[ErrorEntry, ...]:
        """Failures recorded so far, in the order they were detected."""
        return self.error_log.snapshot()

    def start(self) -> "WorkerPool":
        """Spawn the worker threads and let them consume the queue.

        Does not wait for any job to run. Calling ``start()`` on a running or
        draining pool has no effect.

        Raises:
            PoolClosed: If the pool was already stopped or killed
        """
        with self._state_lock:
            if self._state.is_terminal:
                raise PoolClosed(f"Cannot start a pool that is {self._state.value}")
            if self._state is not PoolState.IDLE:
                return self

            self.workers = [
                Worker(
                    name=f"{self.thread_name_prefix}-{index}",
                    job_queue=self.job_queue,
                    error_log=self.error_log,
                    killed=self._killed,
                )
                for index in range(self.size)
            ]
            for worker in self.workers:
                worker.start()
            self._state = PoolState.RUNNING

        plural = "" if self.size == 1 else "s"
        logger.info(f"Worker pool started with {self.size} worker{plural}")
        self._notify(f"--- Worker Pool started ({self.size} worker{plural}) ---")
        return self

    def schedule(self, func: Callable[..., Any], *args, **kwargs) -> Job:
        """Queue ``func(*args, **kwargs)`` for execution on a worker.

        Returns:
            The queued job

        Raises:
            ClosedQueue: If the pool is already shutting down
            TypeError: If func is not callable
        """
        job = Job(func, args, kwargs, id=next(self._job_ids))
        self.job_queue.enqueue(job)
        logger.debug(f"Scheduled job #{job.id}: {job.name}")
        return job

    def wait(self) -> None:
        """Close the queue and block until every queued job has run.

        Starts the pool first if ``start()`` was not called yet. Returns
        immediately if the pool is already stopped or killed.
        """
        with self._state_lock:
            if self._state.is_terminal:
                logger.debug(f"wait() on {self._state.value} pool: nothing to do")
                return
            if self._state is PoolState.IDLE:
                self.start()

            self.job_queue.close()
            if self._state is PoolState.RUNNING:
                self._state = PoolState.DRAINING
            workers = list(self.workers)

        logger.debug(f"Waiting for {len(workers)} worker(s) to drain the queue")
        for worker in workers:
            worker.join()

        with self._state_lock:
            stopped = self._state is PoolState.DRAINING
            if stopped:
                self._state = PoolState.STOPPED

        if stopped:
            logger.info(f"Worker pool stopped ({len(self.error_log)} failed job(s))")
            self._notify("--- Worker Pool stopped ---")

    def terminate(self) -> None:
        """Discard queued jobs and wait only for the jobs already running."""
        discarded = self.job_queue.close(discard_pending=True)
        logger.info(f"Terminating worker pool, discarded {discarded} queued job(s)")
        if not self.state.is_terminal:
            self._notify(f"--- Worker Pool terminated ({discarded} queued job(s) discarded) ---")
        self.wait()

    def kill_all(self) -> None:
        """Stop every worker without waiting for running jobs to finish.

        Unsafe by nature: a killed job may leave its own resources in an
        inconsistent state. Killing is best effort, a job blocked in a
        C call is only interrupted once that call returns. Does not join the
        workers.
        """
        with self._state_lock:
            if self._state.is_terminal:
                self.job_queue.close(discard_pending=True)
                logger.debug(f"kill_all() on {self._state.value} pool: nothing to kill")
                return

            self._killed.set()
            self._state = PoolState.KILLED
            discarded = self.job_queue.close(discard_pending=True)
            killed = [worker.name for worker in self.workers if worker.busy and worker.kill()]

        logger.warning(
            f"Worker pool killed: interrupted {len(killed)} running job(s), "
            f"discarded {discarded} queued job(s)"
        )
        self._notify("--- Worker Pool killed ---")

    def stats(self) -> dict[str, Any]:
        """Return counters describing the pool's progress."""
        return {
            "state": self.state.value,
            "size": self.size,
            "queued": self.job_queue.size(),
            "busy": sum(1 for worker in self.workers if worker.busy),
            "processed": sum(worker.jobs_processed for worker in self.workers),
            "failed": len(self.error_log),
        }

    def error_report(self, console: Console | None = None) -> None:
        """Print every recorded failure, or "no errors"."""
        console = console or self.console
        _print_plain(console, "--- Worker Pool error report ---")
        entries = self.errors
        if not entries:
            _print_plain(console, "no errors")
            return
        for entry in entries:
            _print_plain(console, str(entry))

    def _notify(self, message: str) -> None:
        if self.verbose:
            _print_plain(self.console, message)


def _print_plain(console: Console, message: str) -> None:
    # Job arguments may contain brackets and colons; print them verbatim and unwrapped
    console.print(message, markup=False, highlight=False, emoji=False, soft_wrap=True)
