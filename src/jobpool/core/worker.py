"""Worker threads that consume jobs from a shared queue.

Each worker runs a dequeue-execute loop until the queue reports the end of the
stream or the pool is killed. A job that raises is recorded in the error log
and the worker moves on to the next job.
"""

import ctypes
import logging
import threading

from jobpool.core.error_log import ErrorEntry, ErrorLog, safe_repr
from jobpool.core.exceptions import WorkerKilled
from jobpool.core.job import Job
from jobpool.core.job_queue import END_OF_STREAM, JobQueue

logger = logging.getLogger(__name__)


class Worker(threading.Thread):
    """A single execution unit of a ``WorkerPool``.

    Workers are daemon threads: a worker that was killed while blocked in a
    long-running call does not keep the interpreter alive.
    """

    def __init__(
        self,
        name: str,
        job_queue: JobQueue,
        error_log: ErrorLog,
        killed: threading.Event,
    ):
        """Initialize worker.

        Args:
            name: Thread name, also used in error entries and log messages
            job_queue: Queue to consume jobs from
            error_log: Log receiving the failures of jobs run by this worker
            killed: Event set by the pool when it is killed
        """
        super().__init__(name=name, daemon=True)
        self.job_queue = job_queue
        self.error_log = error_log
        self._killed = killed
        self.current_job: Job | None = None
        self.jobs_processed = 0
        self.jobs_failed = 0
        # Guards _exited; kill() never injects into a worker past its loop
        self._kill_lock = threading.Lock()
        self._exited = False

    @property
    def busy(self) -> bool:
        return self.current_job is not None

    def run(self) -> None:
        try:
            logger.debug(f"{self.name} started")
            self._process_jobs()
            logger.debug(
                f"{self.name} exiting: {self.jobs_processed} job(s) done, "
                f"{self.jobs_failed} failed"
            )
            with self._kill_lock:
                self._exited = True
                # Drop a WorkerKilled scheduled after the last job returned
                _set_async_exc(self.ident, None)
        except WorkerKilled:
            with self._kill_lock:
                self._exited = True
            self.current_job = None
            logger.info(f"{self.name} killed")

    def _process_jobs(self) -> None:
        while not self._killed.is_set():
            job = self.job_queue.dequeue()
            if job is END_OF_STREAM:
                break
            if self._killed.is_set():
                logger.debug(f"{self.name} dropping job #{job.id}: pool was killed")
                break
            self._execute(job)

    def _execute(self, job: Job) -> None:
        self.current_job = job
        try:
            job.run()
        except Exception as e:
            self.jobs_failed += 1
            self._record_failure(job, e)
        else:
            self.jobs_processed += 1
        finally:
            self.current_job = None

    def _record_failure(self, job: Job, exception: Exception) -> None:
        try:
            logger.warning(
                f"{self.name}: job #{job.id} ({job.name}) failed: {safe_repr(exception)}"
            )
            self.error_log.record(ErrorEntry.from_exception(exception, job, worker_name=self.name))
        except Exception:
            logger.exception(f"{self.name}: could not record failure of job #{job.id}")

    def kill(self) -> bool:
        """Raise ``WorkerKilled`` inside this thread.

        The exception is delivered the next time the thread executes Python
        bytecode. A thread blocked inside a C call (``time.sleep``, socket
        reads) only dies once that call returns. Cleanup the running job had
        not reached yet is skipped, except for its ``finally`` blocks.

        Returns:
            True if the exception was scheduled in a live thread
        """
        with self._kill_lock:
            if self.ident is None or self._exited or not self.is_alive():
                return False

            modified = _set_async_exc(self.ident, WorkerKilled)
            if modified > 1:
                # Undo: more than one thread state was hit
                _set_async_exc(self.ident, None)
                raise SystemError(f"Killing {self.name} affected {modified} threads")
            return modified == 1


def _set_async_exc(ident: int, exc_type: type[BaseException] | None) -> int:
    """Schedule (or with None, cancel) an exception in the thread ``ident``."""
    exc = ctypes.py_object(exc_type) if exc_type is not None else None
    return ctypes.pythonapi.PyThreadState_SetAsyncExc(ctypes.c_ulong(ident), exc)
