"""Core worker pool: jobs, the job queue, the error log and the pool itself."""

from jobpool.core.error_log import ErrorEntry, ErrorLog
from jobpool.core.exceptions import (
    ClosedQueue,
    InvalidPoolSize,
    JobPoolError,
    PoolClosed,
    QueueTimeout,
    WorkerKilled,
)
from jobpool.core.job import Job
from jobpool.core.job_queue import END_OF_STREAM, EndOfStream, JobQueue
from jobpool.core.task import PoolTask
from jobpool.core.worker import Worker
from jobpool.core.worker_pool import PoolState, WorkerPool

__all__ = [
    "END_OF_STREAM",
    "ClosedQueue",
    "EndOfStream",
    "ErrorEntry",
    "ErrorLog",
    "InvalidPoolSize",
    "Job",
    "JobPoolError",
    "JobQueue",
    "PoolClosed",
    "PoolState",
    "PoolTask",
    "QueueTimeout",
    "Worker",
    "WorkerKilled",
    "WorkerPool",
]
