"""
jobpool: a bounded worker pool for running many independent jobs on threads.

Jobs are scheduled on a shared FIFO queue and consumed by a fixed number of
worker threads. Failures are collected instead of being raised, and the pool
offers three ways to shut down: ``wait()`` (run everything queued),
``terminate()`` (finish running jobs, drop queued ones) and ``kill_all()``
(abandon everything).

## Modules:

- `jobpool.core`: Jobs, the job queue, the error log and the worker pool.
- `jobpool.infrastructure`: Configuration and logging setup.
- `jobpool.cli`: The command line interface.
"""

from jobpool.core import (
    END_OF_STREAM,
    ClosedQueue,
    ErrorEntry,
    ErrorLog,
    InvalidPoolSize,
    Job,
    JobPoolError,
    JobQueue,
    PoolClosed,
    PoolState,
    PoolTask,
    QueueTimeout,
    WorkerKilled,
    WorkerPool,
)

__version__ = "0.1.0"

__all__ = [
    "END_OF_STREAM",
    "ClosedQueue",
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
    "WorkerKilled",
    "WorkerPool",
    "__version__",
]
