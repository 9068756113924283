"""Exceptions raised by the job queue and the worker pool.

Failures raised by job bodies are never turned into these exceptions; they are
recorded in the pool's error log instead. The classes here only describe
protocol errors (scheduling on a closed queue, restarting a finished pool) and
misuse of the API.
"""

import queue


class JobPoolError(Exception):
    """Base class for all errors raised by jobpool itself."""


class ClosedQueue(JobPoolError):
    """A job was enqueued after the queue was closed.

    The queue is closed by ``wait()``, ``terminate()`` and ``kill_all()``.
    """


class PoolClosed(JobPoolError):
    """A pool that has already been stopped or killed was started again."""


class InvalidPoolSize(JobPoolError, ValueError):
    """The pool was constructed with fewer than one worker."""


class QueueTimeout(JobPoolError, queue.Empty):
    """A dequeue with a timeout did not receive a job in time."""


class WorkerKilled(BaseException):
    """Raised asynchronously inside a worker thread by ``kill_all()``.

    Derives from ``BaseException`` so that ``except Exception`` clauses in job
    code and in the worker loop do not intercept it.
    """
