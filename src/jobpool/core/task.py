"""Class-based jobs.

Subclass ``PoolTask``, take the job's inputs in ``__init__`` and do the work
in ``call()``::

    class SumTask(PoolTask):
        def __init__(self, number):
            self.number = number

        def call(self):
            return sum(range(self.number + 1))

    SumTask.perform(10)                 # runs synchronously, returns 55
    SumTask.perform_async(pool, 10)     # runs on one of the pool's workers

The pool is always passed in explicitly; tasks do not keep a reference to a
shared pool.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from jobpool.core.job import Job
    from jobpool.core.worker_pool import WorkerPool


class PoolTask(ABC):
    """Base class for jobs whose inputs are captured by the constructor."""

    @abstractmethod
    def call(self) -> Any: ...

    @classmethod
    def perform(cls, *args, **kwargs) -> Any:
        return cls(*args, **kwargs).call()

    @classmethod
    def perform_async(cls, pool: "WorkerPool", *args, **kwargs) -> "Job":
        """Schedule ``cls.perform(*args, **kwargs)`` on ``pool``."""
        return pool.schedule(cls.perform, *args, **kwargs)
