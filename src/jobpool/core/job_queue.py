"""FIFO job queue shared between the scheduler and the pool's workers.

The queue supports three states of interest to workers:

1. A job is available: ``dequeue()`` returns it immediately.
2. The queue is empty and open: ``dequeue()`` blocks until a job is enqueued
   or the queue is closed.
3. The queue is empty and closed: ``dequeue()`` returns ``END_OF_STREAM``
   without blocking.

All operations take the same lock, so ``clear()`` can never race with a
worker that is in the middle of a ``dequeue()``.
"""

import enum
import logging
import threading
import time
from collections import deque

from jobpool.core.exceptions import ClosedQueue, QueueTimeout
from jobpool.core.job import Job

logger = logging.getLogger(__name__)


class EndOfStream(enum.Enum):
    """Marker type returned by ``JobQueue.dequeue()`` on a drained, closed queue."""

    END_OF_STREAM = "end-of-stream"

    def __repr__(self) -> str:
        return "END_OF_STREAM"


END_OF_STREAM = EndOfStream.END_OF_STREAM


class JobQueue:
    """Thread-safe, closable FIFO queue of jobs."""

    def __init__(self):
        self._items: deque[Job] = deque()
        self._closed = False
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<JobQueue {state} size={self.size()}>"

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def size(self) -> int:
        """Number of jobs waiting to be claimed by a worker."""
        with self._lock:
            return len(self._items)

    def empty(self) -> bool:
        return self.size() == 0

    def enqueue(self, job: Job) -> None:
        """Append a job to the tail of the queue.

        Raises:
            ClosedQueue: If the queue has been closed
        """
        with self._lock:
            if self._closed:
                raise ClosedQueue(f"Cannot enqueue job #{job.id}: queue is closed")
            self._items.append(job)
            self._not_empty.notify()

    put = enqueue

    def dequeue(self, timeout: float | None = None) -> Job | EndOfStream:
        """Remove and return the job at the head of the queue.

        Blocks while the queue is empty and open. Once the queue is closed,
        the remaining jobs are still handed out; after that every call returns
        ``END_OF_STREAM``.

        Args:
            timeout: Maximum time to block (seconds). None blocks until a job
                arrives or the queue is closed.

        Returns:
            The next job, or ``END_OF_STREAM`` if the queue is closed and empty

        Raises:
            QueueTimeout: If ``timeout`` expired while the queue stayed empty
        """
        with self._lock:
            if timeout is None:
                while not self._items and not self._closed:
                    self._not_empty.wait()
            else:
                deadline = time.monotonic() + timeout
                while not self._items and not self._closed:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        raise QueueTimeout(f"No job available after {timeout}s")
                    self._not_empty.wait(remaining)

            if self._items:
                return self._items.popleft()
            return END_OF_STREAM

    get = dequeue

    def close(self, discard_pending: bool = False) -> int:
        """Close the queue for new jobs.

        Jobs already in the queue stay there and are still handed out to
        workers, unless ``discard_pending`` is set. Closing an already closed
        queue has no effect apart from the optional discard.

        Args:
            discard_pending: Clear the queue in the same atomic step

        Returns:
            Number of discarded jobs
        """
        with self._lock:
            discarded = self._clear_locked() if discard_pending else 0
            if not self._closed:
                self._closed = True
                logger.debug(f"Job queue closed with {len(self._items)} job(s) pending")
            # Wake every blocked worker so that it can observe the end of stream
            self._not_empty.notify_all()
            return discarded

    def clear(self) -> int:
        """Discard every job that has not been claimed by a worker yet.

        Does not change whether the queue is open or closed.

        Returns:
            Number of discarded jobs
        """
        with self._lock:
            return self._clear_locked()

    def _clear_locked(self) -> int:
        discarded = len(self._items)
        self._items.clear()
        if discarded:
            logger.debug(f"Discarded {discarded} queued job(s)")
        return discarded
