"""Thread-safe collection of job failures.

Workers record every exception raised by a job here instead of letting it
escape the worker loop. Callers inspect the log after ``wait()`` or
``terminate()`` returns; failures are never pushed to them.
"""

import logging
import threading
import traceback
from collections.abc import Iterator
from datetime import datetime
from typing import Any

from attrs import field, frozen

from jobpool.core.job import Job

logger = logging.getLogger(__name__)


def safe_repr(obj: Any) -> str:
    """Return ``repr(obj)``, or a placeholder if the repr itself raises."""
    try:
        return repr(obj)
    except Exception:
        return f"<{type(obj).__name__} (repr failed)>"


@frozen(eq=False)
class ErrorEntry:
    """A failed job, the exception it raised and the arguments it ran with."""

    exception: BaseException
    job: Job
    args: tuple = field(factory=tuple)
    kwargs: dict[str, Any] = field(factory=dict)
    worker_name: str = ""
    traceback: str = ""
    recorded_at: datetime = field(factory=datetime.now)

    @classmethod
    def from_exception(
        cls, exception: BaseException, job: Job, worker_name: str = ""
    ) -> "ErrorEntry":
        formatted = "".join(
            traceback.format_exception(type(exception), exception, exception.__traceback__)
        )
        return cls(
            exception=exception,
            job=job,
            args=job.args,
            kwargs=job.kwargs,
            worker_name=worker_name,
            traceback=formatted,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert entry to a dictionary suitable for reports."""
        return {
            "exception": safe_repr(self.exception),
            "task": self.job.name,
            "job_id": self.job.id,
            "args": self.args,
            "kwargs": self.kwargs,
            "worker": self.worker_name,
            "recorded_at": self.recorded_at.isoformat(),
        }

    def __str__(self) -> str:
        return (
            f"{{exception: {safe_repr(self.exception)}, "
            f"task: {self.job.name}, args: {safe_repr(self.args)}}}"
        )


class ErrorLog:
    """Append-only log of ``ErrorEntry`` objects guarded by a single lock."""

    def __init__(self):
        self._entries: list[ErrorEntry] = []
        self._lock = threading.Lock()

    def record(self, entry: ErrorEntry) -> None:
        """Append an entry.

        Never raises: a failure while recording must not take down the worker
        that is reporting the job failure.
        """
        try:
            with self._lock:
                self._entries.append(entry)
        except Exception:
            logger.exception(f"Could not record failure of job #{entry.job.id}")
            return

        logger.debug(
            f"Recorded failure of job #{entry.job.id} ({entry.job.name}): "
            f"{safe_repr(entry.exception)}"
        )

    def snapshot(self) -> tuple[ErrorEntry, ...]:
        """Return the entries recorded so far, in append order."""
        with self._lock:
            return tuple(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __iter__(self) -> Iterator[ErrorEntry]:
        return iter(self.snapshot())
