"""Jobs: a callable and the arguments it was scheduled with."""

import logging
from collections.abc import Callable
from typing import Any

from attrs import field, frozen

logger = logging.getLogger(__name__)


def _to_tuple(args) -> tuple:
    return tuple(args)


def _to_dict(kwargs) -> dict[str, Any]:
    return dict(kwargs or {})


@frozen(eq=False)
class Job:
    """A callable together with the arguments it was scheduled with.

    Jobs compare by identity: two jobs scheduled with the same function and
    arguments are still two separate units of work.
    """

    func: Callable[..., Any] = field()
    args: tuple = field(factory=tuple, converter=_to_tuple)
    kwargs: dict[str, Any] = field(factory=dict, converter=_to_dict)
    id: int = 0

    @func.validator
    def _check_func(self, attribute, value):
        if not callable(value):
            raise TypeError(f"Job function must be callable, got {value!r}")

    @property
    def name(self) -> str:
        qualname = getattr(self.func, "__qualname__", None)
        if qualname:
            return qualname
        try:
            return repr(self.func)
        except Exception:
            return f"<{type(self.func).__name__} object>"

    def run(self) -> Any:
        logger.debug(f"Running job #{self.id}: {self.name}")
        return self.func(*self.args, **self.kwargs)

    def __repr__(self) -> str:
        return f"Job(id={self.id}, func={self.name}, args={self.args!r}, kwargs={self.kwargs!r})"
