"""Demonstration commands that run jobs through a worker pool."""

import time

import click

from jobpool.core.task import PoolTask
from jobpool.core.worker_pool import WorkerPool
from jobpool.infrastructure.logging import LOG_LEVELS, setup_logging


class SumTask(PoolTask):
    """CPU-bound task: sum of the integers 0..number."""

    def __init__(self, number: int):
        self.number = number

    def call(self) -> int:
        result = sum(range(self.number + 1))
        click.echo(f"sum(0..{self.number}) = {result}")
        return result


def _pool_from_options(size: int | None, verbose: bool | None) -> WorkerPool:
    from jobpool.infrastructure.config import get_config

    settings = get_config().pool
    updates = {}
    if size is not None:
        updates["size"] = size
    if verbose is not None:
        updates["verbose"] = verbose
    return WorkerPool.from_config(settings.model_copy(update=updates))


def _configure_logging(log_level: str | None, console_logging: bool) -> None:
    from jobpool.infrastructure.config import get_config

    cfg = get_config().logging
    setup_logging(
        log_level or cfg.log_level,
        console_logging=console_logging or cfg.console_logging,
    )


_common_options = [
    click.option("--size", "-n", type=click.IntRange(min=1), help="Number of worker threads."),
    click.option("--verbose/--quiet", default=None, help="Print pool lifecycle notices."),
    click.option(
        "--log-level",
        type=click.Choice(LOG_LEVELS, case_sensitive=False),
        help="Logging level for the log file.",
    ),
    click.option("--console-logging", is_flag=True, help="Also log to stderr."),
]


def common_options(func):
    for option in reversed(_common_options):
        func = option(func)
    return func


@click.command()
@common_options
@click.option("--tasks", "-t", type=click.IntRange(min=0), default=8, show_default=True,
              help="Number of tasks to run.")
@click.option("--number", type=click.IntRange(min=0), default=10_000_000, show_default=True,
              help="Sum the integers up to this number in each task.")
def demo(size, verbose, log_level, console_logging, tasks, number):
    """Run CPU-bound summation tasks on a worker pool.

    Examples:
        jobpool demo --size 4 --tasks 8
        jobpool demo -n 2 -t 4 --number 1000 --verbose
    """
    _configure_logging(log_level, console_logging)
    pool = _pool_from_options(size, verbose)

    start_at = time.monotonic()
    for _ in range(tasks):
        SumTask.perform_async(pool, number)
    pool.wait()
    elapsed = time.monotonic() - start_at

    click.echo(f"It takes {elapsed:.2f}s")
    pool.error_report()
    if pool.errors:
        raise SystemExit(1)


@click.command(name="sleep-demo")
@common_options
@click.argument("durations", nargs=-1, type=click.FloatRange(min=0.0), required=True)
def sleep_demo(size, verbose, log_level, console_logging, durations):
    """Schedule one sleeping job per duration and report the wall time.

    With one worker the wall time is the sum of the durations; with as many
    workers as jobs it is the longest duration.

    Examples:
        jobpool sleep-demo 0.1 0.2 0.4 0.3
        jobpool sleep-demo --size 4 0.1 0.2 0.4 0.3
    """
    _configure_logging(log_level, console_logging)
    pool = _pool_from_options(size, verbose)

    for duration in durations:
        pool.schedule(time.sleep, duration)

    start_at = time.monotonic()
    pool.wait()
    elapsed = time.monotonic() - start_at

    click.echo(f"{len(durations)} job(s) on {pool.size} worker(s): {elapsed:.2f}s")
