"""Pytest configuration and fixtures.

Logging Configuration:
---------------------
Application logs are quiet (WARNING) during tests. Set
JOBPOOL_ENABLE_TEST_LOGGING=1 to get live logging at the level given by
JOBPOOL_LOG_LEVEL (default: INFO).
"""

import logging
import os
import threading

import pytest

from jobpool.core.worker_pool import WorkerPool

ENV_VARS_TO_CLEAR = [
    "JOBPOOL_POOL__SIZE",
    "JOBPOOL_POOL__VERBOSE",
    "JOBPOOL_POOL__THREAD_NAME_PREFIX",
    "JOBPOOL_LOGGING__LOG_LEVEL",
    "JOBPOOL_LOGGING__CONSOLE_LOGGING",
    "POOL_SIZE",
    "POOL_VERBOSE",
]


def pytest_configure(config):
    """Enable live logging on request, otherwise quiet the jobpool loggers."""
    if os.environ.get("JOBPOOL_ENABLE_TEST_LOGGING"):
        config.option.log_cli = True
        config.option.log_cli_level = os.environ.get("JOBPOOL_LOG_LEVEL", "INFO")
        config.option.log_cli_format = (
            "[%(asctime)s] %(levelname)-8s %(threadName)s %(name)s - %(message)s"
        )
        config.option.log_cli_date_format = "%H:%M:%S"
    else:
        logging.getLogger("jobpool").setLevel(logging.WARNING)


class ResultCollector:
    """Lock-protected list that jobs append to from worker threads."""

    def __init__(self):
        self._items = []
        self._lock = threading.Lock()

    def append(self, item):
        with self._lock:
            self._items.append(item)

    @property
    def items(self) -> list:
        with self._lock:
            return list(self._items)

    def __len__(self):
        with self._lock:
            return len(self._items)


@pytest.fixture
def results():
    """Thread-safe collector for job side effects."""
    return ResultCollector()


@pytest.fixture
def pool():
    """A one-worker pool that is killed after the test if still alive."""
    pool = WorkerPool()
    yield pool
    if not pool.state.is_terminal:
        pool.kill_all()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate configuration from the environment and from config files.

    Clears jobpool environment variables and runs the test in an empty
    working directory with its own user config directory.
    """
    for var in ENV_VARS_TO_CLEAR:
        monkeypatch.delenv(var, raising=False)

    user_config_dir = tmp_path / "user-config"
    monkeypatch.setattr(
        "jobpool.infrastructure.config.platformdirs.user_config_dir",
        lambda *args, **kwargs: str(user_config_dir),
    )
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return tmp_path
