"""Tests for the configuration system."""

import pytest
from pydantic import ValidationError

from jobpool.infrastructure.config import (
    JobPoolConfig,
    LoggingConfig,
    PoolSettings,
    create_example_config,
    find_config_files,
    get_config,
    get_config_file_locations,
    write_example_config,
)


class TestConfigDefaults:
    def test_default_pool(self, clean_env):
        config = JobPoolConfig()

        assert config.pool.size == 1
        assert config.pool.verbose is False
        assert config.pool.thread_name_prefix == "worker"

    def test_default_logging(self, clean_env):
        config = JobPoolConfig()

        assert config.logging.log_level == "INFO"
        assert config.logging.console_logging is False


class TestValidation:
    @pytest.mark.parametrize("size", [0, -3, 257])
    def test_pool_size_bounds(self, size):
        with pytest.raises(ValidationError):
            PoolSettings(size=size)

    def test_log_level_is_upper_cased(self):
        assert LoggingConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="Log level must be one of"):
            LoggingConfig(log_level="LOUD")


class TestEnvironmentVariables:
    def test_prefixed_env_vars(self, clean_env, monkeypatch):
        monkeypatch.setenv("JOBPOOL_POOL__SIZE", "8")
        monkeypatch.setenv("JOBPOOL_POOL__VERBOSE", "true")
        monkeypatch.setenv("JOBPOOL_LOGGING__LOG_LEVEL", "warning")

        config = JobPoolConfig()

        assert config.pool.size == 8
        assert config.pool.verbose is True
        assert config.logging.log_level == "WARNING"

    def test_short_env_vars(self, clean_env, monkeypatch):
        monkeypatch.setenv("POOL_SIZE", "3")
        monkeypatch.setenv("POOL_VERBOSE", "yes")

        config = JobPoolConfig()

        assert config.pool.size == 3
        assert config.pool.verbose is True

    def test_prefixed_env_vars_take_precedence(self, clean_env, monkeypatch):
        monkeypatch.setenv("POOL_SIZE", "3")
        monkeypatch.setenv("JOBPOOL_POOL__SIZE", "6")

        config = JobPoolConfig()

        assert config.pool.size == 6


class TestConfigFiles:
    def test_no_config_files(self, clean_env):
        files = find_config_files()

        assert files["user"] is None
        assert files["project"] is None

    def test_project_config_file(self, clean_env):
        project_file = clean_env / "work" / "jobpool.toml"
        project_file.write_text("[pool]\nsize = 4\n")

        assert find_config_files()["project"] == project_file
        assert JobPoolConfig().pool.size == 4

    def test_dot_directory_wins_over_toml_in_cwd(self, clean_env):
        work = clean_env / "work"
        (work / "jobpool.toml").write_text("[pool]\nsize = 4\n")
        (work / ".jobpool").mkdir()
        (work / ".jobpool" / "config.toml").write_text("[pool]\nsize = 5\n")

        assert find_config_files()["project"] == work / ".jobpool" / "config.toml"
        assert JobPoolConfig().pool.size == 5

    def test_project_config_overrides_user_config(self, clean_env):
        user_dir = clean_env / "user-config"
        user_dir.mkdir()
        (user_dir / "config.toml").write_text(
            '[pool]\nsize = 2\nthread_name_prefix = "user"\n'
        )
        (clean_env / "work" / "jobpool.toml").write_text("[pool]\nsize = 7\n")

        config = JobPoolConfig()

        assert config.pool.size == 7
        assert config.pool.thread_name_prefix == "user"

    def test_env_vars_override_config_files(self, clean_env, monkeypatch):
        (clean_env / "work" / "jobpool.toml").write_text("[pool]\nsize = 4\n")
        monkeypatch.setenv("JOBPOOL_POOL__SIZE", "9")

        assert JobPoolConfig().pool.size == 9

    def test_locations(self, clean_env):
        locations = get_config_file_locations()

        assert locations["user"] == clean_env / "user-config" / "config.toml"
        assert locations["project"] == clean_env / "work" / ".jobpool" / "config.toml"
        assert str(locations["system"]).endswith("jobpool/config.toml")


class TestExampleConfig:
    def test_example_config_is_valid(self, clean_env):
        (clean_env / "work" / "jobpool.toml").write_text(create_example_config())

        config = JobPoolConfig()

        assert config.pool.size == 1
        assert config.logging.log_level == "INFO"

    def test_write_example_config(self, clean_env):
        path = write_example_config("project")

        assert path == clean_env / "work" / ".jobpool" / "config.toml"
        assert path.read_text() == create_example_config()

    def test_write_example_config_rejects_unknown_location(self, clean_env):
        with pytest.raises(ValueError, match="Invalid location"):
            write_example_config("elsewhere")


def test_get_config_is_cached(clean_env, monkeypatch):
    first = get_config(reload=True)

    assert get_config() is first

    monkeypatch.setenv("JOBPOOL_POOL__SIZE", "11")
    reloaded = get_config(reload=True)

    assert reloaded is not first
    assert reloaded.pool.size == 11

    monkeypatch.delenv("JOBPOOL_POOL__SIZE")
    get_config(reload=True)
