"""Configuration management for jobpool.

This module provides a unified configuration system that supports:
- Configuration files in TOML format
- Environment variables
- Multiple configuration file locations (project, user, system)
- Type-safe configuration using Pydantic

Configuration Priority (highest to lowest):
1. Environment variables
2. Project configuration file (.jobpool/config.toml or jobpool.toml)
3. User configuration file (~/.config/jobpool/config.toml)
4. System configuration file (/etc/jobpool/config.toml)
5. Default values

Environment Variable Naming:
- Nested fields: JOBPOOL_<SECTION>__<FIELD> (e.g., JOBPOOL_POOL__SIZE)
- Short forms: POOL_SIZE, POOL_VERBOSE
"""

import logging
import os
from pathlib import Path
from typing import Any

import platformdirs
from pydantic import BaseModel, Field, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

logger = logging.getLogger(__name__)

APP_NAME = "jobpool"


class ShortEnvSettingsSource(PydanticBaseSettingsSource):
    """Settings source for environment variables without the JOBPOOL_ prefix."""

    # Map of field paths to environment variable names
    SHORT_ENV_VARS = {
        ("pool", "size"): "POOL_SIZE",
        ("pool", "verbose"): "POOL_VERBOSE",
    }

    BOOLEAN_ENV_VARS = ("POOL_VERBOSE",)

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from environment variables."""
        raise ValueError(f"Field {field_name} not found in short environment variables")

    def __call__(self) -> dict[str, Any]:
        """Build settings from the short environment variables."""
        data: dict[str, Any] = {}

        for field_path, env_var in self.SHORT_ENV_VARS.items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue

            current = data
            for part in field_path[:-1]:
                current = current.setdefault(part, {})

            if env_var in self.BOOLEAN_ENV_VARS:
                current[field_path[-1]] = env_value.lower() in ("true", "1", "yes")
            else:
                current[field_path[-1]] = env_value

        return data


class PoolSettings(BaseModel):
    """Worker pool configuration."""

    size: int = Field(
        default=1,
        ge=1,
        le=256,
        description="Number of worker threads",
    )

    verbose: bool = Field(
        default=False,
        description="Print pool lifecycle notices to the console",
    )

    thread_name_prefix: str = Field(
        default="worker",
        min_length=1,
        description="Prefix for worker thread names",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    console_logging: bool = Field(
        default=False,
        description="Also log to the console (stderr) in addition to the log file",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}, got {v}")
        return v_upper


class JobPoolConfig(BaseSettings):
    """Main jobpool configuration.

    Loaded from multiple sources in priority order: environment variables >
    project config > user config > system config > defaults.

    Environment Variables:
        - JOBPOOL_POOL__SIZE / POOL_SIZE: Number of workers
        - JOBPOOL_POOL__VERBOSE / POOL_VERBOSE: Lifecycle notices
        - JOBPOOL_LOGGING__LOG_LEVEL: Logging level
    """

    model_config = SettingsConfigDict(
        env_prefix="JOBPOOL_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    pool: PoolSettings = Field(
        default_factory=PoolSettings,
        description="Worker pool configuration",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the sources and their priority for settings.

        Priority order (highest to lowest):
        1. Environment variables (JOBPOOL_ prefixed, then short forms)
        2. Project configuration file
        3. User configuration file
        4. System configuration file
        5. Init settings (programmatic)
        """
        config_files = find_config_files()

        # Lowest priority first; reversed below
        toml_sources = []
        for location in ("system", "user", "project"):
            config_file = config_files[location]
            if config_file is None:
                continue
            try:
                toml_sources.append(TomlConfigSettingsSource(settings_cls, toml_file=config_file))
                logger.debug(f"Loaded {location} config: {config_file}")
            except Exception as e:
                logger.debug(f"Could not load {location} config: {e}")

        return (
            env_settings,
            ShortEnvSettingsSource(settings_cls),
            *reversed(toml_sources),
            init_settings,
        )


def find_config_files() -> dict[str, Path | None]:
    """Find configuration files in standard locations.

    Returns:
        Dictionary with keys 'system', 'user', 'project', each containing
        a Path to the config file if it exists, or None otherwise.
    """
    config_files: dict[str, Path | None] = {
        "system": None,
        "user": None,
        "project": None,
    }

    system_config = Path("/etc") / APP_NAME / "config.toml"
    if system_config.exists():
        config_files["system"] = system_config

    user_config = Path(platformdirs.user_config_dir(APP_NAME, appauthor=False)) / "config.toml"
    if user_config.exists():
        config_files["user"] = user_config

    # .jobpool/config.toml takes precedence over jobpool.toml
    cwd = Path.cwd()
    for project_config in (cwd / f".{APP_NAME}" / "config.toml", cwd / f"{APP_NAME}.toml"):
        if project_config.exists():
            config_files["project"] = project_config
            break

    return config_files


def get_config_file_locations() -> dict[str, Path]:
    """Get the standard configuration file locations.

    Returns:
        Dictionary with keys 'system', 'user', 'project', each containing
        the Path where the config file should be located (may not exist).
    """
    return {
        "system": Path("/etc") / APP_NAME / "config.toml",
        "user": Path(platformdirs.user_config_dir(APP_NAME, appauthor=False)) / "config.toml",
        "project": Path.cwd() / f".{APP_NAME}" / "config.toml",
    }


# Lazily initialized on first access
_config: JobPoolConfig | None = None


def get_config(reload: bool = False) -> JobPoolConfig:
    """Get the global configuration instance.

    Args:
        reload: If True, reload the configuration from files and environment.
    """
    global _config

    if _config is None or reload:
        _config = JobPoolConfig()

    return _config


def create_example_config() -> str:
    """Return the contents of a documented example configuration file."""
    return """\
# jobpool configuration file
#
# Locations (highest priority first):
#   .jobpool/config.toml or jobpool.toml in the current directory
#   ~/.config/jobpool/config.toml (platform equivalent)
#   /etc/jobpool/config.toml
#
# Environment variables override every file.

[pool]
# Number of worker threads
# Environment variable: JOBPOOL_POOL__SIZE or POOL_SIZE
size = 1

# Print "pool started" / "pool stopped" notices to stderr
# Environment variable: JOBPOOL_POOL__VERBOSE or POOL_VERBOSE
verbose = false

# Worker threads are named <prefix>-0, <prefix>-1, ...
# Environment variable: JOBPOOL_POOL__THREAD_NAME_PREFIX
thread_name_prefix = "worker"

[logging]
# Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL
# Environment variable: JOBPOOL_LOGGING__LOG_LEVEL
log_level = "INFO"

# Also log to stderr
# Environment variable: JOBPOOL_LOGGING__CONSOLE_LOGGING
console_logging = false
"""


def write_example_config(location: str = "user") -> Path:
    """Write an example configuration file to a standard location.

    Args:
        location: One of "user", "project" or "system"

    Returns:
        Path to the created configuration file.

    Raises:
        ValueError: If location is invalid.
        PermissionError: If cannot write to the location.
    """
    locations = get_config_file_locations()

    if location not in locations:
        raise ValueError(f"Invalid location '{location}'. Must be one of: user, project, system")

    config_path = locations[location]
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(create_example_config())

    logger.info(f"Created example configuration at: {config_path}")

    return config_path
