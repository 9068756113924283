"""Configuration management commands."""

import click


@click.group()
def config():
    """Manage jobpool configuration files."""
    pass


@config.command(name="init")
@click.option(
    "--location",
    type=click.Choice(["user", "project"], case_sensitive=False),
    default="user",
    help="Where to create the configuration file.",
)
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite existing configuration file.",
)
def config_init(location, force):
    """Create an example configuration file.

    By default, creates a user-level config file at
    ~/.config/jobpool/config.toml (or platform equivalent). Use
    --location=project to create .jobpool/config.toml in the current directory.

    Examples:
        jobpool config init
        jobpool config init --location=project
        jobpool config init --force
    """
    from jobpool.infrastructure.config import (
        get_config_file_locations,
        write_example_config,
    )

    locations = get_config_file_locations()
    config_path = locations[location.lower()]

    if config_path.exists() and not force:
        click.echo(f"Configuration file already exists at {config_path}\nUse --force to overwrite.")
        return

    try:
        created_path = write_example_config(location=location.lower())
        click.echo(f"Created configuration file: {created_path}")
    except PermissionError as e:
        click.echo(f"Error: Permission denied creating config file: {e}", err=True)
        raise SystemExit(1) from e


@config.command(name="show")
def config_show():
    """Show current configuration values from all sources."""
    from jobpool.infrastructure.config import get_config

    cfg = get_config(reload=True)

    click.echo("Current jobpool Configuration:")
    click.echo("=" * 60)

    click.echo("\n[Pool]")
    click.echo(f"  size: {cfg.pool.size}")
    click.echo(f"  verbose: {cfg.pool.verbose}")
    click.echo(f"  thread_name_prefix: {cfg.pool.thread_name_prefix}")

    click.echo("\n[Logging]")
    click.echo(f"  log_level: {cfg.logging.log_level}")
    click.echo(f"  console_logging: {cfg.logging.console_logging}")


@config.command(name="locate")
def config_locate():
    """Show configuration file locations and which of them exist."""
    from jobpool.infrastructure.config import find_config_files, get_config_file_locations

    locations = get_config_file_locations()
    existing = find_config_files()

    click.echo("Configuration File Locations:")
    click.echo("=" * 60)

    for location, title in (
        ("system", "System config (lowest priority)"),
        ("user", "User config"),
        ("project", "Project config (highest priority)"),
    ):
        click.echo(f"\n{title}:")
        click.echo(f"  Path: {existing[location] or locations[location]}")
        click.echo(f"  Status: {'Exists' if existing[location] else 'Not found'}")

    click.echo("\nPriority order (highest to lowest):")
    click.echo("  1. Environment variables")
    click.echo("  2. Project config (.jobpool/config.toml or jobpool.toml)")
    click.echo("  3. User config (~/.config/jobpool/config.toml)")
    click.echo("  4. System config (/etc/jobpool/config.toml)")
    click.echo("  5. Default values")
