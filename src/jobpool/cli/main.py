"""Command-line interface for jobpool.

This module provides the main CLI entry point. Commands are organized
into separate modules under jobpool.cli.commands.
"""

import logging

import click

from jobpool import __version__

# Basic logging setup (reconfigured by commands as needed)
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@click.group()
@click.version_option(version=__version__, prog_name="jobpool")
def cli():
    """jobpool - run many independent jobs on a bounded pool of threads."""


# These imports must come after cli is defined, hence noqa: E402
from jobpool.cli.commands.config import config  # noqa: E402
from jobpool.cli.commands.demo import demo, sleep_demo  # noqa: E402

cli.add_command(config)
cli.add_command(demo)
cli.add_command(sleep_demo)


if __name__ == "__main__":
    cli()
