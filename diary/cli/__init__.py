#!/usr/bin/env python3
"""
Diary Archive CLI
-----------------

Command-line interface for a personal archive of dated entries and
maps of content.

This module provides the main CLI group and shared context setup for
all commands.

Command Structure:
    - Archive lifecycle (init, wipe, commit, remove, sort)
    - Backup & Restore (backup, load, rollback)
    - Browse (list, about, pull, since)
    - Export (export)

Usage:
    # Get general help
    diary --help

    # Commit an entry config
    diary commit entry.yaml

    # Use another home directory, with debug output
    diary --home /tmp/diary --verbose list
"""
from pathlib import Path
from typing import Optional

import click

from diary import __version__
from diary.archive import Archive
from diary.core import paths
from diary.core.cli import setup_logger
from diary.core.logging_manager import DiaryLogger


@click.group()
@click.version_option(__version__, prog_name="diary")
@click.option(
    "--home",
    type=click.Path(file_okay=False),
    default=str(paths.HOME_DIR),
    help=f"Diary home directory (default: ${paths.HOME_ENV_VAR} or ~/diary-cli)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Path to log directory (default: <home>/logs)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Log everything being done, and show tracebacks on errors",
)
@click.pass_context
def cli(ctx: click.Context, home: str, log_dir: Optional[str], verbose: bool) -> None:
    """Diary archive: commit, search, back up and export journal entries."""
    home_dir = Path(home).expanduser()

    ctx.ensure_object(dict)
    ctx.obj["home"] = home_dir
    ctx.obj["archive_dir"] = paths.archive_dir(home_dir)
    ctx.obj["backup_path"] = paths.backup_path(home_dir)
    ctx.obj["log_dir"] = Path(log_dir) if log_dir else paths.log_dir(home_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(ctx.obj["log_dir"], "diary", verbose=verbose)


def get_logger(ctx: click.Context) -> DiaryLogger:
    return ctx.obj["logger"]


def get_archive(ctx: click.Context) -> Archive:
    """Load (or transparently initialise) the archive from context."""
    if "archive" not in ctx.obj:
        ctx.obj["archive"] = Archive.load(ctx.obj["archive_dir"], get_logger(ctx))
    return ctx.obj["archive"]


# Import and register command modules
# These imports must come after CLI group definition
from .archive import commit, init, remove, sort, wipe  # noqa: E402
from .backup import backup, load, rollback  # noqa: E402
from .browse import about, list_items, pull, since  # noqa: E402
from .export import export  # noqa: E402

cli.add_command(init)
cli.add_command(wipe)
cli.add_command(commit)
cli.add_command(remove)
cli.add_command(sort)
cli.add_command(backup)
cli.add_command(load)
cli.add_command(rollback)
cli.add_command(list_items)
cli.add_command(about)
cli.add_command(pull)
cli.add_command(since)
cli.add_command(export)


if __name__ == "__main__":
    cli(obj={})
