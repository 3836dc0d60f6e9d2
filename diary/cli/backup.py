"""
Backup & Restore Commands
--------------------------

Commands:
    - backup: Compile the archive into a single backup file
    - load: Replace the archive with a backup
    - rollback: Load the backup taken before the last mutating command

Usage:
    # Back up to the rollback file, or elsewhere
    diary backup
    diary backup ~/journal-2024.tar.gz

    # Restore, refusing unrelated or older backups unless forced
    diary load ~/journal-2024.tar.gz
    diary load --force ~/journal-2024.tar.gz
"""
from pathlib import Path

import click

from diary.archive import BackupManager
from diary.core.cli_options import force_option
from diary.core.exceptions import DiaryError
from diary.core.logging_manager import handle_cli_error

from . import get_logger


def get_backup_manager(ctx) -> BackupManager:
    return BackupManager(ctx.obj["archive_dir"], ctx.obj["backup_path"], get_logger(ctx))


@click.command()
@click.argument("out_path", required=False, type=click.Path(dir_okay=False))
@click.pass_context
def backup(ctx, out_path):
    """Back up the archive (default: the rollback file)."""
    try:
        click.echo("💾 Backing up archive...")
        manager = get_backup_manager(ctx)
        path = manager.create_backup(Path(out_path) if out_path else None)
        click.echo(f"✅ Backup created: {path}")

    except DiaryError as e:
        handle_cli_error(ctx, e, "backup", {"out_path": out_path})


@click.command()
@click.argument("file_path", type=click.Path(dir_okay=False))
@force_option
@click.pass_context
def load(ctx, file_path, force):
    """Load a backed up archive."""
    try:
        click.echo(f"♻️  Loading backup: {file_path}")
        archive = get_backup_manager(ctx).load_backup(Path(file_path), force=force)
        click.echo(f"✅ Archive restored (itver {archive.itver})")

    except DiaryError as e:
        handle_cli_error(ctx, e, "load", {"file_path": file_path, "force": force})


@click.command()
@force_option
@click.pass_context
def rollback(ctx, force):
    """Roll back to the last backup."""
    try:
        click.echo("♻️  Rolling back to last backup...")
        archive = get_backup_manager(ctx).rollback(force=force)
        click.echo(f"✅ Archive rolled back (itver {archive.itver})")

    except DiaryError as e:
        handle_cli_error(ctx, e, "rollback", {"force": force})
