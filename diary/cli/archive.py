"""
Archive Lifecycle Commands
--------------------------

Commands that create, mutate or destroy the archive.

Commands:
    - init: Initialise a new archive
    - wipe: Permanently delete the archive
    - commit: Commit an entry or MOC config
    - remove: Remove an entry or MOC
    - sort: Sort the committed, unsorted entries

Every mutating command snapshots the archive to the rollback file
first and advances the archive's itver on success.

Usage:
    diary init
    diary commit entry.yaml
    diary remove --moc winter
    diary sort
"""
from pathlib import Path

import click

from diary.archive import WIPE_PHRASE, Archive, Moc
from diary.archive.sort import sort as sort_archive
from diary.core.cli_options import moc_option
from diary.core.exceptions import DiaryError
from diary.core.logging_manager import handle_cli_error

from . import get_archive, get_logger


@click.command()
@click.pass_context
def init(ctx):
    """Initialise a new archive."""
    try:
        archive = Archive.init(ctx.obj["archive_dir"], get_logger(ctx))
        click.echo(f"✅ Initialised archive at {archive.path}")
        click.echo(f"   uid: {archive.uid:#018x}")

    except DiaryError as e:
        handle_cli_error(ctx, e, "init", {"archive_dir": str(ctx.obj["archive_dir"])})


@click.command()
@click.pass_context
def wipe(ctx):
    """Permanently delete the archive."""
    try:
        click.echo("⚠️  This wipes your ENTIRE archive and cannot be undone.")
        click.echo("To confirm, type the following phrase exactly:")
        click.echo(f"  {WIPE_PHRASE}")
        phrase = click.prompt("Phrase", default="", show_default=False)

        if Archive.wipe(ctx.obj["archive_dir"], phrase, get_logger(ctx)):
            click.echo("🗑️  Archive wiped")
        else:
            click.echo("⚠️  No archive to wipe")

    except DiaryError as e:
        handle_cli_error(ctx, e, "wipe")


@click.command()
@click.argument("config", type=click.Path(dir_okay=False))
@click.pass_context
def commit(ctx, config):
    """Commit an entry (or MOC) config file into the archive."""
    try:
        archive = get_archive(ctx)
        entity = archive.commit(Path(config), backup_path=ctx.obj["backup_path"])
        kind = "MOC" if isinstance(entity, Moc) else "entry"
        click.echo(f"✅ Committed {kind} '{entity.uid}' (itver {archive.itver})")

    except DiaryError as e:
        handle_cli_error(ctx, e, "commit", {"config": config})


@click.command()
@click.argument("uid")
@moc_option
@click.pass_context
def remove(ctx, uid, is_moc):
    """Remove an entry (or MOC) from the archive."""
    try:
        archive = get_archive(ctx)
        archive.remove(uid, is_moc=is_moc, backup_path=ctx.obj["backup_path"])
        kind = "MOC" if is_moc else "entry"
        click.echo(f"🗑️  Removed {kind} '{uid}' (itver {archive.itver})")

    except DiaryError as e:
        handle_cli_error(ctx, e, "remove", {"uid": uid, "is_moc": is_moc})


@click.command()
@click.pass_context
def sort(ctx):
    """Sort the committed, unsorted entries by date."""
    try:
        archive = get_archive(ctx)
        pending = len(archive.unsorted_uids())
        ordered = sort_archive(archive, backup_path=ctx.obj["backup_path"])
        if pending:
            click.echo(f"✅ Sorted {pending} new entries ({len(ordered)} total)")
        else:
            click.echo("Nothing to sort")

    except DiaryError as e:
        handle_cli_error(ctx, e, "sort")
