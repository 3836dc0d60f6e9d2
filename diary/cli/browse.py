"""
Browse Commands
---------------

Read-only commands over the archive.

Commands:
    - list: List entries and MOCs, optionally filtered by tags
    - about: Show the attributes of an entry or MOC
    - pull: Write an entry or MOC back out as an editable config
    - since: Days since the diary epoch

Usage:
    diary list -f travel -f 2024 --strict -e
    diary about --moc winter
    diary pull 2024-01-15-walk --path drafts
    diary since --date 2024 1 15
"""
from datetime import date
from pathlib import Path

import click

from diary.archive import pull as pull_entity
from diary.archive import search, search_strict
from diary.archive.pull import DEFAULT_FILE_NAME
from diary.core.cli_options import moc_option, strict_option, tags_option
from diary.core.exceptions import DiaryError
from diary.core.logging_manager import handle_cli_error
from diary.utils.dates import EPOCH, days_since_epoch, parse_parts

from . import get_archive


def _echo_attr(name, value):
    if isinstance(value, list):
        click.echo(click.style(f"{name}:", fg="green"))
        if not value:
            click.echo("  (none)")
        for item in value:
            click.echo(f"  - {item}")
    else:
        click.echo(f"{click.style(f'{name}:', fg='green')} {value}")


@click.command("list")
@tags_option("-f", "--filter", "tags", help_text="Only list items with this tag (repeatable)")
@strict_option
@click.option("-e", "--entries", "show_entries", is_flag=True, help="Show entries")
@click.option("-m", "--mocs", "show_mocs", is_flag=True, help="Show MOCs")
@click.pass_context
def list_items(ctx, tags, strict, show_entries, show_mocs):
    """List entries and MOCs in the archive."""
    try:
        if not show_entries and not show_mocs:
            show_entries = show_mocs = True

        archive = get_archive(ctx)
        match = search_strict if strict else search

        sections = []
        if show_entries:
            entries = archive.list_entries()
            uids = match(tags, entries) if tags else [e.uid for e in entries]
            sections.append(("Entries", uids))
        if show_mocs:
            mocs = archive.list_mocs()
            uids = match(tags, mocs) if tags else [m.uid for m in mocs]
            sections.append(("MOCs", uids))

        for title, uids in sections:
            click.echo(f"\n📚 {title} ({len(uids)})")
            click.echo("=" * 40)
            for uid in uids:
                click.echo(f"  • {uid}")

    except DiaryError as e:
        handle_cli_error(ctx, e, "list", {"tags": list(tags), "strict": strict})


@click.command()
@click.argument("uid")
@moc_option
@click.pass_context
def about(ctx, uid, is_moc):
    """Show the attributes of an entry (or MOC)."""
    try:
        archive = get_archive(ctx)
        if is_moc:
            moc = archive.get_moc(uid)
            click.echo(f"\n# About MOC of uid `{uid}`")
            _echo_attr("tags", moc.tags)
            _echo_attr("title", moc.title)
            _echo_attr("description", moc.description)
            _echo_attr("notes", moc.notes)
            _echo_attr("collections", [c.title for c in moc.collections])
            moc.clear_cache()
        else:
            entry = archive.get_entry(uid)
            click.echo(f"\n# About entry of uid `{uid}`")
            _echo_attr("date", entry.as_date().isoformat())
            _echo_attr("title", entry.title)
            _echo_attr("description", entry.description)
            _echo_attr("notes", entry.notes)
            _echo_attr("tags", entry.tags)
            _echo_attr("sections", [s.title for s in entry.sections])
            entry.clear_cache()

    except DiaryError as e:
        handle_cli_error(ctx, e, "about", {"uid": uid, "is_moc": is_moc})


@click.command()
@click.argument("uid")
@moc_option
@click.option("-1", "--one-file", is_flag=True, help="Inline section contents into the config")
@click.option(
    "-p", "--path",
    type=click.Path(file_okay=False),
    default=".",
    help="Directory the config file is written to",
)
@click.option("-f", "--file-name", default=DEFAULT_FILE_NAME, help="Name of the output config file")
@click.pass_context
def pull(ctx, uid, is_moc, one_file, path, file_name):
    """Pull an entry (or MOC) out as an editable config."""
    try:
        archive = get_archive(ctx)
        config_path = pull_entity(
            archive,
            uid,
            is_moc=is_moc,
            out_dir=Path(path),
            file_name=file_name,
            one_file=one_file,
        )
        click.echo(f"✅ Pulled '{uid}' into {config_path}")

    except DiaryError as e:
        handle_cli_error(ctx, e, "pull", {"uid": uid, "path": path})


@click.command()
@click.option(
    "-d", "--date", "day",
    type=int,
    nargs=3,
    default=None,
    metavar="YEAR MONTH DAY",
    help="Count up to this date",
)
@click.option("-t", "--today", is_flag=True, help="Count up to today (default)")
@click.pass_context
def since(ctx, day, today):
    """Days elapsed since the diary epoch."""
    try:
        target = parse_parts(day) if day and not today else date.today()
        days = days_since_epoch(target)
        click.echo(f"{days} days since {EPOCH.isoformat()} (on {target.isoformat()})")

    except DiaryError as e:
        handle_cli_error(ctx, e, "since", {"date": list(day) if day else None})
