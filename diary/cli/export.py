"""
Export Commands
---------------

Commands:
    - export: Render the archive as a Markdown (Obsidian) vault

Usage:
    diary export vault/
    diary export vault/ -t travel -t 2024 --strict
"""
from pathlib import Path

import click

from diary.core.cli_options import strict_option, tags_option
from diary.core.exceptions import DiaryError
from diary.core.logging_manager import handle_cli_error
from diary.export import export_markdown

from . import get_archive, get_logger


@click.command()
@click.argument("path", type=click.Path(file_okay=False))
@tags_option(help_text="Only export items with this tag (repeatable)")
@strict_option
@click.pass_context
def export(ctx, path, tags, strict):
    """Export the archive as an Obsidian vault of Markdown files."""
    try:
        click.echo(f"📤 Exporting archive to {path}...")
        stats = export_markdown(
            get_archive(ctx),
            Path(path),
            tags=list(tags) or None,
            strict=strict,
            logger=get_logger(ctx),
        )
        click.echo(f"✅ Export complete: {stats.summary()}")
        if stats.errors:
            click.echo(f"⚠️  {stats.errors} items could not be exported; see the error log")
            ctx.exit(1)

    except DiaryError as e:
        handle_cli_error(ctx, e, "export", {"path": path, "tags": list(tags)})
