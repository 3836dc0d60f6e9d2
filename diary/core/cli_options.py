#!/usr/bin/env python3
"""
cli_options.py
-------------------
Reusable Click option decorators for consistent CLI interfaces.

Usage:
    from diary.core.cli_options import force_option, moc_option

    @cli.command()
    @moc_option
    @force_option
    def my_command(is_moc, force):
        pass
"""
import click


# ═══════════════════════════════════════════════════════════════════════════
# ENTITY OPTIONS
# ═══════════════════════════════════════════════════════════════════════════

moc_option = click.option(
    "-m", "--moc", "is_moc",
    is_flag=True,
    help="Operate on a MOC instead of an entry"
)


# ═══════════════════════════════════════════════════════════════════════════
# BACKUP OPTIONS
# ═══════════════════════════════════════════════════════════════════════════

force_option = click.option(
    "-f", "--force",
    is_flag=True,
    help="Force load a backup even if archive data may be lost"
)


# ═══════════════════════════════════════════════════════════════════════════
# FILTER OPTIONS
# ═══════════════════════════════════════════════════════════════════════════

def tags_option(*param_decls: str, help_text: str = "Filter by tag (repeatable)"):
    """
    Factory for a repeatable tag filter option.

    Args:
        param_decls: Option names (default: ``-t/--tag``)
        help_text: Custom help text

    Returns:
        Click option decorator yielding a tuple of tags
    """
    decls = param_decls or ("-t", "--tag", "tags")
    return click.option(*decls, multiple=True, help=help_text)


strict_option = click.option(
    "-s", "--strict",
    is_flag=True,
    help="Require every tag to match (default: any tag)"
)
