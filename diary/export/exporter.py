#!/usr/bin/env python3
"""
exporter.py
-----------
Export archive entries and MOCs to Markdown files.

Each entity is written to ``<out_dir>/<uid>.md`` through a Jinja2
template, giving a directory that opens directly as an Obsidian vault:
front matter tags, a notes digest, then section contents as block
quotes. A MOC's collections list the entries and MOCs whose tags
include every tag of the collection, entries in date order.

Entity caches are cleared once rendered so an export over the whole
archive keeps nothing resident.

Usage:
    from diary.export import export_markdown

    stats = export_markdown(archive, Path("vault"), tags=["travel"], strict=True)
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

# --- Local imports ---
from diary.archive.archive import Archive
from diary.archive.entry import Entry
from diary.archive.moc import Collection, Moc
from diary.archive.search import search, search_strict
from diary.archive.sort import sort_uids
from diary.core.cli import ExportStats
from diary.core.exceptions import DiaryError, ExportError
from diary.core.logging_manager import DiaryLogger, safe_logger

from .renderer import MarkdownRenderer

ENTRY_TEMPLATE = "entry.md.jinja2"
MOC_TEMPLATE = "moc.md.jinja2"


def write_if_changed(path: Path, content: str) -> str:
    """
    Write content to file only if it differs from existing content.

    Returns:
        Status string: "created", "updated", or "unchanged"

    Raises:
        ExportError: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        if path.exists():
            existing = path.read_text(encoding="utf-8")
            if existing == content:
                return "unchanged"
            path.write_text(content, encoding="utf-8")
            return "updated"
        path.write_text(content, encoding="utf-8")
        return "created"
    except OSError as e:
        raise ExportError(f"While writing '{path}': {e}") from e


def _link_context(entity: Any) -> Dict[str, Any]:
    context = {
        "uid": entity.uid,
        "title": entity.title,
        "description": entity.description,
        "notes": list(entity.notes),
    }
    entity.clear_cache()
    return context


class MarkdownExporter:
    """
    Render archive entities to Markdown with Jinja2 templates.

    Attributes:
        archive: Loaded archive
        out_dir: Output directory (the vault)
        renderer: Jinja2 renderer
        logger: Optional logger for operation tracking
    """

    def __init__(
        self,
        archive: Archive,
        out_dir: Path,
        renderer: Optional[MarkdownRenderer] = None,
        logger: Optional[DiaryLogger] = None,
    ) -> None:
        self.archive = archive
        self.out_dir = Path(out_dir)
        self.renderer = renderer or MarkdownRenderer()
        self.logger = logger

    # ----- Context builders -----

    def entry_context(self, entry: Entry) -> Dict[str, Any]:
        sections: List[Dict[str, Any]] = []
        for section in entry.sections:
            sections.append(
                {
                    "title": section.title,
                    "content": section.content,
                    "notes": list(section.notes),
                }
            )
            section.clear_cache()

        context = {
            "uid": entry.uid,
            "title": entry.title,
            "description": entry.description,
            "date": list(entry.date),
            "notes": list(entry.notes),
            "tags": list(entry.tags),
            "sections": sections,
        }
        entry.clear_cache()
        return context

    def collection_context(self, collection: Collection) -> Dict[str, Any]:
        """
        Members of a collection: every MOC and entry carrying all of its
        ``include`` tags, entries sorted by date.
        """
        include = list(collection.include)
        moc_uids = search_strict(include, self.archive.list_mocs())
        entry_uids = sort_uids(
            self.archive, search_strict(include, self.archive.list_entries())
        )
        context = {
            "title": collection.title,
            "notes": list(collection.notes),
            "mocs": [_link_context(self.archive.get_moc(uid)) for uid in moc_uids],
            "entries": [_link_context(self.archive.get_entry(uid)) for uid in entry_uids],
        }
        collection.clear_cache()
        return context

    def moc_context(self, moc: Moc) -> Dict[str, Any]:
        collections = [self.collection_context(item) for item in moc.collections]
        context = {
            "uid": moc.uid,
            "title": moc.title,
            "description": moc.description,
            "notes": list(moc.notes),
            "tags": list(moc.tags),
            "collections": collections,
        }
        moc.clear_cache()
        return context

    # ----- Export -----

    def export_entry(self, entry: Entry, stats: ExportStats) -> Path:
        safe_logger(self.logger).log_debug(f"Exporting entry of uid '{entry.uid}'...")
        path = self.out_dir / f"{entry.uid}.md"
        content = self.renderer.render(ENTRY_TEMPLATE, self.entry_context(entry))
        stats.record(write_if_changed(path, content))
        stats.entries_exported += 1
        return path

    def export_moc(self, moc: Moc, stats: ExportStats) -> Path:
        safe_logger(self.logger).log_debug(f"Exporting moc of uid '{moc.uid}'...")
        path = self.out_dir / f"{moc.uid}.md"
        content = self.renderer.render(MOC_TEMPLATE, self.moc_context(moc))
        stats.record(write_if_changed(path, content))
        stats.mocs_exported += 1
        return path

    def select(
        self, tags: Optional[Sequence[str]], strict: bool
    ) -> Tuple[List[Entry], List[Moc]]:
        """Entries and MOCs to export: all, or those matching ``tags``."""
        entries = self.archive.list_entries()
        mocs = self.archive.list_mocs()
        if tags is None:
            return entries, mocs

        match = search_strict if strict else search
        return (
            [self.archive.get_entry(uid) for uid in match(tags, entries)],
            [self.archive.get_moc(uid) for uid in match(tags, mocs)],
        )

    def export_all(
        self, tags: Optional[Sequence[str]] = None, strict: bool = False
    ) -> ExportStats:
        """
        Export the selected entries and MOCs.

        Args:
            tags: Only export entities with these tags (None: everything)
            strict: Require all ``tags`` rather than any

        An item that fails to render or write is counted in ``errors``
        and logged; the remaining items are still exported.

        Returns:
            Export statistics
        """
        log = safe_logger(self.logger)
        stats = ExportStats()
        log.log_info(f"Exporting archive to '{self.out_dir}'...")

        entries, mocs = self.select(tags, strict)
        for entry in entries:
            try:
                self.export_entry(entry, stats)
            except DiaryError as e:
                stats.errors += 1
                log.log_error(e, {"operation": "export_entry", "uid": entry.uid})
        for moc in mocs:
            try:
                self.export_moc(moc, stats)
            except DiaryError as e:
                stats.errors += 1
                log.log_error(e, {"operation": "export_moc", "uid": moc.uid})

        log.log_operation("export", {"out_dir": str(self.out_dir), **stats.to_dict()})
        return stats


def export_markdown(
    archive: Archive,
    out_dir: Path,
    tags: Optional[Sequence[str]] = None,
    strict: bool = False,
    logger: Optional[DiaryLogger] = None,
) -> ExportStats:
    """Export ``archive`` to Markdown files in ``out_dir``."""
    exporter = MarkdownExporter(archive, out_dir, logger=logger or archive.logger)
    return exporter.export_all(tags=tags, strict=strict)
