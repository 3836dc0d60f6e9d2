#!/usr/bin/env python3
"""
entry.py
--------
Dated journal entries and their sections.

An entry is committed from a config record such as:

    uid: 2024-01-15-walk
    title: A walk
    description: Walked along the canal
    date: [2024, 1, 15]
    notes: [cold]
    tags: [outdoors, winter]
    sections:
      - title: Morning
        path: morning.md       # or `content: ...` inline
        notes: []

Records are validated into EntryRecord/SectionRecord before anything
touches the archive. Stored entries are loaded as lazy Entry objects.

Storage layout:
    entries/<uid>/{title, description, notes/, tags/, date/,
                   sections/{length, <idx>/{title, content, notes/}}}
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

# --- Local imports ---
from diary.core.exceptions import ValidationError
from diary.core.validators import DataValidator
from diary.store.container import Container
from diary.store.lazy import (
    CachedEntity,
    entity_list_field,
    string_field,
    string_list_field,
    u16_list_field,
)


@dataclass
class SectionRecord:
    """Validated section of an entry config."""

    title: str
    content: str
    notes: List[str] = field(default_factory=list)

    @classmethod
    def from_config(
        cls, data: Mapping[str, Any], entry_uid: str, idx: int, base_dir: Path
    ) -> "SectionRecord":
        """
        Validate one section table.

        The section's text comes from ``content`` if present, otherwise
        from the file named by ``path`` (relative to ``base_dir``).

        Raises:
            ValidationError: On missing/mistyped attributes or unreadable path
        """
        context = f"entry '{entry_uid}', section {idx}"
        title = DataValidator.require_str(data, "title", context)
        notes = DataValidator.require_str_list(data, "notes", context)

        if "content" in data:
            content = DataValidator.require_str(data, "content", context)
        else:
            raw_path = DataValidator.require_str(data, "path", context)
            path = Path(raw_path).expanduser()
            if not path.is_absolute():
                path = base_dir / path
            if not path.is_file():
                raise ValidationError(f"Path '{path}' specified in {context} does not exist")
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ValidationError(f"While reading {context}'s path contents: {e}") from e

        return cls(title=title, content=content, notes=notes)


@dataclass
class EntryRecord:
    """Validated entry config."""

    uid: str
    title: str
    description: str
    date: List[int]
    notes: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    sections: List[SectionRecord] = field(default_factory=list)

    @classmethod
    def from_config(cls, data: Mapping[str, Any], base_dir: Path) -> "EntryRecord":
        """
        Validate a parsed entry config.

        Args:
            data: Parsed config mapping
            base_dir: Directory relative section paths are resolved against

        Raises:
            ValidationError: On any missing or mistyped attribute
        """
        uid = DataValidator.require_uid(data, "uid", "entry")
        context = f"entry '{uid}'"

        raw_sections = DataValidator.require_table_list(data, "sections", context)
        return cls(
            uid=uid,
            title=DataValidator.require_str(data, "title", context),
            description=DataValidator.require_str(data, "description", context),
            date=DataValidator.require_date(data, "date", context),
            notes=DataValidator.require_str_list(data, "notes", context),
            tags=DataValidator.require_str_list(data, "tags", context),
            sections=[
                SectionRecord.from_config(section, uid, idx, base_dir)
                for idx, section in enumerate(raw_sections)
            ],
        )


class Section(CachedEntity):
    """One titled block of text inside an entry."""

    title = string_field()
    content = string_field()
    notes = string_list_field()

    @classmethod
    def create(cls, record: SectionRecord, container: Container) -> "Section":
        """Build a fully cached section for ``container``; the caller stores it."""
        section = cls(container)
        section.title = record.title
        section.content = record.content
        section.notes = list(record.notes)
        return section


class Entry(CachedEntity):
    """
    A dated journal entry with lazily loaded attributes.

    Attributes:
        uid: Identifier, unique within ``entries/``
    """

    title = string_field()
    description = string_field()
    notes = string_list_field()
    tags = string_list_field()
    date = u16_list_field()
    sections = entity_list_field(Section)

    def __init__(self, uid: str, container: Container) -> None:
        super().__init__(container)
        self.uid = uid

    def __repr__(self) -> str:
        return f"Entry(uid={self.uid!r})"

    def describe(self) -> str:
        return f"entry '{self.uid}'"

    @classmethod
    def load_lazy(cls, uid: str, container: Container) -> "Entry":
        """Wrap a stored entry; nothing is read until accessed."""
        return cls(uid, container)

    @classmethod
    def create(cls, record: EntryRecord, collection: Container) -> "Entry":
        """
        Write a validated record as a new entry under ``collection``.

        Every attribute is cached, written exactly once, then cleared.

        Returns:
            The new entry, with an empty cache

        Raises:
            StorageError: If the entry cannot be written
        """
        container = collection.create_child(record.uid)
        sections_container = container.create_child("sections")

        with cls(record.uid, container) as entry:
            entry.title = record.title
            entry.description = record.description
            entry.notes = list(record.notes)
            entry.tags = list(record.tags)
            entry.date = list(record.date)
            entry.sections = [
                Section.create(section, sections_container.create_child(str(idx)))
                for idx, section in enumerate(record.sections)
            ]
        return entry

    def as_date(self) -> date:
        """The entry date as a ``datetime.date``."""
        year, month, day = self.date
        return date(year, month, day)

    def to_record(self) -> EntryRecord:
        """Materialize the stored entry back into a record."""
        self.fill_cache()
        sections = []
        for section in self.sections:
            sections.append(
                SectionRecord(
                    title=section.title,
                    content=section.content,
                    notes=list(section.notes),
                )
            )
            section.clear_cache()
        return EntryRecord(
            uid=self.uid,
            title=self.title,
            description=self.description,
            date=list(self.date),
            notes=list(self.notes),
            tags=list(self.tags),
            sections=sections,
        )


def entry_to_config(record: EntryRecord, section_paths: Optional[Dict[int, str]] = None) -> Dict[str, Any]:
    """
    Convert an entry record to a config mapping.

    Args:
        record: Entry record
        section_paths: Section index → file path to reference instead of
            inlining that section's content

    Returns:
        Mapping suitable for dumping as YAML and committing again
    """
    section_paths = section_paths or {}
    sections = []
    for idx, section in enumerate(record.sections):
        table: Dict[str, Any] = {"title": section.title}
        if idx in section_paths:
            table["path"] = section_paths[idx]
        else:
            table["content"] = section.content
        table["notes"] = list(section.notes)
        sections.append(table)

    return {
        "uid": record.uid,
        "title": record.title,
        "description": record.description,
        "date": list(record.date),
        "notes": list(record.notes),
        "tags": list(record.tags),
        "sections": sections,
    }
