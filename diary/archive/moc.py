#!/usr/bin/env python3
"""
moc.py
------
Maps of content: curated groupings of entries and other MOCs.

A MOC config looks like:

    is-moc: true
    uid: winter
    title: Winter
    description: Everything cold
    notes: []
    tags: [index]
    collections:
      - title: Walks
        notes: []
        include: [outdoors, winter]

A collection does not store its members. At render time it pulls in
every entry and MOC whose tags contain all of its ``include`` tags.

Storage layout:
    mocs/<uid>/{title, description, notes/, tags/,
                collections/{length, <idx>/{title, notes/, include/}}}
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

# --- Local imports ---
from diary.core.validators import DataValidator
from diary.store.container import Container
from diary.store.lazy import (
    CachedEntity,
    entity_list_field,
    string_field,
    string_list_field,
)


@dataclass
class CollectionRecord:
    """Validated collection of a MOC config."""

    title: str
    notes: List[str] = field(default_factory=list)
    include: List[str] = field(default_factory=list)

    @classmethod
    def from_config(cls, data: Mapping[str, Any], moc_uid: str, idx: int) -> "CollectionRecord":
        context = f"moc '{moc_uid}', collection {idx}"
        return cls(
            title=DataValidator.require_str(data, "title", context),
            notes=DataValidator.require_str_list(data, "notes", context),
            include=DataValidator.require_str_list(data, "include", context),
        )


@dataclass
class MocRecord:
    """Validated MOC config."""

    uid: str
    title: str
    description: str
    notes: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    collections: List[CollectionRecord] = field(default_factory=list)

    @classmethod
    def from_config(cls, data: Mapping[str, Any]) -> "MocRecord":
        """
        Validate a parsed MOC config.

        Raises:
            ValidationError: On any missing or mistyped attribute
        """
        uid = DataValidator.require_uid(data, "uid", "moc")
        context = f"moc '{uid}'"

        raw_collections = DataValidator.require_table_list(data, "collections", context)
        return cls(
            uid=uid,
            title=DataValidator.require_str(data, "title", context),
            description=DataValidator.require_str(data, "description", context),
            notes=DataValidator.require_str_list(data, "notes", context),
            tags=DataValidator.require_str_list(data, "tags", context),
            collections=[
                CollectionRecord.from_config(collection, uid, idx)
                for idx, collection in enumerate(raw_collections)
            ],
        )


class Collection(CachedEntity):
    """A titled group inside a MOC, defined by the tags it includes."""

    title = string_field()
    notes = string_list_field()
    include = string_list_field()

    @classmethod
    def create(cls, record: CollectionRecord, container: Container) -> "Collection":
        collection = cls(container)
        collection.title = record.title
        collection.notes = list(record.notes)
        collection.include = list(record.include)
        return collection


class Moc(CachedEntity):
    """
    A map of contents with lazily loaded attributes.

    Attributes:
        uid: Identifier, unique within ``mocs/``
    """

    title = string_field()
    description = string_field()
    notes = string_list_field()
    tags = string_list_field()
    collections = entity_list_field(Collection)

    def __init__(self, uid: str, container: Container) -> None:
        super().__init__(container)
        self.uid = uid

    def __repr__(self) -> str:
        return f"Moc(uid={self.uid!r})"

    def describe(self) -> str:
        return f"moc '{self.uid}'"

    @classmethod
    def load_lazy(cls, uid: str, container: Container) -> "Moc":
        return cls(uid, container)

    @classmethod
    def create(cls, record: MocRecord, collection: Container) -> "Moc":
        """
        Write a validated record as a new MOC under ``collection``.

        Every attribute is cached, written exactly once, then cleared.
        """
        container = collection.create_child(record.uid)
        collections_container = container.create_child("collections")

        with cls(record.uid, container) as moc:
            moc.title = record.title
            moc.description = record.description
            moc.notes = list(record.notes)
            moc.tags = list(record.tags)
            moc.collections = [
                Collection.create(item, collections_container.create_child(str(idx)))
                for idx, item in enumerate(record.collections)
            ]
        return moc

    def to_record(self) -> MocRecord:
        """Materialize the stored MOC back into a record."""
        self.fill_cache()
        collections = []
        for item in self.collections:
            collections.append(
                CollectionRecord(
                    title=item.title,
                    notes=list(item.notes),
                    include=list(item.include),
                )
            )
            item.clear_cache()
        return MocRecord(
            uid=self.uid,
            title=self.title,
            description=self.description,
            notes=list(self.notes),
            tags=list(self.tags),
            collections=collections,
        )


def moc_to_config(record: MocRecord) -> Dict[str, Any]:
    """Convert a MOC record to a committable config mapping."""
    return {
        "is-moc": True,
        "uid": record.uid,
        "title": record.title,
        "description": record.description,
        "notes": list(record.notes),
        "tags": list(record.tags),
        "collections": [
            {
                "title": item.title,
                "notes": list(item.notes),
                "include": list(item.include),
            }
            for item in record.collections
        ],
    }
