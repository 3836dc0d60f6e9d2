#!/usr/bin/env python3
"""
search.py
---------
Tag filters over entries and MOCs.

Two modes:
    - ``search_strict``: an entity matches when it carries *every* tag
    - ``search``: an entity matches when it carries *at least one* tag

Both are read-only and preserve the order of the input. Each entity's
``tags`` attribute is dropped from its cache once tested, so scanning
the whole archive keeps nothing resident.

Usage:
    from diary.archive.search import search, search_strict

    uids = search_strict(["travel", "2024"], archive.list_entries())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Callable, Iterable, List, Sequence, Union

# --- Local imports ---
from .entry import Entry
from .moc import Moc

Taggable = Union[Entry, Moc]


def _filter(
    tags: Sequence[str],
    entities: Iterable[Taggable],
    matches: Callable[[Sequence[str], Sequence[str]], bool],
) -> List[str]:
    uids: List[str] = []
    for entity in entities:
        if matches(tags, entity.tags):
            uids.append(entity.uid)
        entity.forget("tags")
    return uids


def search_strict(tags: Sequence[str], entities: Iterable[Taggable]) -> List[str]:
    """
    Uids of the entities that carry all of ``tags``.

    An empty ``tags`` matches every entity.
    """
    return _filter(tags, entities, lambda want, have: all(tag in have for tag in want))


def search(tags: Sequence[str], entities: Iterable[Taggable]) -> List[str]:
    """
    Uids of the entities that carry at least one of ``tags``.

    An empty ``tags`` matches nothing.
    """
    return _filter(tags, entities, lambda want, have: any(tag in have for tag in want))
