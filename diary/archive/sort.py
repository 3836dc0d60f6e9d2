#!/usr/bin/env python3
"""
sort.py
-------
Date ordering of committed entries.

Newly committed entries land in ``order/unsorted``. ``sort`` folds them
into ``order/sorted`` so that list stays in date order (ties broken by
uid) and empties the unsorted list. Like every mutating command it
snapshots the archive first and advances ``itver``.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

# --- Local imports ---
from diary.core.logging_manager import safe_logger
from diary.store import lists

from .archive import Archive


def sort_uids(archive: Archive, uids: Iterable[str]) -> List[str]:
    """
    Order entry uids by entry date, then by uid.

    Raises:
        NotFoundError: If a uid names no entry
    """
    keys: Dict[str, Tuple[Tuple[int, ...], str]] = {}
    for uid in uids:
        entry = archive.get_entry(uid)
        keys[uid] = (tuple(entry.date), uid)
        entry.clear_cache()
    return sorted(keys, key=keys.__getitem__)


def sort(archive: Archive, backup_path: Optional[Path] = None) -> List[str]:
    """
    Merge the unsorted entries into the sorted list.

    Args:
        archive: Loaded archive
        backup_path: Where to snapshot the archive first (None: no backup)

    Returns:
        The new sorted list
    """
    log = safe_logger(archive.logger)
    unsorted = archive.unsorted_uids()
    if not unsorted:
        log.log_info("No unsorted entries; nothing to do")
        return archive.sorted_uids()

    archive.prepare_mutation(backup_path)

    log.log_info(f"Sorting {len(unsorted)} unsorted entries...")
    merged = sort_uids(archive, archive.sorted_uids() + unsorted)

    lists.write(merged, archive.root.child("order").replace_child("sorted"))
    lists.init(archive.root.child("order").replace_child("unsorted"))

    archive.bump_itver()
    log.log_operation(
        "sort",
        {"sorted": len(merged), "newly_sorted": len(unsorted), "itver": archive.itver},
    )
    return merged
