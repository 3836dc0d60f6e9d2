"""
Archive layer: the archive root, its entities, and the operations on them.
"""
from .archive import MAX_ITVER, WIPE_PHRASE, Archive
from .backup_manager import BackupManager
from .entry import Entry, EntryRecord, Section, SectionRecord
from .moc import Collection, CollectionRecord, Moc, MocRecord
from .pull import pull
from .search import search, search_strict
from .sort import sort, sort_uids

__all__ = [
    "Archive",
    "BackupManager",
    "Collection",
    "CollectionRecord",
    "Entry",
    "EntryRecord",
    "MAX_ITVER",
    "Moc",
    "MocRecord",
    "Section",
    "SectionRecord",
    "WIPE_PHRASE",
    "pull",
    "search",
    "search_strict",
    "sort",
    "sort_uids",
]
