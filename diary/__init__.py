"""
Diary Archive Package
=====================

A local, file-backed archive for dated journal entries and curated
maps of content (MOCs).

Entries and MOCs are committed from YAML/TOML config files into a
hierarchical container store on disk. Attributes are loaded lazily and
cached in memory; every mutating command snapshots the archive first so
that a corrupted write can be rolled back.

Main Components:
    - store: Container store, ordered-list codec, lazy attribute model
    - archive: Archive root, entries, MOCs, backups, search and sorting
    - export: Markdown (Obsidian vault) rendering with Jinja2
    - core: Logging, exceptions, paths, validation, CLI helpers
    - utils: Config parsing and date arithmetic

Primary Interfaces:
    - diary.cli: Command-line interface (``diary``)
    - diary.archive.Archive: Archive root object

Example Usage:
    >>> from diary.archive import Archive
    >>> from diary.core.paths import ARCHIVE_DIR
    >>> archive = Archive.load(ARCHIVE_DIR)
    >>> archive.commit(Path("entry.yaml"))
"""

__version__ = "0.4.0"
__author__ = "Diary Archive Project"

from diary.archive import Archive
from diary.core.paths import ARCHIVE_DIR, BACKUP_PATH, HOME_DIR, LOG_DIR

__all__ = [
    "Archive",
    "ARCHIVE_DIR",
    "BACKUP_PATH",
    "HOME_DIR",
    "LOG_DIR",
]
