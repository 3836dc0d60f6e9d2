#!/usr/bin/env python3
"""
archive.py
----------
The archive root: identity, version counter, collections and order lists.

Layout of the root container:

    uid            u64, random, assigned once by init
    itver          u16, +1 on every successful mutating command
    entries/       one child container per entry uid
    mocs/          one child container per MOC uid
    order/sorted   list of entry uids in date order
    order/unsorted list of entry uids committed since the last sort

Two archives with the same ``uid`` are snapshots of one logical archive
and are ordered by ``itver``; archives with different uids are
unrelated.

Every mutating operation (commit, remove, sort) first snapshots the
archive to the well-known backup file, best effort, so that a command
interrupted halfway can be rolled back.

Usage:
    from diary.archive import Archive

    archive = Archive.load(ARCHIVE_DIR, logger=logger)
    uid = archive.commit(Path("entry.yaml"), backup_path=BACKUP_PATH)
    for entry in archive.list_entries():
        ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import secrets
import shutil
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Union

# --- Local imports ---
from diary.core.exceptions import (
    ConflictError,
    DiaryError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from diary.core.logging_manager import DiaryLogger, safe_logger
from diary.core.validators import DataValidator
from diary.store import lists
from diary.store.container import Container, FieldType
from diary.utils.config import load_config

from .entry import Entry, EntryRecord
from .moc import Moc, MocRecord

MAX_ITVER = 0xFFFF

WIPE_PHRASE = (
    "I, as the user, confirm that I fully understand that I am wiping my ENTIRE "
    "archive and that this action is permanent and irreversible"
)


def read_identity(root: Container) -> Tuple[int, int]:
    """
    Read ``(uid, itver)`` from an archive root container.

    Raises:
        StorageError: If either field is missing or malformed
    """
    uid = root.read_field("uid", FieldType.U64)
    itver = root.read_field("itver", FieldType.U16)
    return uid, itver  # type: ignore[return-value]


class Archive:
    """
    Handle on a loaded archive.

    Attributes:
        root: Root container of the archive
        uid: Archive identity
        itver: Iteration version as of the last load or mutation
        logger: Optional logger
    """

    def __init__(
        self,
        root: Container,
        uid: int,
        itver: int,
        logger: Optional[DiaryLogger] = None,
    ) -> None:
        self.root = root
        self.uid = uid
        self.itver = itver
        self.logger = logger

    def __repr__(self) -> str:
        return f"Archive(path={str(self.path)!r}, uid={self.uid:#018x}, itver={self.itver})"

    @property
    def path(self) -> Path:
        return self.root.path

    # ----- Creation & loading -----

    @classmethod
    def init(cls, path: Path, logger: Optional[DiaryLogger] = None) -> "Archive":
        """
        Initialise a new archive at ``path``.

        Raises:
            ConflictError: If anything already exists at ``path``
            StorageError: If the archive cannot be written
        """
        path = Path(path)
        log = safe_logger(logger)
        if path.exists():
            raise ConflictError(
                f"Archive '{path}' already exists, try wiping it before initialising again"
            )

        log.log_info(f"Initialising a new archive at '{path}'...")
        root = Container.open_or_create(path)

        uid = secrets.randbits(64)
        itver = 0
        log.log_debug("Writing uid and itver to archive...")
        root.write_field("uid", FieldType.U64, uid)
        root.write_field("itver", FieldType.U16, itver)

        log.log_debug("Initialising sorted and unsorted entry lists...")
        order = root.create_child("order")
        lists.init(order.create_child("sorted"))
        lists.init(order.create_child("unsorted"))
        root.create_child("entries")
        root.create_child("mocs")

        log.log_operation("archive_init", {"path": str(path), "uid": f"{uid:#018x}"})
        return cls(root, uid, itver, logger)

    @classmethod
    def load_dir(cls, path: Path, logger: Optional[DiaryLogger] = None) -> "Archive":
        """
        Load an existing archive.

        Raises:
            NotFoundError: If no archive exists at ``path``
            StorageError: If its identity cannot be read
        """
        root = Container.open(path)
        safe_logger(logger).log_debug(f"Loading uid and itver of archive '{path}'...")
        try:
            uid, itver = read_identity(root)
        except StorageError as e:
            raise StorageError(f"While loading archive '{path}': {e}") from e
        return cls(root, uid, itver, logger)

    @classmethod
    def load(cls, path: Path, logger: Optional[DiaryLogger] = None) -> "Archive":
        """
        Load the archive at ``path``, initialising one if none exists.
        """
        path = Path(path)
        if not path.is_dir():
            safe_logger(logger).log_warning(
                f"Archive '{path}' not found; initialising a new one..."
            )
            return cls.init(path, logger)
        return cls.load_dir(path, logger)

    @classmethod
    def wipe(
        cls, path: Path, confirmation: str, logger: Optional[DiaryLogger] = None
    ) -> bool:
        """
        Permanently delete the archive at ``path``.

        Args:
            path: Archive location
            confirmation: Must equal WIPE_PHRASE exactly

        Returns:
            True if an archive was deleted, False if there was none

        Raises:
            ValidationError: If the confirmation phrase does not match
        """
        log = safe_logger(logger)
        if confirmation.strip() != WIPE_PHRASE:
            raise ValidationError("Entered phrase incorrect; archive not wiped")

        path = Path(path)
        if not path.exists():
            log.log_warning(f"Archive '{path}' doesn't exist; doing nothing")
            return False

        log.log_info("Wiping archive...")
        try:
            shutil.rmtree(path)
        except OSError as e:
            raise StorageError(f"While wiping archive '{path}': {e}") from e
        log.log_operation("archive_wipe", {"path": str(path)})
        return True

    # ----- Sub-containers -----

    @property
    def entries(self) -> Container:
        return self.root.child_or_create("entries")

    @property
    def mocs(self) -> Container:
        return self.root.child_or_create("mocs")

    @property
    def sorted_list(self) -> Container:
        return self.root.child("order").child("sorted")

    @property
    def unsorted_list(self) -> Container:
        return self.root.child("order").child("unsorted")

    # ----- Versioning -----

    def snapshot(self, destination: Path) -> Path:
        """Compile the whole archive tree into ``destination``."""
        return self.root.serialize_tree(destination)

    def prepare_mutation(self, backup_path: Optional[Path]) -> Optional[Path]:
        """
        Best-effort snapshot before a mutating command.

        Failure to back up never blocks the mutation; it is logged as a
        warning instead.

        Returns:
            The backup path, or None if no backup was made
        """
        if backup_path is None:
            return None
        log = safe_logger(self.logger)
        log.log_debug(f"Backing up archive to '{backup_path}' before modification...")
        try:
            return self.snapshot(backup_path)
        except DiaryError as e:
            log.log_warning(
                f"BACKUP FAILED, continuing without a recovery point: {e}",
                {"backup_path": str(backup_path)},
            )
            return None

    def bump_itver(self) -> int:
        """
        Increment and persist ``itver``.

        Raises:
            StorageError: If the counter would overflow 16 bits
        """
        if self.itver >= MAX_ITVER:
            raise StorageError(f"Archive itver {self.itver} cannot be incremented any further")
        self.root.write_field("itver", FieldType.U16, self.itver + 1)
        self.itver += 1
        safe_logger(self.logger).log_debug(f"Archive itver is now {self.itver}")
        return self.itver

    # ----- Commit -----

    def commit(self, config: Path, backup_path: Optional[Path] = None) -> Union[Entry, Moc]:
        """
        Commit an entry or MOC config file into the archive.

        Args:
            config: YAML or TOML config file
            backup_path: Where to snapshot the archive first (None: no backup)

        Returns:
            The committed entity, with an empty cache

        Raises:
            NotFoundError: If the config file does not exist
            ValidationError: If the config is malformed (archive untouched)
            ConflictError: If the uid already exists (archive untouched)
            StorageError: If writing fails (recover with rollback)
        """
        config = Path(config)
        if not config.is_file():
            raise NotFoundError(f"Entry config file '{config}' doesn't exist")

        self.prepare_mutation(backup_path)

        safe_logger(self.logger).log_debug(f"Parsing config at '{config}'")
        data = load_config(config)
        return self.commit_record(data, config.parent)

    def commit_record(self, data: Mapping[str, Any], base_dir: Path) -> Union[Entry, Moc]:
        """
        Commit an already-parsed config record.

        Validation and the duplicate check run before any write.
        """
        log = safe_logger(self.logger)
        is_moc = DataValidator.optional_bool(data, "is-moc", "config", default=False)

        if is_moc:
            record = MocRecord.from_config(data)
            collection = self.mocs
            if collection.has_child(record.uid):
                raise ConflictError(f"MOC of uid '{record.uid}' already exists")
            log.log_debug(f"Writing moc '{record.uid}' into archive...")
            entity: Union[Entry, Moc] = Moc.create(record, collection)
        else:
            entry_record = EntryRecord.from_config(data, Path(base_dir))
            collection = self.entries
            if collection.has_child(entry_record.uid):
                raise ConflictError(f"Entry of uid '{entry_record.uid}' already exists")
            log.log_debug(f"Writing entry '{entry_record.uid}' into archive...")
            entity = Entry.create(entry_record, collection)

            log.log_debug("Adding entry to unsorted list...")
            lists.push(self.unsorted_list, entity.uid)

        self.bump_itver()
        log.log_operation(
            "commit",
            {"uid": entity.uid, "kind": "moc" if is_moc else "entry", "itver": self.itver},
        )
        return entity

    # ----- Lookup -----

    @staticmethod
    def _has(kind: Container, uid: str) -> bool:
        # A uid that cannot name a container cannot name a stored entity either.
        try:
            return kind.has_child(uid)
        except StorageError:
            return False

    def get_entry(self, uid: str) -> Entry:
        """
        Look up an entry lazily.

        Raises:
            NotFoundError: If no entry has this uid
        """
        if not self._has(self.entries, uid):
            raise NotFoundError(f"Entry of uid '{uid}' does not exist")
        return Entry.load_lazy(uid, self.entries.child(uid))

    def get_moc(self, uid: str) -> Moc:
        """
        Look up a MOC lazily.

        Raises:
            NotFoundError: If no MOC has this uid
        """
        if not self._has(self.mocs, uid):
            raise NotFoundError(f"MOC of uid '{uid}' does not exist")
        return Moc.load_lazy(uid, self.mocs.child(uid))

    def get(self, uid: str, is_moc: bool = False) -> Union[Entry, Moc]:
        return self.get_moc(uid) if is_moc else self.get_entry(uid)

    def list_entries(self) -> List[Entry]:
        """All entries, unloaded, in uid order."""
        entries = self.entries
        return [Entry.load_lazy(uid, entries.child(uid)) for uid in entries.children()]

    def list_mocs(self) -> List[Moc]:
        """All MOCs, unloaded, in uid order."""
        mocs = self.mocs
        return [Moc.load_lazy(uid, mocs.child(uid)) for uid in mocs.children()]

    def sorted_uids(self) -> List[str]:
        return lists.read(self.sorted_list)

    def unsorted_uids(self) -> List[str]:
        return lists.read(self.unsorted_list)

    # ----- Removal -----

    def remove(self, uid: str, is_moc: bool = False, backup_path: Optional[Path] = None) -> None:
        """
        Remove an entry or MOC from the archive.

        Entry uids are also removed from both order lists; the lists are
        compacted so their indices stay dense.

        Raises:
            NotFoundError: If the entity does not exist
        """
        entity = self.get(uid, is_moc)
        self.prepare_mutation(backup_path)

        log = safe_logger(self.logger)
        if is_moc:
            self.mocs.remove_child(entity.uid)
        else:
            self.entries.remove_child(entity.uid)
            for order in (self.sorted_list, self.unsorted_list):
                while lists.remove_value(order, entity.uid):
                    log.log_debug(f"Removed '{entity.uid}' from '{order.path.name}' list")

        self.bump_itver()
        log.log_operation(
            "remove",
            {"uid": uid, "kind": "moc" if is_moc else "entry", "itver": self.itver},
        )
