#!/usr/bin/env python3
"""
backup_manager.py
--------------------
Archive backup and recovery operations.

A backup is the whole archive container tree compiled into a single
gzip tarball. Restoring reconciles the backup against the live archive
using the archive identity (``uid``) and iteration version (``itver``):

    - different uid      -> refused unless forced (unrelated archive)
    - older itver        -> refused unless forced (would lose changes)
    - equal itver        -> warned, then loaded
    - newer itver        -> loaded

The comparison decompiles the backup into a scratch directory that is
removed whatever the outcome. ``itver`` stands in for a transaction log:
it detects staleness and divergence without diffing content.

Usage:
    from diary.archive.backup_manager import BackupManager

    manager = BackupManager(ARCHIVE_DIR, BACKUP_PATH, logger=logger)

    # Create a backup (defaults to the rollback file)
    manager.create_backup(Path("~/journal-2024.tar.gz"))

    # Restore a specific backup
    manager.load_backup(Path("~/journal-2024.tar.gz"), force=False)

    # Restore the backup taken before the last mutating command
    manager.rollback()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import shutil
from pathlib import Path
from typing import Optional

# --- Local imports ---
from diary.core.exceptions import (
    BackupError,
    ConflictError,
    NotFoundError,
    StorageError,
)
from diary.core.logging_manager import DiaryLogger, safe_logger
from diary.core.temporal_files import TemporalFileManager
from diary.store.container import Container

from .archive import Archive


class BackupManager:
    """
    Handles archive backup and recovery operations.

    Attributes:
        archive_path: Location of the live archive
        backup_path: Well-known backup file used by commits and rollback
        logger: Optional logger for backup operations
    """

    def __init__(
        self,
        archive_path: Path,
        backup_path: Path,
        logger: Optional[DiaryLogger] = None,
    ) -> None:
        """
        Initialize backup manager.

        Args:
            archive_path: Location of the live archive
            backup_path: Default backup file (the rollback point)
            logger: Optional logger for backup operations
        """
        self.archive_path = Path(archive_path)
        self.backup_path = Path(backup_path)
        self.logger = logger

    def create_backup(self, destination: Optional[Path] = None) -> Path:
        """
        Compile the live archive into a single backup file.

        Args:
            destination: Output file (defaults to the rollback file)

        Returns:
            Path to the created backup

        Raises:
            NotFoundError: If there is no archive to back up
            BackupError: If the backup cannot be written
        """
        destination = Path(destination) if destination else self.backup_path
        log = safe_logger(self.logger)

        if not self.archive_path.is_dir():
            raise NotFoundError(
                f"Archive '{self.archive_path}' does not exist, "
                "run `diary init` to create a new one before you can back it up"
            )

        log.log_info(f"Backing up archive '{self.archive_path}' as '{destination}'...")
        archive = Archive.load_dir(self.archive_path, self.logger)
        try:
            archive.snapshot(destination)
        except StorageError as e:
            log.log_error(
                e,
                {"operation": "create_backup", "target_path": str(destination)},
            )
            raise BackupError(f"Failed to create backup: {e}") from e

        log.log_operation(
            "backup_created",
            {
                "backup_path": str(destination),
                "uid": f"{archive.uid:#018x}",
                "itver": archive.itver,
                "backup_size": destination.stat().st_size,
            },
        )
        return destination

    def _read_backup_identity(self, source: Path) -> Archive:
        """
        Decompile ``source`` into a scratch directory and read its identity.

        The scratch copy is removed before returning, on success or error.
        """
        with TemporalFileManager(base_dir=self.archive_path.parent) as temp_manager:
            scratch = temp_manager.create_temp_dir(prefix=".backup_compare_")
            Container.deserialize_tree(source, scratch)
            try:
                return Archive.load_dir(scratch)
            except (NotFoundError, StorageError) as e:
                raise BackupError(f"Backup '{source}' is not a valid archive: {e}") from e

    def _check_compatible(self, source: Path) -> None:
        """
        Refuse to load a backup of another archive or an older iteration.

        Raises:
            ConflictError: On uid mismatch or when the backup is older
        """
        old = Archive.load_dir(self.archive_path, self.logger)
        new = self._read_backup_identity(source)

        if new.uid != old.uid:
            raise ConflictError(
                "Cannot load backup as it is a backup of a different archive "
                "(uids don't match); use --force to load it anyway, "
                "deleting your current archive"
            )

        if old.itver == new.itver:
            safe_logger(self.logger).log_warning(
                "Detected that backup is the same age as the currently "
                "loaded archive (itver is the same)"
            )

        if old.itver > new.itver:
            raise ConflictError(
                "Cannot load backup as it is older than the currently loaded "
                f"archive (itver {new.itver} < {old.itver}); use --force to load "
                "it anyway, losing un-backed changes"
            )

    def load_backup(self, source: Path, force: bool = False) -> Archive:
        """
        Replace the live archive with the contents of a backup.

        Args:
            source: Backup file to load
            force: Load even over an unrelated or newer archive

        Returns:
            The restored archive

        Raises:
            NotFoundError: If ``source`` does not exist
            ConflictError: On uid mismatch or older itver without ``force``
            BackupError: If the backup cannot be decompiled
        """
        source = Path(source)
        log = safe_logger(self.logger)
        log.log_info(f"Loading archive backup '{source}'...")

        if not source.is_file():
            raise NotFoundError(f"Backup file '{source}' does not exist")

        if self.archive_path.is_dir():
            log.log_warning(
                f"Detected that there is already a loaded archive at '{self.archive_path}'"
            )
            if force:
                # The live archive may be too corrupted to read; don't try.
                log.log_warning("Forcefully loading backup; this may result in archive data loss")
            else:
                self._check_compatible(source)

        restored = self._replace_archive(source)
        log.log_operation(
            "backup_loaded",
            {
                "source": str(source),
                "uid": f"{restored.uid:#018x}",
                "itver": restored.itver,
                "forced": force,
            },
        )
        return restored

    def _replace_archive(self, source: Path) -> Archive:
        """
        Decompile ``source`` next to the archive, then swap it into place.

        The live archive is only touched once the backup has been fully
        extracted and its identity read.
        """
        staging = self.archive_path.with_name(self.archive_path.name + ".restoring")
        if staging.exists():
            shutil.rmtree(staging)

        try:
            Container.deserialize_tree(source, staging)
            Archive.load_dir(staging)
        except (NotFoundError, StorageError) as e:
            shutil.rmtree(staging, ignore_errors=True)
            raise BackupError(f"While decompiling backup '{source}': {e}") from e

        try:
            if self.archive_path.exists():
                shutil.rmtree(self.archive_path)
            staging.rename(self.archive_path)
        except OSError as e:
            raise BackupError(
                f"While replacing archive '{self.archive_path}' with backup: {e}; "
                f"the decompiled backup is left at '{staging}'"
            ) from e

        return Archive.load_dir(self.archive_path, self.logger)

    def rollback(self, force: bool = False) -> Archive:
        """
        Load the backup taken before the last mutating command.

        Rollback cannot revert a successful commit: the backup is taken
        before each commit, so it only recovers from commits that failed
        partway and left the archive corrupted.

        Raises:
            NotFoundError: If no backup has been made yet
        """
        log = safe_logger(self.logger)
        log.log_info("Rolling back to last backup...")
        log.log_warning(
            "Rollback cannot revert successful commits; only unsuccessful ones "
            "that corrupt the archive."
        )
        if not self.backup_path.is_file():
            raise NotFoundError("No recent backups made; cannot rollback")
        return self.load_backup(self.backup_path, force)
