#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the diary archive.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in different subsystems. Components
raise these; only the CLI boundary decides on messages and exit codes.

Exception Hierarchy:
    Exception (built-in)
    └── DiaryError - Base for all archive errors
        ├── NotFoundError - Archive, entity or backup absent
        ├── ValidationError - Config record missing/mistyped field
        ├── StorageError - Container store read/write failure
        │   └── BackupError - Snapshot creation/restoration failures
        ├── ConflictError - uid collision, identity/version mismatch
        ├── ExportError - Markdown export failures
        └── TemporalFileError - Temporary file management errors

Usage:
    from diary.core.exceptions import StorageError, ValidationError

    try:
        archive.commit(config_path)
    except ValidationError as e:
        logger.log_error(e, {"operation": "commit"})
    except StorageError as e:
        logger.log_error(e, {"operation": "commit"})
"""


class DiaryError(Exception):
    """
    Base exception for all diary archive errors.

    Catch this to handle any archive error at a command boundary, or
    catch specific subclasses for more granular handling.
    """

    pass


class NotFoundError(DiaryError):
    """
    Exception for absent archives, entities and backup files.

    Often recoverable: a missing archive is auto-initialised on load,
    while a missing entity or backup is reported as a clean failure.

    Examples:
        >>> raise NotFoundError("Entry of uid 'e1' does not exist")
        >>> raise NotFoundError("Backup file '/tmp/b.tar.gz' does not exist")
    """

    pass


class ValidationError(DiaryError):
    """
    Exception for config record validation failures.

    Raised when an entry or MOC config:
    - Is missing a required attribute
    - Has an attribute of the wrong type
    - References a section content file that does not exist
    - Cannot be parsed at all

    Aborts the single command; the archive is left untouched.

    Examples:
        >>> raise ValidationError("entry 'e1' must have 'title' attribute")
        >>> raise ValidationError("`is-moc` attribute must be boolean")
    """

    pass


class StorageError(DiaryError):
    """
    Exception for container store failures.

    Raised when reading or writing a container or field fails, or when
    a stored value does not have the expected shape:
    - Missing field or list element
    - Field holding a value of another type
    - Filesystem errors (permissions, disk full)

    Treated as unrecoverable for the running command.

    Examples:
        >>> raise StorageError("While reading field 'title' of 'entries/e1': missing")
        >>> raise StorageError("Field 'itver' holds u64, expected u16")
    """

    pass


class BackupError(StorageError):
    """
    Exception for backup creation and restoration I/O failures.

    Examples:
        >>> raise BackupError("Failed to create backup: disk full")
        >>> raise BackupError("Cannot decompile backup: not a gzip archive")
    """

    pass


class ConflictError(DiaryError):
    """
    Exception for identity and version conflicts.

    Raised when:
    - Committing a uid that already exists in its collection
    - Initialising over an existing archive
    - Loading a backup of a different archive (uid mismatch) without force
    - Loading a backup older than the current archive without force

    Examples:
        >>> raise ConflictError("Entry of uid 'e1' already exists")
        >>> raise ConflictError("Backup is of a different archive (uids don't match)")
    """

    pass


class ExportError(DiaryError):
    """
    Exception for Markdown export failures.

    Examples:
        >>> raise ExportError("Cannot write '/vault/e1.md': permission denied")
    """

    pass


class TemporalFileError(DiaryError):
    """
    Exception for temporary file management errors.

    Examples:
        >>> raise TemporalFileError("Cannot create temp dir: /tmp not writable")
    """

    pass
