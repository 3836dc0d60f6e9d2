#!/usr/bin/env python3
"""
temporal_files.py
--------------------
Temporary directory management for backup comparison.

Loading a backup over an existing archive first decompiles the backup
into a scratch directory to compare identities. The scratch copy must
be removed whatever the outcome of the comparison, so directories are
tracked and removed when the managing context exits.

Usage:
    from diary.core.temporal_files import TemporalFileManager

    with TemporalFileManager(base_dir=home) as temp_manager:
        scratch = temp_manager.create_temp_dir(prefix="backup_")
        # ... decompile into scratch and inspect ...
    # scratch removed on exit, even if an exception was raised
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

# --- Local imports ---
from .exceptions import TemporalFileError


class TemporalFileManager:
    """
    Manages temporary directories with automatic cleanup.

    Attributes:
        base_dir: Directory in which temporary directories are created
        active_dirs: Directories created and not yet removed
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        """
        Initialize temporal file manager.

        Args:
            base_dir: Base directory for temporary directories. Uses the
                system temp directory if None.
        """
        self.base_dir = Path(base_dir) if base_dir else Path(tempfile.gettempdir())
        self.active_dirs: List[Path] = []

    def create_temp_dir(self, prefix: str = "diary_") -> Path:
        """
        Create a temporary directory and track it for cleanup.

        Args:
            prefix: Directory prefix

        Returns:
            Path to the temporary directory

        Raises:
            TemporalFileError: If directory creation fails
        """
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            temp_dir = Path(tempfile.mkdtemp(prefix=prefix, dir=self.base_dir))
        except OSError as e:
            raise TemporalFileError(f"Failed to create temporary directory: {e}") from e
        self.active_dirs.append(temp_dir)
        return temp_dir

    def cleanup(self) -> Dict[str, int]:
        """
        Remove all tracked temporary directories.

        Failures are counted, not raised: cleanup runs on error paths too.

        Returns:
            Dictionary with cleanup statistics
        """
        cleanup_stats = {"dirs_removed": 0, "errors": 0}

        for temp_dir in self.active_dirs[:]:
            try:
                if temp_dir.exists():
                    shutil.rmtree(temp_dir)
                    cleanup_stats["dirs_removed"] += 1
                self.active_dirs.remove(temp_dir)
            except OSError:
                cleanup_stats["errors"] += 1

        return cleanup_stats

    def __enter__(self) -> "TemporalFileManager":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Optional[Any],
    ) -> None:
        del exc_type, exc_val, exc_tb
        self.cleanup()
