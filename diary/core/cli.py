#!/usr/bin/env python3
"""
cli.py
------
Shared CLI helpers and statistics for diary commands.

Functions:
    setup_logger: Initialize a DiaryLogger for a CLI invocation

Classes:
    OperationStats: Base class for operation statistics
    ExportStats: For Markdown export

Usage:
    from diary.core.cli import setup_logger, ExportStats

    logger = setup_logger(log_dir, "diary", verbose=True)
    stats = ExportStats()
    stats.entries_exported += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

# --- Local imports ---
from diary.core.logging_manager import DiaryLogger


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(log_dir: Path, component_name: str, verbose: bool = False) -> DiaryLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and
    initializes a DiaryLogger for the component.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging
        verbose: Show debug output on the console

    Returns:
        Configured DiaryLogger instance
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return DiaryLogger(operations_log_dir, component_name=component_name, verbose=verbose)


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS CLASSES
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OperationStats:
    """
    Base class for CLI operation statistics.

    Attributes:
        files_processed: Number of files successfully processed
        errors: Number of errors encountered
        start_time: Operation start timestamp
    """
    files_processed: int = 0
    errors: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.files_processed < 0:
            raise ValueError(f"files_processed must be non-negative, got {self.files_processed}")
        if self.errors < 0:
            raise ValueError(f"errors must be non-negative, got {self.errors}")

    def duration(self) -> float:
        """Elapsed seconds since start_time (cached after first call)."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        return (
            f"{self.files_processed} files processed, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_processed": self.files_processed,
            "errors": self.errors,
            "duration": self.duration(),
        }


@dataclass
class ExportStats(OperationStats):
    """
    Statistics for Markdown export.

    Attributes:
        entries_exported: Number of entries rendered
        mocs_exported: Number of MOCs rendered
        files_created: Number of new files written
        files_updated: Number of existing files rewritten
        files_unchanged: Number of files already up to date
    """
    entries_exported: int = 0
    mocs_exported: int = 0
    files_created: int = 0
    files_updated: int = 0
    files_unchanged: int = 0

    def record(self, status: str) -> None:
        """Count one written file by its write status."""
        self.files_processed += 1
        if status == "created":
            self.files_created += 1
        elif status == "updated":
            self.files_updated += 1
        else:
            self.files_unchanged += 1

    def summary(self) -> str:
        return (
            f"{self.entries_exported} entries exported, "
            f"{self.mocs_exported} mocs exported, "
            f"{self.files_created} files created, "
            f"{self.files_updated} files updated, "
            f"{self.files_unchanged} unchanged, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update({
            "entries_exported": self.entries_exported,
            "mocs_exported": self.mocs_exported,
            "files_created": self.files_created,
            "files_updated": self.files_updated,
            "files_unchanged": self.files_unchanged,
        })
        return d
