#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the diary archive.

All paths hang off a single home directory:

    HOME/
    ├── archive/          # The live archive container tree
    ├── backup.tar.gz     # Well-known backup used by commit and rollback
    └── logs/             # Rotating log files

The home directory is ``$DIARY_HOME`` when set, otherwise
``~/diary-cli``. CLI commands accept ``--home`` to point elsewhere; the
helpers below derive the other locations from any home directory.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path

HOME_ENV_VAR = "DIARY_HOME"


def _get_home_dir() -> Path:
    """
    Determine the diary home directory.

    Returns:
        ``$DIARY_HOME`` if set, else ``~/diary-cli``
    """
    env_home = os.environ.get(HOME_ENV_VAR)
    if env_home:
        return Path(env_home).expanduser()
    return Path.home() / "diary-cli"


def archive_dir(home: Path) -> Path:
    """Location of the archive container tree under ``home``."""
    return Path(home) / "archive"


def backup_path(home: Path) -> Path:
    """Location of the well-known rollback backup under ``home``."""
    return Path(home) / "backup.tar.gz"


def log_dir(home: Path) -> Path:
    """Location of the log directory under ``home``."""
    return Path(home) / "logs"


# ----- Default locations -----
HOME_DIR: Path = _get_home_dir()
ARCHIVE_DIR = archive_dir(HOME_DIR)
BACKUP_PATH = backup_path(HOME_DIR)
LOG_DIR = log_dir(HOME_DIR)

# ----- Package resources -----
PACKAGE_DIR = Path(__file__).resolve().parent.parent
EXPORT_TEMPLATES_DIR = PACKAGE_DIR / "export" / "templates"
