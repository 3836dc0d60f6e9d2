#!/usr/bin/env python3
"""
pull.py
-------
Write a stored entry or MOC back out as an editable config file.

The pulled config is equivalent to the one that was committed, so after
editing it can be removed from the archive and committed again. Entry
section contents are either inlined (``one_file``) or written to
``<uid>-section-<i>.md`` files next to the config and referenced by
``path``.

Usage:
    from diary.archive.pull import pull

    config_path = pull(archive, "2024-01-15-walk", out_dir=Path("."))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Dict

# --- Local imports ---
from diary.core.exceptions import StorageError
from diary.core.logging_manager import safe_logger
from diary.utils.config import dump_config

from .archive import Archive
from .entry import entry_to_config
from .moc import moc_to_config

DEFAULT_FILE_NAME = "config.yaml"


def section_file_name(uid: str, idx: int) -> str:
    return f"{uid}-section-{idx}.md"


def pull(
    archive: Archive,
    uid: str,
    is_moc: bool = False,
    out_dir: Path = Path("."),
    file_name: str = DEFAULT_FILE_NAME,
    one_file: bool = False,
) -> Path:
    """
    Pull an entry or MOC out of the archive as a YAML config.

    Args:
        archive: Loaded archive
        uid: Entity uid
        is_moc: Pull a MOC instead of an entry
        out_dir: Directory the config (and section files) go into
        file_name: Name of the config file
        one_file: Inline section contents instead of writing section files

    Returns:
        Path of the written config

    Raises:
        NotFoundError: If the entity does not exist
        StorageError: If an output file cannot be written
    """
    log = safe_logger(archive.logger)
    out_dir = Path(out_dir)
    config_path = out_dir / file_name

    if is_moc:
        moc = archive.get_moc(uid)
        log.log_info(f"Pulling moc '{uid}' into '{config_path}'...")
        data = moc_to_config(moc.to_record())
        moc.clear_cache()
    else:
        entry = archive.get_entry(uid)
        log.log_info(f"Pulling entry '{uid}' into '{config_path}'...")
        record = entry.to_record()
        entry.clear_cache()

        section_paths: Dict[int, str] = {}
        if not one_file:
            for idx, section in enumerate(record.sections):
                name = section_file_name(uid, idx)
                path = out_dir / name
                try:
                    path.parent.mkdir(parents=True, exist_ok=True)
                    path.write_text(section.content, encoding="utf-8")
                except OSError as e:
                    raise StorageError(f"While writing section file '{path}': {e}") from e
                log.log_debug(f"Wrote section {idx} to '{path}'")
                section_paths[idx] = name
        data = entry_to_config(record, section_paths)

    try:
        dump_config(data, config_path)
    except OSError as e:
        raise StorageError(f"While writing config file '{config_path}': {e}") from e

    log.log_operation(
        "pull",
        {"uid": uid, "kind": "moc" if is_moc else "entry", "path": str(config_path)},
    )
    return config_path
