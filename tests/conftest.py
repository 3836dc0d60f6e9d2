"""
conftest.py
-----------
Shared pytest fixtures for diary tests.

Provides fixtures for:
- A temporary diary home (archive, backup file, logs)
- A freshly initialised archive
- Entry/MOC config factories and a config file writer
"""
import hashlib
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import yaml

from diary.archive import Archive


# ----- Path Fixtures -----

@pytest.fixture
def home(tmp_path):
    """Temporary diary home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def archive_path(home):
    return home / "archive"


@pytest.fixture
def backup_file(home):
    return home / "backup.tar.gz"


@pytest.fixture
def config_dir(tmp_path):
    """Directory config files are written to."""
    path = tmp_path / "configs"
    path.mkdir()
    return path


# ----- Archive Fixtures -----

@pytest.fixture
def archive(archive_path):
    """A freshly initialised, empty archive."""
    return Archive.init(archive_path)


# ----- Config Factories -----

@pytest.fixture
def entry_data():
    """Factory for valid entry config mappings."""

    def _make(
        uid: str = "e1",
        tags: Optional[List[str]] = None,
        date: Optional[List[int]] = None,
        sections: Optional[List[Dict[str, Any]]] = None,
        **overrides: Any,
    ) -> Dict[str, Any]:
        data = {
            "uid": uid,
            "title": f"Title of {uid}",
            "description": f"Description of {uid}",
            "date": date or [2024, 1, 15],
            "notes": ["a note"],
            "tags": tags if tags is not None else ["x"],
            "sections": sections if sections is not None else [
                {"title": "Morning", "content": "Woke up early.\nWent out.\n", "notes": ["cold"]},
            ],
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def moc_data():
    """Factory for valid MOC config mappings."""

    def _make(
        uid: str = "m1",
        tags: Optional[List[str]] = None,
        collections: Optional[List[Dict[str, Any]]] = None,
        **overrides: Any,
    ) -> Dict[str, Any]:
        data = {
            "is-moc": True,
            "uid": uid,
            "title": f"Title of {uid}",
            "description": f"Description of {uid}",
            "notes": [],
            "tags": tags if tags is not None else ["index"],
            "collections": collections if collections is not None else [
                {"title": "Everything x", "notes": [], "include": ["x"]},
            ],
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def write_config(config_dir):
    """Write a config mapping as YAML and return its path."""

    def _write(data: Dict[str, Any], name: Optional[str] = None) -> Path:
        # Hash the uid so deliberately unusable uids (too long, NUL bytes)
        # still yield a writable config file name.
        default = hashlib.sha256(str(data["uid"]).encode("utf-8", "surrogatepass")).hexdigest()
        path = config_dir / (name or f"{default}.yaml")
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def commit(archive, entry_data, write_config):
    """Commit an entry config built from ``entry_data`` keyword arguments."""

    def _commit(**kwargs: Any):
        return archive.commit(write_config(entry_data(**kwargs)))

    return _commit
