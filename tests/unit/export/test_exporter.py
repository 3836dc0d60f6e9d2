"""
Tests for Markdown export of entries and MOCs.
"""
from unittest.mock import MagicMock

import pytest

from diary.core.logging_manager import DiaryLogger
from diary.export import export_markdown, write_if_changed
from diary.export.exporter import MarkdownExporter
from diary.export.renderer import MarkdownRenderer

EXPECTED_ENTRY = """---
tags:
  - obsidian-md
  - diary-cli
  - x
date: 15-1-2024
---
# Title of e1
---
**Description:** Description of e1

## Notes
- a note
- #### Morning
    - cold
---
### Morning
> Woke up early.
> Went out.
"""


@pytest.fixture
def vault(tmp_path):
    return tmp_path / "vault"


@pytest.fixture
def populated(archive, commit, moc_data, write_config):
    commit(uid="e1", tags=["x"], date=[2024, 1, 15])
    commit(uid="e2", tags=["x", "y"], date=[2023, 6, 1])
    commit(uid="e3", tags=["y"], date=[2023, 1, 1])
    archive.commit(write_config(moc_data(uid="m1", tags=["index"])))
    archive.commit(
        write_config(
            moc_data(
                uid="m2",
                tags=["index", "x"],
                notes=["top note"],
                collections=[
                    {"title": "Index", "notes": ["see also"], "include": ["index"]},
                    {"title": "Nothing", "notes": [], "include": ["absent"]},
                ],
            )
        )
    )
    return archive


class TestWriteIfChanged:
    def test_statuses(self, tmp_path):
        path = tmp_path / "a" / "f.md"
        assert write_if_changed(path, "one") == "created"
        assert write_if_changed(path, "one") == "unchanged"
        assert write_if_changed(path, "two") == "updated"
        assert path.read_text(encoding="utf-8") == "two"


class TestEntryExport:
    def test_entry_markdown(self, archive, commit, vault):
        commit(uid="e1", tags=["x"], date=[2024, 1, 15])
        export_markdown(archive, vault)
        assert (vault / "e1.md").read_text(encoding="utf-8") == EXPECTED_ENTRY

    def test_entry_without_notes_has_no_notes_header(self, archive, commit, vault):
        commit(
            uid="bare",
            notes=[],
            sections=[{"title": "S", "content": "", "notes": []}],
        )
        export_markdown(archive, vault)
        text = (vault / "bare.md").read_text(encoding="utf-8")
        assert "## Notes" not in text
        assert text.endswith("### S\n> \n")

    def test_caches_cleared(self, archive, commit, vault):
        commit(uid="e1")
        exporter = MarkdownExporter(archive, vault)
        entry = archive.get_entry("e1")
        exporter.entry_context(entry)
        assert entry.cached_fields() == []


class TestMocExport:
    def test_collection_lists_entries_by_date(self, populated, vault):
        export_markdown(populated, vault)
        text = (vault / "m1.md").read_text(encoding="utf-8")
        assert "## Everything x\n" in text
        assert (
            "1. \\[[Title of e2](e2)\\] Description of e2 `notes: [\"a note\"]`\n"
            "2. \\[[Title of e1](e1)\\] Description of e1 `notes: [\"a note\"]`\n"
        ) in text
        assert "e3" not in text

    def test_collection_lists_mocs(self, populated, vault):
        export_markdown(populated, vault)
        text = (vault / "m2.md").read_text(encoding="utf-8")
        assert "## Notes\n- top note\n" in text
        assert "- #### Index\n    - see also\n" in text
        assert "1. \\[[Title of m1](m1)\\]" in text
        assert "2. \\[[Title of m2](m2)\\]" in text

    def test_empty_collection_omitted(self, populated, vault):
        export_markdown(populated, vault)
        assert "## Nothing" not in (vault / "m2.md").read_text(encoding="utf-8")

    def test_moc_front_matter_has_no_date(self, populated, vault):
        export_markdown(populated, vault)
        text = (vault / "m1.md").read_text(encoding="utf-8")
        assert text.startswith("---\ntags:\n  - obsidian-md\n  - diary-cli\n  - index\n---\n")


class TestSelection:
    def test_exports_everything_by_default(self, populated, vault):
        stats = export_markdown(populated, vault)
        assert (stats.entries_exported, stats.mocs_exported) == (3, 2)
        assert sorted(p.name for p in vault.iterdir()) == [
            "e1.md", "e2.md", "e3.md", "m1.md", "m2.md",
        ]

    def test_loose_filter(self, populated, vault):
        stats = export_markdown(populated, vault, tags=["x"])
        assert (stats.entries_exported, stats.mocs_exported) == (2, 1)

    def test_strict_filter(self, populated, vault):
        stats = export_markdown(populated, vault, tags=["x", "y"], strict=True)
        assert (stats.entries_exported, stats.mocs_exported) == (1, 0)
        assert [p.name for p in vault.iterdir()] == ["e2.md"]

    def test_failed_items_counted_and_skipped(self, populated, vault):
        renderer = MarkdownRenderer(templates={"entry.md.jinja2": "{{ title }}\n"})
        logger = MagicMock(spec=DiaryLogger)
        stats = MarkdownExporter(populated, vault, renderer=renderer, logger=logger).export_all()
        assert (stats.entries_exported, stats.mocs_exported) == (3, 0)
        assert stats.errors == 2
        assert "2 errors" in stats.summary()
        assert logger.log_error.call_count == 2
        assert not (vault / "m1.md").exists()
        assert (vault / "e1.md").read_text(encoding="utf-8") == "Title of e1\n"

    def test_second_export_is_unchanged(self, populated, vault):
        export_markdown(populated, vault)
        stats = export_markdown(populated, vault)
        assert stats.files_created == 0
        assert stats.files_unchanged == 5
