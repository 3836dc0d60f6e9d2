"""
Tests for pulling stored entities back out as config files.
"""
import pytest
import yaml

from diary.archive import Archive, pull
from diary.core.exceptions import NotFoundError


@pytest.fixture
def out_dir(tmp_path):
    return tmp_path / "pulled"


class TestPullEntry:
    """Tests for pulling entries."""

    def test_one_file_inlines_sections(self, archive, commit, entry_data, out_dir):
        commit(uid="e1")
        path = pull(archive, "e1", out_dir=out_dir, one_file=True)

        assert path == out_dir / "config.yaml"
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert data == entry_data(uid="e1")
        assert list(out_dir.iterdir()) == [path]

    def test_sections_written_to_files(self, archive, commit, out_dir):
        commit(uid="e1")
        path = pull(archive, "e1", out_dir=out_dir, file_name="e1.yaml")

        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        section = data["sections"][0]
        assert section["path"] == "e1-section-0.md"
        assert "content" not in section
        assert (out_dir / "e1-section-0.md").read_text(encoding="utf-8") == (
            "Woke up early.\nWent out.\n"
        )

    def test_pulled_config_commits_again(self, archive, commit, out_dir, tmp_path):
        commit(uid="e1", tags=["x", "y"])
        original = archive.get_entry("e1").to_record()
        path = pull(archive, "e1", out_dir=out_dir)

        other = Archive.init(tmp_path / "other")
        other.commit(path)
        assert other.get_entry("e1").to_record() == original

    def test_entity_cache_cleared(self, archive, commit, out_dir):
        commit(uid="e1")
        pull(archive, "e1", out_dir=out_dir)
        assert archive.get_entry("e1").cached_fields() == []

    def test_missing_entry_raises(self, archive, out_dir):
        with pytest.raises(NotFoundError):
            pull(archive, "ghost", out_dir=out_dir)


class TestPullMoc:
    """Tests for pulling MOCs."""

    def test_moc_config_round_trips(self, archive, moc_data, write_config, out_dir):
        archive.commit(write_config(moc_data(uid="m1")))
        path = pull(archive, "m1", is_moc=True, out_dir=out_dir)
        assert yaml.safe_load(path.read_text(encoding="utf-8")) == moc_data(uid="m1")

    def test_entry_uid_is_not_a_moc(self, archive, commit, out_dir):
        commit(uid="e1")
        with pytest.raises(NotFoundError):
            pull(archive, "e1", is_moc=True, out_dir=out_dir)
