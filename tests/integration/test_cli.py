#!/usr/bin/env python3
"""
Integration tests for the diary CLI.

Drives every command through click's CliRunner against a temporary
home directory.
"""
import pytest
import yaml
from click.testing import CliRunner

from diary.archive import WIPE_PHRASE, Archive
from diary.cli import cli


class TestDiaryCLI:
    """Test diary CLI commands with a temporary home."""

    @pytest.fixture
    def runner(self):
        """Create Click test runner."""
        return CliRunner()

    @pytest.fixture
    def invoke(self, runner, home, tmp_path):
        """Invoke the CLI with test paths."""

        def _invoke(args, **kwargs):
            base_args = ["--home", str(home), "--log-dir", str(tmp_path / "logs")]
            return runner.invoke(cli, base_args + args, **kwargs)

        return _invoke

    @pytest.fixture
    def entry_file(self, entry_data, write_config):
        return write_config(entry_data(uid="e1", tags=["x"]))

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ["init", "commit", "rollback", "export", "since"]:
            assert command in result.output

    def test_init(self, invoke, archive_path):
        result = invoke(["init"])
        assert result.exit_code == 0
        assert "Initialised archive" in result.output
        assert Archive.load_dir(archive_path).itver == 0

    def test_init_twice_fails(self, invoke):
        invoke(["init"])
        result = invoke(["init"])
        assert result.exit_code == 1
        assert "ConflictError" in result.output

    def test_commit_scenario(self, invoke, entry_file, archive_path, backup_file):
        assert invoke(["init"]).exit_code == 0
        result = invoke(["commit", str(entry_file)])
        assert result.exit_code == 0, result.output
        assert "Committed entry 'e1' (itver 1)" in result.output

        archive = Archive.load_dir(archive_path)
        assert archive.itver == 1
        assert archive.unsorted_uids() == ["e1"]
        assert backup_file.is_file()

        listed = invoke(["list", "-f", "x"])
        assert "• e1" in listed.output

    def test_commit_invalid_config(self, invoke, entry_data, write_config, archive_path):
        invoke(["init"])
        data = entry_data(uid="bad")
        del data["description"]
        result = invoke(["commit", str(write_config(data))])
        assert result.exit_code == 1
        assert "ValidationError" in result.output
        assert Archive.load_dir(archive_path).itver == 0

    @pytest.mark.parametrize("uid", ["a" * 300, "nul\x00byte", "back\\slash"])
    def test_unusable_uid_fails_cleanly(self, invoke, entry_data, write_config, archive_path, uid):
        invoke(["init"])
        committed = invoke(["commit", str(write_config(entry_data(uid=uid)))])
        assert committed.exit_code == 1
        assert "ValidationError" in committed.output
        assert committed.exception is None or isinstance(committed.exception, SystemExit)
        assert Archive.load_dir(archive_path).itver == 0

    def test_unusable_uid_lookup_fails_cleanly(self, invoke):
        invoke(["init"])
        for command in (["about", "a" * 300], ["remove", "a" * 300], ["pull", "-m", "a" * 300]):
            result = invoke(command)
            assert result.exit_code == 1
            assert "NotFoundError" in result.output

    def test_list_filters(self, invoke, entry_data, moc_data, write_config):
        invoke(["commit", str(write_config(entry_data(uid="a", tags=["x", "y"])))])
        invoke(["commit", str(write_config(entry_data(uid="b", tags=["y"])))])
        invoke(["commit", str(write_config(moc_data(uid="m", tags=["x"])))])

        both = invoke(["list"])
        assert "Entries (2)" in both.output
        assert "MOCs (1)" in both.output

        strict = invoke(["list", "-f", "x", "-f", "y", "--strict", "-e"])
        assert "• a" in strict.output
        assert "• b" not in strict.output
        assert "MOCs" not in strict.output

        mocs = invoke(["list", "-m"])
        assert "Entries" not in mocs.output
        assert "• m" in mocs.output

    def test_about(self, invoke, entry_file):
        invoke(["commit", str(entry_file)])
        result = invoke(["about", "e1"])
        assert result.exit_code == 0
        assert "About entry of uid `e1`" in result.output
        assert "2024-01-15" in result.output
        assert "Title of e1" in result.output

    def test_about_missing(self, invoke):
        invoke(["init"])
        result = invoke(["about", "--moc", "ghost"])
        assert result.exit_code == 1
        assert "NotFoundError" in result.output

    def test_sort(self, invoke, entry_data, write_config, archive_path):
        invoke(["commit", str(write_config(entry_data(uid="b", date=[2024, 2, 1])))])
        invoke(["commit", str(write_config(entry_data(uid="a", date=[2024, 1, 1])))])
        result = invoke(["sort"])
        assert result.exit_code == 0
        archive = Archive.load_dir(archive_path)
        assert archive.sorted_uids() == ["a", "b"]
        assert archive.unsorted_uids() == []
        assert archive.itver == 3

    def test_remove(self, invoke, entry_file, archive_path):
        invoke(["commit", str(entry_file)])
        result = invoke(["remove", "e1"])
        assert result.exit_code == 0
        archive = Archive.load_dir(archive_path)
        assert archive.list_entries() == []
        assert archive.unsorted_uids() == []

    def test_pull(self, invoke, entry_file, tmp_path):
        invoke(["commit", str(entry_file)])
        out = tmp_path / "pulled"
        result = invoke(["pull", "e1", "--path", str(out), "--one-file"])
        assert result.exit_code == 0
        data = yaml.safe_load((out / "config.yaml").read_text(encoding="utf-8"))
        assert data["uid"] == "e1"
        assert "content" in data["sections"][0]

    def test_export(self, invoke, entry_file, tmp_path):
        invoke(["commit", str(entry_file)])
        vault = tmp_path / "vault"
        result = invoke(["export", str(vault), "-t", "x"])
        assert result.exit_code == 0
        assert "1 entries exported" in result.output
        assert (vault / "e1.md").is_file()

    def test_backup_and_rollback(self, invoke, entry_file, archive_path, backup_file):
        invoke(["commit", str(entry_file)])

        refused = invoke(["rollback"])
        assert refused.exit_code == 1
        assert "ConflictError" in refused.output

        forced = invoke(["rollback", "--force"])
        assert forced.exit_code == 0
        assert Archive.load_dir(archive_path).itver == 0

    def test_backup_to_path_and_load(self, invoke, entry_file, archive_path, tmp_path):
        invoke(["commit", str(entry_file)])
        out = tmp_path / "manual.tar.gz"
        assert invoke(["backup", str(out)]).exit_code == 0
        invoke(["remove", "e1"])

        refused = invoke(["load", str(out)])
        assert refused.exit_code == 1

        loaded = invoke(["load", "-f", str(out)])
        assert loaded.exit_code == 0
        assert Archive.load_dir(archive_path).itver == 1

    def test_rollback_without_backup(self, invoke):
        invoke(["init"])
        result = invoke(["rollback"])
        assert result.exit_code == 1
        assert "No recent backups" in result.output

    def test_wipe_requires_exact_phrase(self, invoke, archive_path):
        invoke(["init"])
        wrong = invoke(["wipe"], input="yes\n")
        assert wrong.exit_code == 1
        assert archive_path.is_dir()

        right = invoke(["wipe"], input=WIPE_PHRASE + "\n")
        assert right.exit_code == 0
        assert not archive_path.exists()

    def test_since(self, invoke):
        result = invoke(["since", "--date", "2024", "1", "1"])
        assert result.exit_code == 0
        assert result.output.startswith("365 days since 2023-01-01")

    def test_since_invalid_date(self, invoke):
        result = invoke(["since", "--date", "2023", "2", "30"])
        assert result.exit_code == 1
        assert "ValidationError" in result.output

    def test_verbose_writes_logs(self, invoke, tmp_path):
        invoke(["--verbose", "init"])
        assert (tmp_path / "logs" / "operations" / "diary.log").is_file()
