"""
Tests for CLI helpers and operation statistics.
"""
import pytest

from diary.core.cli import ExportStats, OperationStats, setup_logger
from diary.core.logging_manager import DiaryLogger


class TestSetupLogger:
    def test_creates_operations_dir(self, tmp_path):
        logger = setup_logger(tmp_path / "logs", "diary", verbose=True)
        assert isinstance(logger, DiaryLogger)
        assert (tmp_path / "logs" / "operations").is_dir()
        assert logger.verbose is True


class TestOperationStats:
    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError):
            OperationStats(files_processed=-1)

    def test_to_dict(self):
        d = OperationStats(files_processed=2).to_dict()
        assert d["files_processed"] == 2
        assert d["errors"] == 0
        assert "duration" in d


class TestExportStats:
    def test_record_counts_by_status(self):
        stats = ExportStats()
        for status in ["created", "created", "updated", "unchanged"]:
            stats.record(status)
        assert stats.files_processed == 4
        assert (stats.files_created, stats.files_updated, stats.files_unchanged) == (2, 1, 1)

    def test_summary(self):
        stats = ExportStats(entries_exported=3, mocs_exported=1)
        summary = stats.summary()
        assert "3 entries exported" in summary
        assert "1 mocs exported" in summary
