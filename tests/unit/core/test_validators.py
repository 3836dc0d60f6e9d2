"""
Tests for DataValidator config attribute extraction.
"""
from datetime import date

import pytest

from diary.core.exceptions import ValidationError
from diary.core.validators import DataValidator


class TestRequireStr:
    def test_present(self):
        assert DataValidator.require_str({"uid": "e1"}, "uid", "entry") == "e1"

    def test_missing_names_key_and_context(self):
        with pytest.raises(ValidationError, match="entry 'e1' must have 'title'"):
            DataValidator.require_str({}, "title", "entry 'e1'")

    def test_wrong_type(self):
        with pytest.raises(ValidationError, match="must be a string"):
            DataValidator.require_str({"title": 3}, "title", "entry")


class TestRequireUid:
    def test_present(self):
        assert DataValidator.require_uid({"uid": "2024-01-15"}, "uid", "entry") == "2024-01-15"

    def test_limit_is_in_utf8_bytes(self):
        assert DataValidator.require_uid({"uid": "é" * 127}, "uid", "moc") == "é" * 127
        with pytest.raises(ValidationError, match="Moc uid"):
            DataValidator.require_uid({"uid": "é" * 128}, "uid", "moc")

    @pytest.mark.parametrize(
        "uid", ["", ".", "..", "a/b", "back\\slash", "nul\x00byte", "a" * 256]
    )
    def test_rejects(self, uid):
        with pytest.raises(ValidationError, match="not a valid identifier"):
            DataValidator.require_uid({"uid": uid}, "uid", "entry")

    def test_wrong_type(self):
        with pytest.raises(ValidationError, match="must be a string"):
            DataValidator.require_uid({"uid": 7}, "uid", "entry")


class TestRequireLists:
    def test_str_list(self):
        assert DataValidator.require_str_list({"tags": ["a"]}, "tags", "entry") == ["a"]

    @pytest.mark.parametrize("value", ["a", [1], ["a", None]])
    def test_str_list_rejects(self, value):
        with pytest.raises(ValidationError):
            DataValidator.require_str_list({"tags": value}, "tags", "entry")

    def test_table_list(self):
        tables = [{"title": "S"}]
        assert DataValidator.require_table_list({"sections": tables}, "sections", "e") == tables

    def test_table_list_rejects_scalars(self):
        with pytest.raises(ValidationError, match="tables"):
            DataValidator.require_table_list({"sections": ["S"]}, "sections", "e")


class TestRequireDate:
    def test_list_form(self):
        assert DataValidator.require_date({"date": [2024, 1, 15]}, "date", "e") == [2024, 1, 15]

    def test_native_yaml_date(self):
        assert DataValidator.require_date({"date": date(2024, 1, 15)}, "date", "e") == [2024, 1, 15]

    @pytest.mark.parametrize(
        "value",
        [[2024, 1], [2024, 13, 1], [2024, 2, 30], [True, 1, 1], ["2024", 1, 1], [70000, 1, 1], "2024-01-15"],
    )
    def test_rejects(self, value):
        with pytest.raises(ValidationError):
            DataValidator.require_date({"date": value}, "date", "e")


class TestOptionalBool:
    def test_default(self):
        assert DataValidator.optional_bool({}, "is-moc", "config") is False
        assert DataValidator.optional_bool({}, "is-moc", "config", default=True) is True

    def test_present(self):
        assert DataValidator.optional_bool({"is-moc": True}, "is-moc", "config") is True

    def test_wrong_type(self):
        with pytest.raises(ValidationError, match="boolean"):
            DataValidator.optional_bool({"is-moc": 1}, "is-moc", "config")
