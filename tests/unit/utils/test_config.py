"""
Tests for config file parsing and dumping.
"""
import pytest

from diary.core.exceptions import NotFoundError, ValidationError
from diary.utils.config import dump_config, load_config


class TestLoadConfig:
    def test_yaml(self, tmp_path):
        path = tmp_path / "entry.yaml"
        path.write_text("uid: e1\ntags: [a, b]\nis-moc: false\n", encoding="utf-8")
        assert load_config(path) == {"uid": "e1", "tags": ["a", "b"], "is-moc": False}

    def test_toml(self, tmp_path):
        path = tmp_path / "entry.toml"
        path.write_text('uid = "e1"\ntags = ["a"]\n', encoding="utf-8")
        assert load_config(path) == {"uid": "e1", "tags": ["a"]}

    def test_missing(self, tmp_path):
        with pytest.raises(NotFoundError):
            load_config(tmp_path / "nope.yaml")

    @pytest.mark.parametrize(
        "name,text",
        [
            ("bad.yaml", "uid: [unclosed\n"),
            ("bad.toml", "uid = \n"),
            ("list.yaml", "- a\n- b\n"),
            ("empty.yaml", ""),
        ],
    )
    def test_invalid(self, tmp_path, name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)


class TestDumpConfig:
    def test_dump_then_load_keeps_key_order(self, tmp_path):
        data = {"uid": "e1", "title": "Ünïcode", "date": [2024, 1, 15], "notes": []}
        path = dump_config(data, tmp_path / "nested" / "config.yaml")
        assert load_config(path) == data
        assert path.read_text(encoding="utf-8").startswith("uid: e1\ntitle: Ünïcode\n")
