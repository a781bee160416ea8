# Tests for settings loading.
# Created: 2026-10-12

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from xfilemanager.config import DEPLOY_DIR, Settings, get_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("XFILE_ROOT_DIR", "XFILE_INDEX_FILES", "XFILE_DATE_FORMAT", "XFILE_DEFAULT_VIEW"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestDefaults:
    def test_defaults(self):
        settings = Settings()
        assert settings.hide_files == [".", "..", ".htaccess", ".git", ".gitignore"]
        assert settings.index_files == ["index.php", "index.html", "index.htm"]
        assert settings.ignored_extensions == []
        assert settings.date_format == "%b %d, %Y %I:%M %p"
        assert settings.default_view == "grid"
        assert settings.install_source_dir == DEPLOY_DIR
        assert settings.installer_allowed_hosts == ["127.0.0.1", "::1"]

    def test_root_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert Settings().root_dir.resolve() == tmp_path.resolve()

    def test_invalid_view_rejected(self):
        with pytest.raises(ValidationError):
            Settings(default_view="tiles")

    def test_extensions_normalized(self):
        assert Settings(ignored_extensions=[".LOG", "Tmp", "."]).ignored_extensions == [
            "log",
            "tmp",
        ]


class TestEnvironment:
    def test_env_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XFILE_ROOT_DIR", str(tmp_path))
        monkeypatch.setenv("XFILE_INDEX_FILES", '["default.html"]')
        settings = Settings()
        assert settings.root_dir == tmp_path
        assert settings.index_files == ["default.html"]


class TestLoad:
    def test_load_without_config_file(self, tmp_path):
        with patch("xfilemanager.config.get_config_path", return_value=tmp_path / "none.json"):
            settings = Settings.load()
        assert settings.default_view == "grid"

    def test_load_reads_config_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"root_dir": str(tmp_path), "default_view": "list"}))
        with patch("xfilemanager.config.get_config_path", return_value=config):
            settings = Settings.load()
        assert settings.root_dir == Path(tmp_path)
        assert settings.default_view == "list"

    def test_env_beats_config_file(self, tmp_path, monkeypatch):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"date_format": "%Y"}))
        monkeypatch.setenv("XFILE_DATE_FORMAT", "%d/%m/%Y")
        with patch("xfilemanager.config.get_config_path", return_value=config):
            assert Settings.load().date_format == "%d/%m/%Y"

    def test_broken_config_file_ignored(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text("{not json")
        with patch("xfilemanager.config.get_config_path", return_value=config):
            assert Settings.load().default_view == "grid"
    @pytest.mark.parametrize("content", ["[]", "[1, 2]", '"grid"', "3", "null"])
    def test_non_object_config_file_ignored(self, tmp_path, content):
        config = tmp_path / "config.json"
        config.write_text(content)
        with patch("xfilemanager.config.get_config_path", return_value=config):
            assert Settings.load().default_view == "grid"

    def test_get_settings_cached(self, tmp_path):
        with patch("xfilemanager.config.get_config_path", return_value=tmp_path / "none.json"):
            assert get_settings() is get_settings()
