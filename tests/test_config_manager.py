"""
Test cases for the configuration management system.
Tests config loading, merging, environment overrides and typed access.
"""

import os
import json
from unittest.mock import patch

from config_manager import (
    ConfigManager,
    AppConfig,
    RemoteConfig,
    FormConfig,
    QuotaSettings,
    PathsConfig,
)


class TestConfigManager:
    """Test the ConfigManager class functionality."""

    def test_defaults_without_config_file(self, tmp_path):
        """Test that defaults are used when the config file is missing."""
        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(tmp_path / "missing.json"))

        assert manager.get_remote_config().base_url == "https://teaching-dingo-central.ngrok-free.app"
        assert manager.get_remote_config().bypass_header == "ngrok-skip-browser-warning"
        assert manager.get_quota_config().initial_chances == 5
        assert manager.get_quota_config().storage_key == "remainingChances"
        assert manager.get_form_config().require_username is True
        assert manager.get_app_config().default_theme == "dark"
        assert manager.get_app_config().client_idle_seconds == 3600
        assert manager.get_app_config().max_clients == 1000

    def test_load_config_from_file(self, tmp_path):
        """Test that file values are merged over defaults section by section."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({
            "remote": {"base_url": "http://localhost:9000", "timeout": 3},
            "quota": {"initial_chances": 2}
        }), encoding="utf-8")

        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))

        remote = manager.get_remote_config()
        assert remote.base_url == "http://localhost:9000"
        assert remote.timeout == 3
        # Keys absent from the file keep their defaults
        assert remote.students_path == "/students"
        assert manager.get_quota_config().initial_chances == 2

    def test_invalid_config_file_keeps_defaults(self, tmp_path):
        """Test that an unreadable file does not break loading."""
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json", encoding="utf-8")

        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))

        assert manager.get_app_config().port == 22582

    def test_override_with_env_variables(self, tmp_path):
        """Test that environment variables override config values."""
        env_vars = {
            "APP_HOST": "localhost",
            "APP_PORT": "8080",
            "APP_DEBUG": "true",
            "STUDENTS_API_URL": "http://remote.test",
            "REQUEST_TIMEOUT": "2.5",
            "REQUIRE_USERNAME": "false",
            "INITIAL_CHANCES": "7",
            "DATA_DIR": "/tmp/funny",
            "MAX_CLIENTS": "50"
        }

        with patch.dict(os.environ, env_vars, clear=True):
            manager = ConfigManager(str(tmp_path / "missing.json"))

        app_config = manager.get_app_config()
        assert isinstance(app_config, AppConfig)
        assert app_config.host == "localhost"
        assert app_config.port == 8080
        assert app_config.debug is True
        assert app_config.max_clients == 50

        remote = manager.get_remote_config()
        assert isinstance(remote, RemoteConfig)
        assert remote.base_url == "http://remote.test"
        assert remote.timeout == 2.5

        form = manager.get_form_config()
        assert isinstance(form, FormConfig)
        assert form.require_username is False

        quota = manager.get_quota_config()
        assert isinstance(quota, QuotaSettings)
        assert quota.initial_chances == 7

        paths = manager.get_paths_config()
        assert isinstance(paths, PathsConfig)
        assert paths.data_dir == "/tmp/funny"

    def test_save_and_reload(self, tmp_path):
        """Test that saved configuration is picked up on reload."""
        config_file = tmp_path / "config.json"

        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))
            manager._config["quota"]["initial_chances"] = 9
            manager.save_config()

            manager._config["quota"]["initial_chances"] = 1
            manager.reload()

        assert manager.get_quota_config().initial_chances == 9
        saved = json.loads(config_file.read_text(encoding="utf-8"))
        assert saved["quota"]["initial_chances"] == 9

    def test_get_config_returns_copy(self, tmp_path):
        """Test that the raw config dictionary is a copy."""
        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(tmp_path / "missing.json"))

        raw = manager.get_config()
        raw["new_section"] = {}
        assert "new_section" not in manager.get_config()
