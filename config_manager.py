"""
Configuration management for the Funny Names application.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class AppConfig:
    """Application configuration settings."""
    host: str
    port: int
    debug: bool
    default_theme: str
    client_idle_seconds: float
    max_clients: int


@dataclass
class RemoteConfig:
    """Remote list service settings."""
    base_url: str
    students_path: str
    timeout: float
    bypass_header: str
    bypass_value: str


@dataclass
class FormConfig:
    """Submission form settings."""
    require_username: bool
    max_name_length: int
    max_username_length: int


@dataclass
class QuotaSettings:
    """Submission quota settings."""
    initial_chances: int
    storage_key: str


@dataclass
class PathsConfig:
    """Path configuration settings."""
    data_dir: str


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "funny_names_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "app": {
                "host": "0.0.0.0",
                "port": 22582,
                "debug": False,
                "default_theme": "dark",
                "client_idle_seconds": 3600,
                "max_clients": 1000
            },
            "remote": {
                "base_url": "https://teaching-dingo-central.ngrok-free.app",
                "students_path": "/students",
                "timeout": 10,
                "bypass_header": "ngrok-skip-browser-warning",
                "bypass_value": "true"
            },
            "form": {
                "require_username": True,
                "max_name_length": 100,
                "max_username_length": 100
            },
            "quota": {
                "initial_chances": 5,
                "storage_key": "remainingChances"
            },
            "paths": {
                "data_dir": "data"
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

        if os.getenv("MAX_CLIENTS"):
            self._config["app"]["max_clients"] = int(os.getenv("MAX_CLIENTS"))

        # Remote service settings
        if os.getenv("STUDENTS_API_URL"):
            self._config["remote"]["base_url"] = os.getenv("STUDENTS_API_URL")

        if os.getenv("REQUEST_TIMEOUT"):
            self._config["remote"]["timeout"] = float(os.getenv("REQUEST_TIMEOUT"))

        # Form settings
        if os.getenv("REQUIRE_USERNAME"):
            self._config["form"]["require_username"] = os.getenv("REQUIRE_USERNAME").lower() == "true"

        # Quota settings
        if os.getenv("INITIAL_CHANCES"):
            self._config["quota"]["initial_chances"] = int(os.getenv("INITIAL_CHANCES"))

        if os.getenv("DATA_DIR"):
            self._config["paths"]["data_dir"] = os.getenv("DATA_DIR")

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"],
            default_theme=app_config["default_theme"],
            client_idle_seconds=app_config["client_idle_seconds"],
            max_clients=app_config["max_clients"]
        )

    def get_remote_config(self) -> RemoteConfig:
        """Get remote list service configuration."""
        remote_config = self._config["remote"]
        return RemoteConfig(
            base_url=remote_config["base_url"],
            students_path=remote_config["students_path"],
            timeout=remote_config["timeout"],
            bypass_header=remote_config["bypass_header"],
            bypass_value=remote_config["bypass_value"]
        )

    def get_form_config(self) -> FormConfig:
        """Get submission form configuration."""
        form_config = self._config["form"]
        return FormConfig(
            require_username=form_config["require_username"],
            max_name_length=form_config["max_name_length"],
            max_username_length=form_config["max_username_length"]
        )

    def get_quota_config(self) -> QuotaSettings:
        """Get quota configuration."""
        quota_config = self._config["quota"]
        return QuotaSettings(
            initial_chances=quota_config["initial_chances"],
            storage_key=quota_config["storage_key"]
        )

    def get_paths_config(self) -> PathsConfig:
        """Get paths configuration."""
        return PathsConfig(data_dir=self._config["paths"]["data_dir"])

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def get_remote_config() -> RemoteConfig:
    """Get remote list service configuration."""
    return config_manager.get_remote_config()


def get_form_config() -> FormConfig:
    """Get submission form configuration."""
    return config_manager.get_form_config()


def get_quota_config() -> QuotaSettings:
    """Get quota configuration."""
    return config_manager.get_quota_config()


def get_paths_config() -> PathsConfig:
    """Get paths configuration."""
    return config_manager.get_paths_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
