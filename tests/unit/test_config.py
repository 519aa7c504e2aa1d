"""
Unit tests for configuration loading.
"""

import logging
from pathlib import Path

import pytest
import yaml

from config import Settings, StorageSettings, load_config, get_default_config_path
from docstore.core.exceptions import ValidationError
from docstore.storage import JSONFileStorage, MemoryStorage, MsgPackFileStorage


class TestSettings:
    """Test Settings dataclass."""

    def test_defaults(self):
        """Test default values."""
        settings = Settings()

        assert settings.storage.format == "json"
        assert settings.storage.json_indent == 2
        assert settings.max_workers is None
        assert settings.log_level == "INFO"

    def test_from_dict(self):
        """Test building from nested dictionary."""
        data = {
            "storage": {"data_dir": "/tmp/x", "format": "msgpack"},
            "max_workers": 2,
        }

        settings = Settings.from_dict(data)

        assert settings.storage == StorageSettings(data_dir="/tmp/x", format="msgpack")
        assert settings.max_workers == 2
        # Input is not consumed
        assert "storage" in data

    def test_to_dict(self):
        """Test round trip through dictionary."""
        settings = Settings(max_workers=3)

        assert Settings.from_dict(settings.to_dict()) == settings

    def test_create_storage_json(self, temp_dir):
        """Test file storage for a named store."""
        settings = Settings(storage=StorageSettings(data_dir=temp_dir, json_indent=None))

        storage = settings.create_storage("users")

        assert isinstance(storage, JSONFileStorage)
        assert storage.path == Path(temp_dir) / "users.json"

    def test_create_storage_msgpack(self, temp_dir):
        """Test MessagePack storage for a named store."""
        settings = Settings(storage=StorageSettings(data_dir=temp_dir, format="msgpack"))

        storage = settings.create_storage("users")

        assert isinstance(storage, MsgPackFileStorage)
        assert storage.path.name == "users.msgpack"

    def test_create_storage_memory(self):
        """Test memory storage ignores data_dir."""
        settings = Settings(storage=StorageSettings(format="memory"))

        assert isinstance(settings.create_storage("users"), MemoryStorage)

    def test_create_storage_bad_name(self, temp_dir):
        """Test that names can't escape the data directory."""
        settings = Settings(storage=StorageSettings(data_dir=temp_dir))

        with pytest.raises(ValidationError):
            settings.create_storage("../users")

    def test_create_storage_bad_format(self):
        """Test unknown format."""
        settings = Settings(storage=StorageSettings(format="xml"))

        with pytest.raises(ValueError):
            settings.create_storage("users")

    def test_configure_logging(self):
        """Test applying the log level."""
        Settings(log_level="DEBUG").configure_logging()
        assert logging.getLogger("docstore").level == logging.DEBUG

        Settings(log_level="WARNING").configure_logging()
        assert logging.getLogger("docstore").level == logging.WARNING


class TestLoadConfig:
    """Test YAML loading."""

    def test_load_file(self, temp_dir):
        """Test loading a YAML file."""
        path = Path(temp_dir) / "config.yaml"
        path.write_text(yaml.safe_dump({
            "storage": {"data_dir": temp_dir, "format": "msgpack", "sync_writes": True},
            "log_level": "DEBUG",
        }))

        settings = load_config(str(path))

        assert settings.storage.format == "msgpack"
        assert settings.storage.sync_writes is True
        assert settings.log_level == "DEBUG"

    def test_missing_file(self, temp_dir):
        """Test defaults when the file doesn't exist."""
        assert load_config(str(Path(temp_dir) / "nope.yaml")) == Settings()

    def test_empty_file(self, temp_dir):
        """Test defaults for an empty file."""
        path = Path(temp_dir) / "config.yaml"
        path.write_text("")

        assert load_config(str(path)) == Settings()

    def test_env_var(self, temp_dir, monkeypatch):
        """Test DOCSTORE_CONFIG override."""
        path = Path(temp_dir) / "env.yaml"
        path.write_text("max_workers: 7\n")
        monkeypatch.setenv("DOCSTORE_CONFIG", str(path))

        assert get_default_config_path() == path
        assert load_config().max_workers == 7

    def test_shipped_default(self, monkeypatch):
        """Test that the packaged default config loads."""
        monkeypatch.delenv("DOCSTORE_CONFIG", raising=False)

        settings = load_config()

        assert settings.storage.format == "json"
        assert settings.log_level == "INFO"
