"""
Configuration management for docstore.

Provides dataclasses for configuration and utilities
for loading settings from YAML files.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional
import yaml

from docstore.storage import BaseStorage, STORAGE_EXTENSIONS, create_storage
from docstore.utils.logging import setup_logger
from docstore.utils.validation import validate_name


@dataclass
class StorageSettings:
    """Storage backend configuration."""
    data_dir: str = "./docstore_data"
    format: Literal["memory", "json", "msgpack"] = "json"
    json_indent: Optional[int] = 2
    sync_writes: bool = False


@dataclass
class Settings:
    """
    Main settings container for docstore.

    Attributes:
        storage: Storage backend settings
        max_workers: Thread pool size for Database fan-out (None = per store)
        log_level: Logging level
        log_file: Optional log file path
    """
    storage: StorageSettings = field(default_factory=StorageSettings)
    max_workers: Optional[int] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Create Settings from dictionary."""
        data = dict(data)
        storage_data = data.pop("storage", None) or {}

        return cls(
            storage=StorageSettings(**storage_data),
            **data
        )

    def to_dict(self) -> dict:
        """Convert Settings to dictionary."""
        from dataclasses import asdict
        return asdict(self)

    def storage_path(self, name: str) -> Path:
        """File path of a named store under the data directory."""
        extension = STORAGE_EXTENSIONS[self.storage.format]
        return Path(self.storage.data_dir) / f"{validate_name(name)}{extension}"

    def create_storage(self, name: str) -> BaseStorage:
        """
        Create the configured storage backend for a named store.

        Example:
            >>> settings = load_config()
            >>> users = Collection(settings.create_storage("users"), "id")
        """
        fmt = self.storage.format
        if fmt == "memory":
            return create_storage("memory")

        if fmt not in STORAGE_EXTENSIONS:
            raise ValueError(f"Unknown storage format: {fmt}")

        kwargs = {"sync_on_write": self.storage.sync_writes}
        if fmt == "json":
            kwargs["indent"] = self.storage.json_indent

        return create_storage(fmt, path=self.storage_path(name), **kwargs)

    def configure_logging(self) -> None:
        """Apply log settings to the docstore logger."""
        setup_logger("docstore", level=self.log_level, log_file=self.log_file)


def get_default_config_path() -> Path:
    """Get path to default configuration file."""
    # Environment variable wins
    env_config = os.environ.get("DOCSTORE_CONFIG")
    if env_config:
        return Path(env_config)

    # Check for config in current directory
    local_config = Path("./config/default_config.yaml")
    if local_config.exists():
        return local_config

    # Fall back to config shipped next to this file
    return Path(__file__).parent / "default_config.yaml"


def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default.

    Returns:
        Settings object with loaded configuration

    Example:
        >>> settings = load_config()
        >>> settings = load_config("./my_config.yaml")
    """
    if config_path is None:
        path = get_default_config_path()
    else:
        path = Path(config_path)

    if not path.exists():
        # Return default settings if no config file
        return Settings()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        return Settings()

    return Settings.from_dict(data)
