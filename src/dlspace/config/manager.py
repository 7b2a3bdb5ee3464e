"""Configuration manager for dlspace."""

import json
import logging
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any

from dlspace.utils.size import parse_size_to_bytes

logger = logging.getLogger(__name__)

DEFAULT_DOWNLOAD_DIRECTORY = str(Path.home() / "Downloads")


def _validate_reserve(value: Any) -> str:
    if not isinstance(value, str) or parse_size_to_bytes(value) <= 0:
        raise ValueError(f"Invalid reserve: {value!r}. Use a size such as '500 MB' or '1 GB'")
    return value


def _validate_multiplier(value: Any) -> float:
    value = float(value)
    if not 1.0 <= value <= 10.0:
        raise ValueError(f"Invalid space_multiplier: {value}. Must be between 1.0 and 10.0")
    return value


def _validate_debounce_ms(value: Any) -> int:
    value = int(value)
    if not 0 <= value <= 60000:
        raise ValueError(f"Invalid debounce_ms: {value}. Must be between 0 and 60000")
    return value


@dataclass
class DownloadsConfig:
    """Download location settings.

    Attributes:
        directory: Directory downloads are written to
        reserve: Space that must stay free after a download (size string)
        space_multiplier: Multiplier applied to a download's size (1.0-10.0)
    """

    directory: str = DEFAULT_DOWNLOAD_DIRECTORY
    reserve: str = "1 GB"
    space_multiplier: float = 1.0

    def __post_init__(self):
        """Validate configuration values."""
        _validate_reserve(self.reserve)
        self.space_multiplier = _validate_multiplier(self.space_multiplier)

    @property
    def directory_path(self) -> Path:
        """Get download directory as Path object."""
        return Path(self.directory).expanduser()

    @property
    def reserve_bytes(self) -> int:
        """Get reserve as a byte count."""
        return parse_size_to_bytes(self.reserve)


@dataclass
class ProgressConfig:
    """Progress reporting settings.

    Attributes:
        debounce_ms: Quiet period before disk usage is recomputed (0-60000)
    """

    debounce_ms: int = 250

    def __post_init__(self):
        """Validate configuration values."""
        self.debounce_ms = _validate_debounce_ms(self.debounce_ms)


@dataclass
class Config:
    """Main configuration container."""

    downloads: DownloadsConfig = field(default_factory=DownloadsConfig)
    progress: ProgressConfig = field(default_factory=ProgressConfig)
    schema_version: str = "1.0"


# Validators applied by ConfigManager.set, keyed by dot-notation key
VALIDATORS = {
    "downloads.reserve": _validate_reserve,
    "downloads.space_multiplier": _validate_multiplier,
    "progress.debounce_ms": _validate_debounce_ms,
}


class ConfigManager:
    """Manages configuration loading, saving, and access.

    Configuration is stored in ~/.config/dlspace/config.json
    """

    DEFAULT_CONFIG_PATH = Path.home() / ".config" / "dlspace" / "config.json"

    def __init__(self, config_path: Path | None = None):
        """Initialize ConfigManager.

        Args:
            config_path: Custom path for config file (default: ~/.config/dlspace/config.json)
        """
        self.config_path = config_path or self.DEFAULT_CONFIG_PATH
        self.config = self._load_config()

    def _load_config(self) -> Config:
        """Load configuration from file or create default."""
        if self.config_path.exists():
            try:
                with open(self.config_path, encoding="utf-8") as f:
                    data = json.load(f)
                return self._dict_to_config(data)
            except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Could not load config from {self.config_path}: {e}")
                return Config()
        return Config()

    def _dict_to_config(self, data: dict) -> Config:
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")

        downloads_data = data.get("downloads", {})
        progress_data = data.get("progress", {})
        for section, section_data in (("downloads", downloads_data), ("progress", progress_data)):
            if not isinstance(section_data, dict):
                raise TypeError(f"Section '{section}' must be a JSON object")

        downloads_config = DownloadsConfig(
            directory=downloads_data.get("directory", DEFAULT_DOWNLOAD_DIRECTORY),
            reserve=downloads_data.get("reserve", "1 GB"),
            space_multiplier=downloads_data.get("space_multiplier", 1.0),
        )
        progress_config = ProgressConfig(
            debounce_ms=progress_data.get("debounce_ms", 250),
        )

        return Config(
            downloads=downloads_config,
            progress=progress_config,
            schema_version=data.get("schema_version", "1.0"),
        )

    def _config_to_dict(self, config: Config) -> dict:
        return {
            "schema_version": config.schema_version,
            "downloads": {
                "directory": config.downloads.directory,
                "reserve": config.downloads.reserve,
                "space_multiplier": config.downloads.space_multiplier,
            },
            "progress": {
                "debounce_ms": config.progress.debounce_ms,
            },
        }

    def save(self) -> None:
        """Save current configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        data = self._config_to_dict(self.config)
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def get(self, key: str) -> Any:
        """Get configuration value by dot-notation key.

        Args:
            key: Configuration key (e.g., "downloads.reserve")

        Returns:
            Configuration value

        Raises:
            KeyError: If key is not found
        """
        parts = key.split(".")

        if len(parts) == 1:
            if hasattr(self.config, key):
                return getattr(self.config, key)
            raise KeyError(f"Unknown configuration key: {key}")

        if len(parts) == 2:
            section, name = parts
            if hasattr(self.config, section):
                section_obj = getattr(self.config, section)
                if hasattr(section_obj, name):
                    return getattr(section_obj, name)
            raise KeyError(f"Unknown configuration key: {key}")

        raise KeyError(f"Invalid configuration key format: {key}")

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by dot-notation key.

        Args:
            key: Configuration key (e.g., "progress.debounce_ms")
            value: Value to set

        Raises:
            KeyError: If key is not found
            ValueError: If value is invalid
        """
        parts = key.split(".")

        if len(parts) != 2:
            raise KeyError(f"Invalid configuration key format: {key}")

        section, name = parts

        if not hasattr(self.config, section):
            raise KeyError(f"Unknown configuration section: {section}")

        section_obj = getattr(self.config, section)

        # Derived properties such as downloads.reserve_bytes are read-only
        if not is_dataclass(section_obj) or name not in {f.name for f in fields(section_obj)}:
            raise KeyError(f"Unknown configuration key: {key}")

        validator = VALIDATORS.get(key)
        if validator is not None:
            value = validator(value)

        setattr(section_obj, name, value)

    def get_all(self) -> dict:
        """Get all configuration as dictionary."""
        return self._config_to_dict(self.config)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self.config = Config()
