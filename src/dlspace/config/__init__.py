"""Configuration for dlspace."""

from dlspace.config.manager import Config, ConfigManager, DownloadsConfig, ProgressConfig

__all__ = ["Config", "ConfigManager", "DownloadsConfig", "ProgressConfig"]
