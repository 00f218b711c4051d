"""
Configuration management for habit-stats.
"""

from pathlib import Path
from typing import Optional

from .models import AnalyticsConfig

CONFIG_DIR_NAME = "habit-stats"
CONFIG_FILE = "config.json"


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / CONFIG_DIR_NAME / CONFIG_FILE


def load_config(config_path: Optional[str] = None) -> AnalyticsConfig:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        AnalyticsConfig object
    """
    if config_path is None:
        config_path = str(get_default_config_path())

    return AnalyticsConfig.load_from_file(config_path)


def save_config(config: AnalyticsConfig, config_path: Optional[str] = None):
    """
    Save configuration to file.

    Args:
        config: AnalyticsConfig object to save
        config_path: Optional path to save to. Uses default if not provided.
    """
    if config_path is None:
        config_path = str(get_default_config_path())

    config.validate()
    config.save_to_file(config_path)
