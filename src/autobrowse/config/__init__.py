"""Configuration package.

Usage:
    from autobrowse.config import get_settings, load_settings

    settings = load_settings("config.yaml")
    settings.tasks.action_delay  # 0.5
"""

from .settings import (
    DEFAULT_CONFIG_FILE,
    AutobrowseSettings,
    BrowserSettings,
    LoggingSettings,
    TaskSettings,
    get_settings,
    load_settings,
    reset_settings,
    save_settings,
    set_settings,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "AutobrowseSettings",
    "BrowserSettings",
    "LoggingSettings",
    "TaskSettings",
    "get_settings",
    "load_settings",
    "reset_settings",
    "save_settings",
    "set_settings",
]
