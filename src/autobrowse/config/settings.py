"""Configuration management for autobrowse using pydantic-settings.

Settings come from three sources, highest precedence first: values in a
JSON or YAML config file passed to :func:`load_settings`, ``AUTOBROWSE_``
environment variables (nested groups use ``__``, e.g.
``AUTOBROWSE_BROWSER__HEADLESS=false``), and the defaults below.
"""

import json
import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("config.yaml")
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class BrowserSettings(BaseModel):
    """Browser launch settings."""

    headless: bool = Field(True, description="Run the browser without a window")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User agent of the browser context")
    timeout: float = Field(30.0, gt=0, description="Navigation timeout in seconds")
    executable_path: str | None = Field(
        None, description="Chrome/Chromium executable, bundled Chromium when unset"
    )


class TaskSettings(BaseModel):
    """Task execution defaults and pacing."""

    default_wait_time: float = Field(
        5.0, ge=0, description="Seconds to wait after navigation when a task sets no wait_time"
    )
    auto_screenshot: bool = Field(
        False, description="Capture a screenshot after tasks that set no screenshot flag"
    )
    action_delay: float = Field(0.5, ge=0, description="Seconds to pause after every node")
    task_delay: float = Field(2.0, ge=0, description="Seconds to pause between tasks")
    screenshot_dir: Path = Field(Path("screenshots"), description="Directory for screenshots")


class LoggingSettings(BaseModel):
    """Log output settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Log level"
    )
    file: Path | None = Field(Path("logs/autobrowse.log"), description="Log file, none to disable")
    console: bool = Field(True, description="Log to stderr")
    structured: bool = Field(False, description="Render log lines as JSON")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class AutobrowseSettings(BaseSettings):
    """Main configuration settings for autobrowse."""

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    tasks: TaskSettings = Field(default_factory=TaskSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="AUTOBROWSE_",
        env_nested_delimiter="__",
        extra="ignore",
    )


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}", cause=e) from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}", cause=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def load_settings(path: Path | str | None = None) -> AutobrowseSettings:
    """Load settings from a config file layered over environment and defaults.

    Args:
        path: JSON or YAML config file. When None, ``config.yaml`` in the
            working directory is used if it exists.

    Returns:
        Loaded settings

    Raises:
        ConfigurationError: If an explicitly given file is missing, or any
            file is unreadable or fails validation
    """
    if path is None:
        config_path = DEFAULT_CONFIG_FILE
        if not config_path.exists():
            logger.debug("No %s found, using defaults", config_path)
            return _build_settings({})
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

    data = _read_config_file(config_path)
    logger.info("Loaded configuration from %s", config_path)
    return _build_settings(data)


def _build_settings(data: dict[str, Any]) -> AutobrowseSettings:
    try:
        return AutobrowseSettings(**data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", cause=e) from e


def save_settings(settings: AutobrowseSettings, path: Path | str) -> None:
    """Write settings to a JSON or YAML file, chosen by extension."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump(mode="json")
    if config_path.suffix.lower() == ".json":
        config_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    else:
        config_path.write_text(
            yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8"
        )
    logger.info("Saved configuration to %s", config_path)


# Global settings instance
_settings: AutobrowseSettings | None = None


def get_settings() -> AutobrowseSettings:
    """Get global settings instance.

    Returns:
        Settings instance, loaded from environment and defaults on first use
    """
    global _settings

    if _settings is None:
        _settings = AutobrowseSettings()

    return _settings


def set_settings(settings: AutobrowseSettings) -> None:
    """Install settings as the global instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset global settings instance."""
    global _settings
    _settings = None
