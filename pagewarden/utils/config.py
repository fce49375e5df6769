"""
Configuration management for pagewarden.
Loads and validates settings from YAML files and environment variables.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

DEFAULT_USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) Gecko/20100101 Firefox/125.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_4_1) AppleWebKit/605.1.15 (KHTML, like Gecko) "
    "Version/17.4.1 Safari/605.1.15",
]


class PacingConfig(BaseModel):
    """Bounds for the randomized delay between page loads (milliseconds).

    Bounds are validated where they are used (see crawler.pacing), so a
    store that edits them at runtime is not rejected here.
    """

    min_delay_ms: float = 5000.0
    max_delay_ms: float = 10000.0


class BreakWindow(BaseModel):
    """Daily quiet window in 24-hour local time ("HH:MM").

    Either bound left empty disables the window.
    """

    begin_time: str = ""
    end_time: str = ""

    @property
    def enabled(self) -> bool:
        return bool(self.begin_time) and bool(self.end_time)


class GeneralConfig(BaseModel):
    """General configuration."""

    project_name: str = "pagewarden"
    version: str = "0.1.0"
    log_level: str = "INFO"
    logs_dir: str = "logs"


class PageConfig(BaseModel):
    """Per-page configuration."""

    timeout: int = 30000  # default navigation timeout (ms)
    user_agents: list[str] = Field(default_factory=lambda: list(DEFAULT_USER_AGENTS))


class BrowserConfig(BaseModel):
    """Browser configuration.

    low_bandwidth skips the content blocker teardown on page close.
    Break time bounds are "HH:MM" strings; empty disables break time.
    """

    low_bandwidth: bool = False
    break_time_begin: str = ""
    break_time_stop: str = ""
    min_sleep: float = 5000.0  # ms
    max_sleep: float = 10000.0  # ms
    block_ads: bool = True
    block_trackers: bool = True
    block_large_media: bool = True

    def pacing(self) -> PacingConfig:
        return PacingConfig(min_delay_ms=self.min_sleep, max_delay_ms=self.max_sleep)

    def break_window(self) -> BreakWindow:
        return BreakWindow(begin_time=self.break_time_begin, end_time=self.break_time_stop)


class Settings(BaseModel):
    """Main settings container."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    page: PageConfig = Field(default_factory=PageConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary.
        override: Override dictionary.

    Returns:
        Merged dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_yaml_config(config_dir: Path) -> dict[str, Any]:
    """Load settings.yaml with local.yaml overrides.

    local.yaml keeps machine-specific overrides under a top-level
    ``settings:`` key, e.g.:

        settings:
          browser:
            low_bandwidth: true

    Args:
        config_dir: Configuration directory path.

    Returns:
        Merged configuration dictionary.
    """
    config = _load_yaml_file(config_dir / "settings.yaml")
    local_overrides = _load_yaml_file(config_dir / "local.yaml")

    if isinstance(local_overrides.get("settings"), dict):
        config = _deep_merge(config, local_overrides["settings"])

    return config


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides.

    Environment variables should be prefixed with PAGEWARDEN_ and use
    double underscores for nested keys.

    Example:
        PAGEWARDEN_BROWSER__LOW_BANDWIDTH=true

    Args:
        config: Configuration dictionary.

    Returns:
        Configuration with environment overrides.
    """
    prefix = "PAGEWARDEN_"

    for key, value in os.environ.items():
        if not key.startswith(prefix) or key == "PAGEWARDEN_CONFIG_DIR":
            continue

        key_path = key[len(prefix) :].lower().split("__")

        current = config
        for part in key_path[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        final_key = key_path[-1]
        try:
            if value.lower() in ("true", "false"):
                current[final_key] = value.lower() == "true"
            elif "." in value:
                current[final_key] = float(value)
            else:
                current[final_key] = int(value)
        except ValueError:
            current[final_key] = value

    return config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get application settings.

    Settings are loaded from:
    1. Default values
    2. YAML configuration files
    3. Environment variables (highest priority)

    Returns:
        Settings instance.
    """
    config_dir = Path(os.environ.get("PAGEWARDEN_CONFIG_DIR", "config"))

    config = _load_yaml_config(config_dir)
    config = _apply_env_overrides(config)

    return Settings(**config)


def get_project_root() -> Path:
    """Get the project root directory.

    Returns:
        Project root path.
    """
    # Assuming this file is at pagewarden/utils/config.py
    return Path(__file__).parent.parent.parent
