"""Configuration management for pkgsender.

Required values come from the environment (or a .env file); optional
tuning lives in a YAML file with environment variable overrides.
"""

from pkgsender.config.settings import (
    ConfigurationError,
    LoggingConfig,
    Settings,
    load_settings,
)

__all__ = ["ConfigurationError", "LoggingConfig", "Settings", "load_settings"]
