"""Configuration management for pkgsender.

The four values the server cannot run without (listen port, package root,
console address and this machine's address) are read from the environment,
optionally populated from a .env file. Everything else has a default and
can be tuned from a YAML file or ``PKGSENDER_``-prefixed variables.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/pkgsender.yaml")

REQUIRED_ENV_VARS = ("PORT", "STATIC_FILES", "PS4IP", "LOCALIP")

# Field names and aliases that only the environment may set
_ENV_ONLY_KEYS = frozenset(
    {"port", "static_files", "ps4_ip", "local_ip"}
    | {name.lower() for name in REQUIRED_ENV_VARS}
)


class ConfigurationError(Exception):
    """Raised when required settings are absent or invalid at startup."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for the package sender.

    Immutable once loaded; a single instance is handed to every component
    at construction time.
    """

    model_config = {
        "env_prefix": "PKGSENDER_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
        "frozen": True,
    }

    # Required, unprefixed
    port: int = Field(validation_alias="PORT", ge=1, le=65535)
    static_files: Path = Field(validation_alias="STATIC_FILES")
    ps4_ip: str = Field(validation_alias="PS4IP", min_length=1)
    local_ip: str = Field(validation_alias="LOCALIP", min_length=1)

    # Optional
    host: str = Field(default="0.0.0.0")
    device_port: int = Field(default=12800, ge=1, le=65535)
    install_timeout: float = Field(default=30.0, gt=0)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("static_files")
    @classmethod
    def _absolute_root(cls, value: Path) -> Path:
        return Path(os.path.abspath(value))


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from .env + environment variables + YAML.

    Raises:
        ConfigurationError: If any required variable is missing or a
            value fails validation. The message names every missing
            variable at once.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    _load_dotenv()

    missing = [name for name in REQUIRED_ENV_VARS if not os.environ.get(name)]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}",
            missing=missing,
        )

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.debug("Config file %s not found, using defaults + env vars", path)

    for key in [k for k in yaml_data if str(k).lower() in _ENV_ONLY_KEYS]:
        logger.warning("Ignoring %r in %s: it can only be set from the environment", key, path)
        del yaml_data[key]

    try:
        return Settings(**yaml_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _load_dotenv() -> None:
    """Load .env file into os.environ if it exists."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if not os.environ.get(key):
                    os.environ[key] = value
