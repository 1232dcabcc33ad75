"""Configuration module for the product registry API.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml
- APP_ENV=test → config_test.yaml
- Default      → config.yaml

Host, port and log level can be overridden from the environment (or .env file).
Fails fast with clear error messages if configuration is invalid.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from src/config/ up to project root
    return Path(__file__).parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable.

    Returns:
        Config filename:
        - APP_ENV=dev  → config_dev.yaml
        - APP_ENV=test → config_test.yaml
        - Default      → config.yaml
    """
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    elif app_env == "test":
        return "config_test.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or 'test', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get optional environment variable with default."""
    return os.environ.get(key, default)


def _parse_port(value) -> int:
    """Parse and range-check a TCP port."""
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid server port: {value!r}")

    if not 0 < port < 65536:
        raise ConfigurationError(f"Server port out of range: {port}")
    return port


def _parse_log_level(value: str) -> str:
    """Normalize a log level name and make sure the logging module knows it."""
    level = str(value).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"Unknown log level: {value!r}")
    return level


@dataclass(frozen=True)
class ApiConfig:
    """HTTP API configuration."""
    title: str
    version: str
    prefix: str  # Route prefix for the product endpoints, "" serves /products
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class ServerConfig:
    """Uvicorn server configuration."""
    host: str
    port: int
    reload: bool


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    api: ApiConfig
    server: ServerConfig
    logging: LoggingConfig


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from config.yaml for settings; APP_HOST, APP_PORT and LOG_LEVEL
    from the environment (or .env) take precedence over the file.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    # Load environment variables from .env file
    load_dotenv()

    # Load YAML configuration
    yaml_config = _load_yaml_config()

    # Build API config
    api_section = yaml_config.get("api", {})
    prefix = api_section.get("prefix", "") or ""

    api_config = ApiConfig(
        title=api_section.get("title", "Product Registry API"),
        version=str(api_section.get("version", "1.0.0")),
        prefix=prefix.rstrip("/"),
        cors_origins=list(api_section.get("cors_origins", ["*"])),
    )

    # Build Server config
    server_section = yaml_config.get("server", {})

    server_config = ServerConfig(
        host=_get_optional_env("APP_HOST", server_section.get("host", "127.0.0.1")),
        port=_parse_port(_get_optional_env("APP_PORT", server_section.get("port", 8000))),
        reload=bool(server_section.get("reload", False)),
    )

    # Build Logging config
    logging_section = yaml_config.get("logging", {})

    logging_config = LoggingConfig(
        level=_parse_log_level(_get_optional_env("LOG_LEVEL", logging_section.get("level", "INFO"))),
    )

    return AppConfig(
        api=api_config,
        server=server_config,
        logging=logging_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.
    Config file is selected based on APP_ENV environment variable.

    Returns:
        AppConfig: Application configuration.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_environment() -> str:
    """Get current environment name.

    Returns:
        'dev', 'test', or 'default' based on APP_ENV.
    """
    app_env = os.environ.get("APP_ENV", "").lower()
    return app_env if app_env in ("dev", "test") else "default"


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _config
    _config = None
