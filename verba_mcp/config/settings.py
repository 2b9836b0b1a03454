"""
Process configuration for the Verba MCP server.

Settings are read once from the environment before the operation registry
is built, and the resulting value is handed to the backend client. Nothing
after startup changes it.

Usage:
    from verba_mcp.config.settings import load_settings

    settings = load_settings()
    client = VerbaClient(settings)

Environment Variables:
    VERBA_API_KEY=<token>    - Bearer credential (required)
    VERBA_API_URL=<url>      - Backend base URL (default: https://verba.dev)
    VERBA_LOG_LEVEL=<level>  - Logging level name (default: INFO)
"""

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_API_KEY = "VERBA_API_KEY"
ENV_API_URL = "VERBA_API_URL"
ENV_LOG_LEVEL = "VERBA_LOG_LEVEL"

DEFAULT_API_URL = "https://verba.dev"
DEFAULT_LOG_LEVEL = "INFO"


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""
    pass


class Settings(BaseModel):
    """Immutable server configuration.

    Attributes:
        api_key: Opaque bearer credential sent with every backend call
        api_url: Backend base URL without a trailing slash
        log_level: Name of the root logging level
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1, repr=False)
    api_url: str = Field(DEFAULT_API_URL)
    log_level: str = Field(DEFAULT_LOG_LEVEL)

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        if value.endswith("/"):
            return value[:-1]
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from environment variables.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If VERBA_API_KEY is missing or a value is invalid

    Example:
        >>> load_settings({"VERBA_API_KEY": "vb_123"}).api_url
        'https://verba.dev'
    """
    if environ is None:
        environ = os.environ

    api_key = environ.get(ENV_API_KEY)
    if not api_key:
        raise ConfigurationError(f"{ENV_API_KEY} environment variable is required")

    try:
        return Settings(
            api_key=api_key,
            api_url=environ.get(ENV_API_URL) or DEFAULT_API_URL,
            log_level=environ.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL,
        )
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
