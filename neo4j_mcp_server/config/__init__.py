"""Configuration system for neo4j-mcp-server."""

from .errors import (
    ConfigurationError,
    EmptyCredentialField,
    InvalidSettingsFile,
    MalformedCredentials,
    MissingCredentials,
)
from .loader import (
    build_config,
    get_settings_path,
    load_config,
    load_settings,
    parse_credentials,
)
from .schema import RuntimeSettings, ServerConfig

__all__ = [
    "ServerConfig",
    "RuntimeSettings",
    "ConfigurationError",
    "MissingCredentials",
    "MalformedCredentials",
    "EmptyCredentialField",
    "InvalidSettingsFile",
    "parse_credentials",
    "build_config",
    "load_config",
    "load_settings",
    "get_settings_path",
]
