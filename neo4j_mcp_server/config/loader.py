# neo4j_mcp_server/config/loader.py
"""
Configuration loading from the process environment and the settings file.

Credentials and endpoint come from NEO4J_* environment variables only.
Process settings come from an optional YAML file located with platformdirs.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from platformdirs import user_config_path
from pydantic import ValidationError

from .errors import (
    EmptyCredentialField,
    InvalidSettingsFile,
    MalformedCredentials,
    MissingCredentials,
)
from .schema import DEFAULT_DATABASE, DEFAULT_URI, RuntimeSettings, ServerConfig

logger = logging.getLogger(__name__)

AUTH_ENV = "NEO4J_AUTH"
URI_ENV = "NEO4J_URI"
DATABASE_ENV = "NEO4J_DATABASE"
SETTINGS_ENV = "NEO4J_MCP_SETTINGS"


def parse_credentials(raw: str | None) -> tuple[str, str]:
    """
    Split a ``username/password`` credential string.

    Args:
        raw: Value of NEO4J_AUTH, or None if unset

    Returns:
        (username, password), both non-empty

    Raises:
        MissingCredentials: raw is None
        MalformedCredentials: raw does not contain exactly one '/'
        EmptyCredentialField: username or password is empty
    """
    if raw is None:
        raise MissingCredentials()

    parts = raw.split("/")
    if len(parts) != 2:
        raise MalformedCredentials()

    username, password = parts
    if not username or not password:
        raise EmptyCredentialField()

    return username, password


def build_config(
    credentials: tuple[str, str],
    uri: str | None = None,
    database: str | None = None,
) -> ServerConfig:
    """Combine validated credentials with optional endpoint/database overrides."""
    username, password = credentials
    return ServerConfig(
        uri=uri or DEFAULT_URI,
        username=username,
        password=password,
        database=database or DEFAULT_DATABASE,
    )


def load_config(environ: Mapping[str, str] | None = None) -> ServerConfig:
    """
    Build the server config from NEO4J_* environment variables.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Raises:
        ConfigurationError: If NEO4J_AUTH is missing or invalid
    """
    env = os.environ if environ is None else environ

    credentials = parse_credentials(env.get(AUTH_ENV))
    config = build_config(credentials, env.get(URI_ENV), env.get(DATABASE_ENV))
    logger.info(f"Loaded server config: uri={config.uri}, database={config.database}")
    return config


def get_settings_path(environ: Mapping[str, str] | None = None) -> Path:
    """Get path to the settings file (NEO4J_MCP_SETTINGS overrides the default)."""
    env = os.environ if environ is None else environ
    override = env.get(SETTINGS_ENV)
    if override:
        return Path(override)
    return user_config_path("neo4j-mcp-server") / "settings.yaml"


def load_settings(path: Path | None = None) -> RuntimeSettings:
    """
    Load runtime settings from YAML.

    A missing file yields defaults; it is not created.

    Raises:
        InvalidSettingsFile: If the file is unreadable, not YAML, or fails validation
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug(f"No settings file at {settings_path}, using defaults")
        return RuntimeSettings()

    try:
        with settings_path.open("r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError("top-level YAML value must be a mapping")
        settings = RuntimeSettings(**data)
    except (OSError, yaml.YAMLError, ValueError, ValidationError) as e:
        raise InvalidSettingsFile(str(settings_path), e) from e

    logger.info(f"Loaded settings from {settings_path}")
    return settings
