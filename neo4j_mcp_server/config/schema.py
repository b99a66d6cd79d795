# neo4j_mcp_server/config/schema.py
"""
Pydantic configuration models for neo4j-mcp-server.

ServerConfig is frozen and rejects empty credentials, so an instance only
exists once validation has succeeded.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_URI = "bolt://localhost:7687"
DEFAULT_DATABASE = "neo4j"


class ServerConfig(BaseModel):
    """Connection settings for the Neo4j backend."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    uri: str = Field(default=DEFAULT_URI, description="Neo4j connection endpoint")
    username: str = Field(min_length=1, description="Neo4j username")
    password: str = Field(min_length=1, repr=False, description="Neo4j password")
    database: str = Field(default=DEFAULT_DATABASE, description="Target database name")

    def describe(self) -> dict[str, str]:
        """Loggable view of the config with the password masked."""
        return {
            "uri": self.uri,
            "username": self.username,
            "password": "********",
            "database": self.database,
        }


class RuntimeSettings(BaseModel):
    """Process settings read from the optional YAML settings file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    shutdown_timeout: float | None = Field(
        default=10.0,
        ge=0.0,
        description="Seconds to wait for server close on shutdown (None = wait forever)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Root logging level"
    )
