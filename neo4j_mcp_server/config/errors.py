# neo4j_mcp_server/config/errors.py
"""
Configuration error taxonomy.

Raised before any server resource is allocated. The entry point reports
them on stderr and exits with status 1.
"""

FORMAT_HINT = "Format: username/password (e.g., NEO4J_AUTH=neo4j/neoneoneo)"


class ConfigurationError(Exception):
    """Base class for invalid process configuration."""

    hint: str | None = FORMAT_HINT

    def diagnostics(self) -> list[str]:
        """Human-readable lines for the operator, most important first."""
        lines = [f"Error: {self}"]
        if self.hint:
            lines.append(self.hint)
        return lines


class MissingCredentials(ConfigurationError):
    """NEO4J_AUTH is not set at all."""

    def __init__(self) -> None:
        super().__init__("NEO4J_AUTH environment variable is required")


class MalformedCredentials(ConfigurationError):
    """NEO4J_AUTH does not contain exactly one '/' separator."""

    def __init__(self) -> None:
        super().__init__('NEO4J_AUTH must contain exactly one "/" separator')


class EmptyCredentialField(ConfigurationError):
    """Username or password segment of NEO4J_AUTH is empty."""

    def __init__(self) -> None:
        super().__init__("Both username and password must be non-empty")


class InvalidSettingsFile(ConfigurationError):
    """The YAML settings file could not be read or validated."""

    hint = None

    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"invalid settings file {path}: {cause}")
        self.path = path
        self.cause = cause
