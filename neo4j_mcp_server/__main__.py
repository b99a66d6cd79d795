# neo4j_mcp_server/__main__.py
"""
Entry point for neo4j-mcp-server.

Validates the environment before any server resource is allocated, then
hands control to ServerLifecycle and exits with its status.
"""

import asyncio
import logging
import sys

import typer

from neo4j_mcp_server.config import (
    ConfigurationError,
    RuntimeSettings,
    ServerConfig,
    load_config,
    load_settings,
)
from neo4j_mcp_server.lifecycle import ServerLifecycle
from neo4j_mcp_server.logging_config import configure_logging

logger = logging.getLogger(__name__)


def report_configuration_error(error: ConfigurationError) -> None:
    """Write the operator-facing diagnostic lines to stderr."""
    for line in error.diagnostics():
        typer.echo(line, err=True)


async def serve(config: ServerConfig, settings: RuntimeSettings) -> int:
    """
    Run the server until it is shut down.

    Returns:
        Process exit code
    """
    lifecycle = ServerLifecycle(config, shutdown_timeout=settings.shutdown_timeout)
    exit_code = await lifecycle.run()
    logger.info(f"Exiting with status {exit_code}")
    return exit_code


def main() -> None:
    """Load configuration from the environment, run the server, exit."""
    configure_logging()

    try:
        settings = load_settings()
        configure_logging(settings.log_level)
        config = load_config()
    except ConfigurationError as e:
        report_configuration_error(e)
        sys.exit(1)

    sys.exit(asyncio.run(serve(config, settings)))


if __name__ == "__main__":
    main()
