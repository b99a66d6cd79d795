# neo4j_mcp_server/cli.py
"""
CLI interface for neo4j-mcp-server.

Thin presentation layer: `serve` runs the same entry point as
`python -m neo4j_mcp_server`, `check-config` validates without connecting.
"""

import typer

from neo4j_mcp_server.config import (
    ConfigurationError,
    get_settings_path,
    load_config,
    load_settings,
)

app = typer.Typer(
    name="neo4j-mcp-server",
    help="MCP server bridging stdio clients to a Neo4j graph database.",
    no_args_is_help=True,
)


@app.command()
def serve():
    """Start the MCP server on stdio (reads NEO4J_* environment variables)."""
    from neo4j_mcp_server.__main__ import main

    main()


@app.command("check-config")
def check_config():
    """Validate NEO4J_* variables and the settings file, print the result."""
    from neo4j_mcp_server.__main__ import report_configuration_error

    try:
        settings = load_settings()
        config = load_config()
    except ConfigurationError as e:
        report_configuration_error(e)
        raise typer.Exit(1)

    for key, value in config.describe().items():
        typer.echo(f"{key}: {value}")
    typer.echo(f"shutdown_timeout: {settings.shutdown_timeout}")
    typer.echo(f"log_level: {settings.log_level}")
    typer.echo(f"settings_file: {get_settings_path()}")


if __name__ == "__main__":
    app()
