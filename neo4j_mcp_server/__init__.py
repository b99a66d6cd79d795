"""MCP server bridging stdio clients to a Neo4j graph database."""

__version__ = "0.1.0"
