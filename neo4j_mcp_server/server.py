# neo4j_mcp_server/server.py
"""
Neo4j-backed MCP server handle.

Owns the FastMCP instance and the Neo4j async driver. Exposes run()/close()
to the lifecycle manager; query translation and execution live elsewhere.
"""

import asyncio
import logging
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from neo4j import AsyncDriver, AsyncGraphDatabase

from neo4j_mcp_server.config.schema import ServerConfig

logger = logging.getLogger(__name__)

SERVER_NAME = "neo4j-mcp-server"


class Neo4jServer:
    """
    MCP server bridged to a Neo4j database.

    Lifecycle:
        - run(): connect the driver, verify connectivity, start stdio transport
        - close(): stop the transport, close the driver
    """

    def __init__(self, config: ServerConfig) -> None:
        """
        Initialize the server without touching the network.

        Args:
            config: Validated connection settings
        """
        self._config = config
        self._mcp = FastMCP(SERVER_NAME)
        self._driver: AsyncDriver | None = None
        self._transport_task: asyncio.Task | None = None
        self._register_tools()

    @property
    def config(self) -> ServerConfig:
        return self._config

    @property
    def mcp(self) -> FastMCP:
        return self._mcp

    @property
    def is_running(self) -> bool:
        """True while the stdio transport task is alive."""
        return self._transport_task is not None and not self._transport_task.done()

    def _register_tools(self) -> None:
        @self._mcp.tool()
        async def get_database_info() -> dict:
            """Return the connected Neo4j endpoint, database and server details."""
            return await self.database_info()

    async def database_info(self) -> dict[str, Any]:
        """
        Describe the connected Neo4j server.

        Raises:
            ToolError: If the driver is not connected
        """
        if self._driver is None:
            raise ToolError("Neo4j server is not running")

        info = await self._driver.get_server_info()
        return {
            "uri": self._config.uri,
            "database": self._config.database,
            "address": str(info.address),
            "agent": info.agent,
            "protocol_version": ".".join(str(part) for part in info.protocol_version),
        }

    async def run(self) -> None:
        """
        Connect to Neo4j and start serving MCP over stdio.

        Returns once the driver is verified and the transport task is started.
        On connection failure the driver is closed and the error re-raised.

        Raises:
            RuntimeError: If run() was already called
        """
        if self._driver is not None:
            raise RuntimeError("Neo4j server already started")

        logger.info(
            f"Connecting to Neo4j at {self._config.uri} (database={self._config.database})"
        )
        driver = AsyncGraphDatabase.driver(
            self._config.uri,
            auth=(self._config.username, self._config.password),
        )
        try:
            await driver.verify_connectivity()
        except BaseException:
            await driver.close()
            raise

        self._driver = driver
        self._transport_task = asyncio.create_task(self._mcp.run_stdio_async())
        self._transport_task.add_done_callback(self._on_transport_done)
        logger.info("Neo4j MCP server running on stdio")

    def _on_transport_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        if task.exception() is not None:
            logger.error("MCP stdio transport failed", exc_info=task.exception())
        else:
            logger.info("MCP stdio transport finished")

    async def close(self) -> None:
        """
        Stop the transport and close the driver.

        Safe to call if run() never succeeded.
        """
        logger.info("Closing Neo4j MCP server...")

        if self._transport_task is not None:
            self._transport_task.cancel()
            try:
                await self._transport_task
            except asyncio.CancelledError:
                # close() itself being cancelled must propagate
                if asyncio.current_task().cancelling():
                    raise
                logger.info("MCP stdio transport cancelled")
            self._transport_task = None

        if self._driver is not None:
            driver, self._driver = self._driver, None
            await driver.close()

        logger.info("Neo4j MCP server closed")
