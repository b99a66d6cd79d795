# neo4j_mcp_server/lifecycle.py
"""
Server lifecycle management.

Owns the single Neo4jServer handle for the process, starts it, and turns
SIGINT/SIGTERM into one orderly shutdown that yields the process exit code.
"""

import asyncio
import logging
import signal
from collections.abc import Callable
from enum import Enum

from neo4j_mcp_server.config.schema import ServerConfig
from neo4j_mcp_server.server import Neo4jServer

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class LifecycleState(Enum):
    """Lifecycle states, in the only order they can be visited."""

    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


class ServerLifecycle:
    """
    Server lifecycle coordinator.

    Manages:
        - Server construction and startup (Idle -> Starting -> Running)
        - Signal handler registration (loop-based, signal.signal fallback)
        - Single graceful shutdown (Running -> ShuttingDown -> Terminated)
        - Exit code for the process
    """

    def __init__(
        self,
        config: ServerConfig,
        server_factory: Callable[[ServerConfig], Neo4jServer] = Neo4jServer,
        shutdown_timeout: float | None = 10.0,
    ) -> None:
        """
        Initialize lifecycle manager.

        Args:
            config: Validated server config
            server_factory: Builds the server handle (Neo4jServer by default)
            shutdown_timeout: Max seconds to wait for close() (None = unbounded)
        """
        self._config = config
        self._server_factory = server_factory
        self._shutdown_timeout = shutdown_timeout
        self._state = LifecycleState.IDLE
        self._server: Neo4jServer | None = None
        self._exit_code: int | None = None
        self._terminated = asyncio.Event()
        self._shutdown_task: asyncio.Task | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._loop_signals: list[signal.Signals] = []
        self._previous_handlers: dict[signal.Signals, object] = {}

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def server(self) -> Neo4jServer | None:
        """The server handle (None until start() is called)."""
        return self._server

    @property
    def exit_code(self) -> int | None:
        """Process exit code once terminated, else None."""
        return self._exit_code

    async def start(self) -> bool:
        """
        Construct and start the server.

        Returns:
            True if the server is running, False if startup failed
            (lifecycle is then terminated with exit code 1, close() not called)

        Raises:
            RuntimeError: If start() is called more than once
        """
        if self._state is not LifecycleState.IDLE:
            raise RuntimeError(f"Cannot start lifecycle in state {self._state.value}")

        self._state = LifecycleState.STARTING
        logger.info("Starting Neo4j MCP server...")

        try:
            self._server = self._server_factory(self._config)
            await self._server.run()
        except Exception as e:
            logger.error(f"Failed to start Neo4j MCP server: {e}", exc_info=True)
            self._terminate(1)
            return False

        self._state = LifecycleState.RUNNING
        logger.info("Neo4j MCP server started")
        return True

    def install_signal_handlers(self) -> None:
        """
        Route SIGINT and SIGTERM to request_shutdown().

        On Windows (ProactorEventLoop), add_signal_handler is not supported,
        so we fall back to signal.signal().
        """
        loop = asyncio.get_running_loop()
        self._loop = loop

        try:
            for sig in SHUTDOWN_SIGNALS:
                loop.add_signal_handler(sig, self.request_shutdown, sig.name)
                self._loop_signals.append(sig)
            logger.info("Signal handlers registered (loop-based)")

        except NotImplementedError:
            for sig in SHUTDOWN_SIGNALS:
                self._previous_handlers[sig] = signal.signal(sig, self._signal_callback)
            logger.info("Signal handlers registered (fallback for Windows)")

    def _signal_callback(self, sig_num, frame) -> None:
        """Fallback handler: hop back onto the event loop."""
        sig_name = signal.Signals(sig_num).name
        self._loop.call_soon_threadsafe(self.request_shutdown, sig_name)

    def _remove_signal_handlers(self) -> None:
        for sig in self._loop_signals:
            self._loop.remove_signal_handler(sig)
        self._loop_signals.clear()

        for sig, previous in self._previous_handlers.items():
            signal.signal(sig, previous)
        self._previous_handlers.clear()

    def request_shutdown(self, sig_name: str) -> None:
        """
        Begin shutdown in response to a signal.

        Only the first request while RUNNING is acted upon; later ones are ignored.

        Args:
            sig_name: Signal name for logging
        """
        if self._state is not LifecycleState.RUNNING:
            logger.warning(f"Received {sig_name} while {self._state.value}, ignoring")
            return

        logger.info(f"Received {sig_name}, shutting down gracefully...")
        self._state = LifecycleState.SHUTTING_DOWN
        self._shutdown_task = asyncio.get_running_loop().create_task(self._shutdown())

    async def _shutdown(self) -> None:
        try:
            if self._shutdown_timeout is None:
                await self._server.close()
            else:
                await asyncio.wait_for(self._server.close(), self._shutdown_timeout)
        except asyncio.TimeoutError:
            logger.error(f"Shutdown timed out after {self._shutdown_timeout}s")
            exit_code = 1
        except Exception as e:
            logger.error(f"Error during shutdown: {e}", exc_info=True)
            exit_code = 1
        else:
            logger.info("Shutdown complete")
            exit_code = 0

        self._terminate(exit_code)

    def _terminate(self, exit_code: int) -> None:
        self._state = LifecycleState.TERMINATED
        self._exit_code = exit_code
        self._remove_signal_handlers()
        self._terminated.set()

    async def wait(self) -> int:
        """Suspend until terminated and return the exit code."""
        await self._terminated.wait()
        return self._exit_code

    async def run(self) -> int:
        """
        Start the server, install signal handlers, and wait for shutdown.

        Returns:
            Process exit code (0 clean shutdown, 1 on any failure)
        """
        if not await self.start():
            return self._exit_code

        self.install_signal_handlers()
        return await self.wait()
