# neo4j_mcp_server/logging_config.py
"""
Stderr-only JSON logging configuration.

CRITICAL: the MCP stdio transport owns stdout, so ALL logging must go to stderr.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Third-party loggers that would otherwise attach their own handlers
_THIRD_PARTY_LOGGERS = ["fastmcp", "mcp", "neo4j"]


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON line."""
        log_data: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            log_data["exc"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(level: str = "INFO") -> None:
    """
    Configure logging to output JSON to stderr only.

    Clears existing handlers so nothing ends up on stdout.

    Args:
        level: Level name applied to the root and third-party loggers
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for logger_name in _THIRD_PARTY_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False  # avoid double logging through root
