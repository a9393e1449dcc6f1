"""
Logging helpers.

All output goes to stderr: stdout is reserved for the MCP stdio channel.
"""

import logging
import sys

_LOG_FORMAT = "[TheBrain MCP] %(asctime)s %(levelname)s %(name)s: %(message)s"
_configured = False


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stderr handler to the package root logger."""
    global _configured
    root = logging.getLogger("thebrain_mcp")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if _configured:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)
    root.propagate = False
    _configured = True
