"""MCP server construction.

The FastMCP instance is the only process-wide state: it is built once at
startup and runs until the stdio transport closes.
"""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from mermaid_validator.env import RenderSettings

from . import tools

SERVER_NAME = "Mermaid Validator"
SERVER_VERSION = "0.6.0"


def create_server(
    settings: Optional[RenderSettings] = None,
    log_level: str = "INFO",
) -> FastMCP:
    """Build the FastMCP server with validateMermaid registered.

    Args:
        settings: Engine settings shared by every request. When None each
            request resolves them from the environment.
        log_level: Level for FastMCP's own loggers.
    """
    mcp = FastMCP(SERVER_NAME, log_level=log_level)
    set_reported_version(mcp, SERVER_VERSION)
    tools.register(mcp, settings=settings)
    return mcp


def set_reported_version(mcp: FastMCP, version: str) -> None:
    """Set the serverInfo.version sent to clients during initialization.

    FastMCP takes no version argument and otherwise reports the version of
    the mcp package, so the low-level server attribute is set directly.
    """
    mcp._mcp_server.version = version
