"""Mermaid Validator MCP server.

Exposes a single tool, validateMermaid, over the MCP stdio transport.

Usage:
    # Run with defaults (mermaid-cli through npx)
    python -m server

    # Use a globally installed mmdc and verbose logging
    MERMAID_CLI_COMMAND=mmdc python -m server --verbose
"""

from .core import SERVER_NAME, SERVER_VERSION, create_server

__all__ = ["SERVER_NAME", "SERVER_VERSION", "create_server"]
