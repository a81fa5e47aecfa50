#!/usr/bin/env python3
"""Mermaid Validator - MCP server validating Mermaid diagrams.

Runs an MCP server on stdin/stdout exposing the validateMermaid tool.
Diagrams are rendered by mermaid-cli; the tool answers with the PNG/SVG
image or with mmdc's error output.

Usage:
    # Start with defaults (npx @mermaid-js/mermaid-cli)
    python -m server

    # Load settings from a specific .env file with debug logging
    python -m server --env-file ./mermaid.env --verbose

Stdout carries the MCP protocol, so all logging goes to stderr (or to
--log-file).
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from mermaid_validator.env import resolve_settings
from mermaid_validator.errors import ConfigurationError
from mermaid_validator.renderer import find_engine

from .core import SERVER_NAME, SERVER_VERSION, create_server


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mermaid-validator",
        description=f"{SERVER_NAME} - MCP server validating Mermaid diagrams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  MERMAID_CLI_COMMAND       mermaid-cli command (default: npx @mermaid-js/mermaid-cli)
  MERMAID_RENDER_TIMEOUT    seconds before a render is aborted, 0 = no limit (default: 120)
  MERMAID_PUPPETEER_CONFIG  puppeteer config file passed to mmdc -p
        """,
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to .env file (default: .env)",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to PATH instead of stderr",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {SERVER_VERSION}",
    )
    return parser


def configure_logging(verbose: bool, log_file: Optional[str] = None) -> None:
    """Send log records to stderr or a file, never to stdout."""
    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[handler],
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv(args.env_file)
    configure_logging(args.verbose, args.log_file)

    try:
        settings = resolve_settings()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if find_engine(settings) is None:
        # Not fatal: every request will answer with a system error instead
        logger.warning(
            "mermaid-cli command %r not found on PATH", settings.command[0]
        )

    logger.info(
        "Starting %s %s (engine: %s, timeout: %s)",
        SERVER_NAME, SERVER_VERSION, " ".join(settings.command), settings.timeout,
    )
    server = create_server(
        settings,
        log_level="DEBUG" if args.verbose else "INFO",
    )

    try:
        server.run(transport="stdio")
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
