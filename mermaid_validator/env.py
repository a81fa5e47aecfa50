"""Environment variable resolution for the rendering adapter.

mermaid-cli is a Node.js tool, so configuration is about how to launch it
rather than about credentials. Every value has a working default; the
server runs with an empty environment as long as ``npx`` is on PATH.
"""

import os
import shlex
from dataclasses import dataclass
from typing import List, Optional

from .errors import ConfigurationError


# Launch mermaid-cli through npx so no global install is required
DEFAULT_CLI_COMMAND = "npx @mermaid-js/mermaid-cli"

# First npx run may download puppeteer and chromium
DEFAULT_RENDER_TIMEOUT = 120.0


@dataclass(frozen=True)
class RenderSettings:
    """Resolved settings for launching the rendering engine."""
    command: List[str]
    timeout: Optional[float] = DEFAULT_RENDER_TIMEOUT
    puppeteer_config: Optional[str] = None


def resolve_command() -> List[str]:
    """Resolve the mermaid-cli command line prefix.

    Checks:
    1. MERMAID_CLI_COMMAND environment variable (split shell-style)

    Returns:
        Argument list, e.g. ["npx", "@mermaid-js/mermaid-cli"] or ["mmdc"].

    Raises:
        ConfigurationError: If the variable is set but blank or unparsable.
    """
    raw = os.environ.get("MERMAID_CLI_COMMAND")
    if raw is None:
        return shlex.split(DEFAULT_CLI_COMMAND)
    try:
        parts = shlex.split(raw)
    except ValueError as e:
        raise ConfigurationError("MERMAID_CLI_COMMAND", raw, str(e)) from e
    if not parts:
        raise ConfigurationError("MERMAID_CLI_COMMAND", raw, "command is empty")
    return parts


def resolve_timeout() -> Optional[float]:
    """Resolve the render timeout in seconds.

    Checks:
    1. MERMAID_RENDER_TIMEOUT environment variable

    Returns:
        Timeout in seconds, or None when set to 0 (wait indefinitely).

    Raises:
        ConfigurationError: If the value is not a non-negative number.
    """
    val = os.environ.get("MERMAID_RENDER_TIMEOUT")
    if not val:
        return DEFAULT_RENDER_TIMEOUT
    try:
        timeout = float(val)
    except ValueError as e:
        raise ConfigurationError("MERMAID_RENDER_TIMEOUT", val, "not a number") from e
    if timeout < 0:
        raise ConfigurationError("MERMAID_RENDER_TIMEOUT", val, "must not be negative")
    return timeout or None


def resolve_puppeteer_config() -> Optional[str]:
    """Resolve the optional puppeteer config file passed to mmdc via -p.

    Useful in containers where chromium needs --no-sandbox.
    """
    return os.environ.get("MERMAID_PUPPETEER_CONFIG") or None


def resolve_settings() -> RenderSettings:
    """Resolve all rendering settings from the environment."""
    return RenderSettings(
        command=resolve_command(),
        timeout=resolve_timeout(),
        puppeteer_config=resolve_puppeteer_config(),
    )
