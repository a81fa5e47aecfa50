"""Exceptions raised inside the rendering adapter.

None of these cross the adapter boundary during a render: ``render()``
converts them into a ``SystemFailure`` outcome. ``ConfigurationError`` is the
exception to that rule and surfaces at startup when the environment is bad.
"""

from typing import List, Optional


class MermaidValidatorError(Exception):
    """Base exception for mermaid validator errors."""

    pass


class ConfigurationError(MermaidValidatorError):
    """Raised when an environment variable holds an unusable value."""

    def __init__(self, variable: str, value: str, reason: str):
        self.variable = variable
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for {variable}: {value!r} ({reason})")


class EngineNotFoundError(MermaidValidatorError):
    """Raised when the mermaid-cli executable cannot be located or started."""

    def __init__(
        self,
        command: List[str],
        original_error: Optional[str] = None,
    ):
        self.command = command
        self.original_error = original_error

        message = f"Rendering engine not found: {command[0] if command else '<empty>'}"
        if original_error:
            message += f" ({original_error})"
        message += (
            "\nInstall Node.js and @mermaid-js/mermaid-cli, or point "
            "MERMAID_CLI_COMMAND at an existing mmdc binary."
        )
        super().__init__(message)


class EngineStreamError(MermaidValidatorError):
    """Raised when writing to or reading from the engine's pipes fails."""

    def __init__(self, channel: str, original_error: Optional[str] = None):
        self.channel = channel
        self.original_error = original_error

        message = f"Stream failure on mermaid-cli {channel}"
        if original_error:
            message += f": {original_error}"
        super().__init__(message)


class RenderTimeoutError(MermaidValidatorError):
    """Raised when the engine does not finish within the configured timeout."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"mermaid-cli timed out after {timeout:g} seconds")
