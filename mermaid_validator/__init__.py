# mermaid_validator/__init__.py
"""Mermaid diagram validation through mermaid-cli.

Validates diagram source by rendering it with mermaid-cli in a one-shot
subprocess. The result is one of three outcomes (Valid, Invalid,
SystemFailure) so callers never have to handle exceptions from the engine.
"""

from .env import RenderSettings, resolve_settings
from .errors import ConfigurationError, MermaidValidatorError
from .outcome import (
    Invalid,
    OutputFormat,
    RenderOutcome,
    SystemFailure,
    Valid,
)
from .renderer import render

__all__ = [
    "ConfigurationError",
    "Invalid",
    "MermaidValidatorError",
    "OutputFormat",
    "RenderOutcome",
    "RenderSettings",
    "SystemFailure",
    "Valid",
    "render",
    "resolve_settings",
]
