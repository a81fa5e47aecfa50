"""The validateMermaid tool.

Thin glue between the MCP transport and the rendering adapter: applies the
default format, calls ``render()`` and turns the outcome into content
blocks. Block count and order are part of the tool's contract; agents
pattern-match on them to decide whether to fix the diagram.
"""

import base64
import logging
from typing import List, Literal, Optional, Union

from mcp.server.fastmcp import FastMCP
from mcp.types import ImageContent, TextContent

from mermaid_validator import renderer
from mermaid_validator.env import RenderSettings
from mermaid_validator.outcome import (
    Invalid,
    OutputFormat,
    RenderOutcome,
    Valid,
)

logger = logging.getLogger(__name__)

TOOL_NAME = "validateMermaid"
TOOL_DESCRIPTION = (
    "Validates a Mermaid diagram and returns the rendered image (PNG or SVG) if valid"
)

VALID_MESSAGE = "Mermaid diagram is valid"
DETAIL_HEADER = "Detailed error output:\n"
SYSTEM_ERROR_PREFIX = "Error processing Mermaid diagram: "

ContentBlock = Union[TextContent, ImageContent]


def outcome_to_content(outcome: RenderOutcome) -> List[ContentBlock]:
    """Convert a render outcome into the tool's response blocks.

    Valid:         [text, image]
    Invalid:       [text summary, text main error, optional text detail]
    SystemFailure: [text]
    """
    if isinstance(outcome, Valid):
        return [
            TextContent(type="text", text=VALID_MESSAGE),
            ImageContent(
                type="image",
                data=base64.b64encode(outcome.image).decode("ascii"),
                mimeType=outcome.mime_type,
            ),
        ]

    if isinstance(outcome, Invalid):
        blocks: List[ContentBlock] = [
            TextContent(type="text", text=outcome.summary),
            TextContent(type="text", text=outcome.main_error),
        ]
        if outcome.detail:
            blocks.append(TextContent(type="text", text=DETAIL_HEADER + outcome.detail))
        return blocks

    return [TextContent(type="text", text=SYSTEM_ERROR_PREFIX + outcome.message)]


async def validate_mermaid(
    diagram: str,
    format: Optional[str] = None,
    settings: Optional[RenderSettings] = None,
) -> List[ContentBlock]:
    """Validate and render a diagram, returning the tool response blocks.

    Raises:
        ValueError: If ``format`` is neither "png" nor "svg". The request is
            rejected before any subprocess is started.
    """
    fmt = OutputFormat.parse(format)
    outcome = await renderer.render(diagram, fmt, settings=settings)
    logger.info("validateMermaid (%s): %s", fmt.value, type(outcome).__name__)
    return outcome_to_content(outcome)


def register(mcp: FastMCP, settings: Optional[RenderSettings] = None) -> None:
    """Register validateMermaid on a FastMCP server."""

    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION, structured_output=False)
    async def validate_mermaid_tool(
        diagram: str,
        format: Literal["svg", "png"] = "png",
    ):
        return await validate_mermaid(diagram, format, settings=settings)
