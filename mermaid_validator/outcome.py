"""Render request format and the three-way render outcome.

A render produces exactly one of:

- ``Valid``: the engine accepted the diagram and produced an image.
- ``Invalid``: the engine ran and rejected the diagram (nonzero exit).
- ``SystemFailure``: the engine could not be run or its pipes failed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


INVALID_SUMMARY = "Mermaid diagram is invalid"


class OutputFormat(Enum):
    """Image formats mermaid-cli can write to stdout."""
    PNG = "png"
    SVG = "svg"

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]

    @classmethod
    def parse(cls, value: Union[str, "OutputFormat", None]) -> "OutputFormat":
        """Parse a format selector, defaulting to PNG when absent.

        Raises:
            ValueError: For anything other than "png" or "svg".
        """
        if value is None:
            return cls.PNG
        if isinstance(value, cls):
            return value
        return cls(value)


_MIME_TYPES = {
    OutputFormat.PNG: "image/png",
    OutputFormat.SVG: "image/svg+xml",
}


@dataclass(frozen=True)
class Valid:
    """Diagram accepted; ``image`` is the complete engine output."""
    image: bytes
    mime_type: str


@dataclass(frozen=True)
class Invalid:
    """Diagram rejected by the engine.

    ``detail`` carries the engine's stderr and is None when it wrote nothing.
    """
    main_error: str
    detail: Optional[str] = None
    summary: str = INVALID_SUMMARY


@dataclass(frozen=True)
class SystemFailure:
    """Infrastructure failure unrelated to the diagram content."""
    message: str


RenderOutcome = Union[Valid, Invalid, SystemFailure]
