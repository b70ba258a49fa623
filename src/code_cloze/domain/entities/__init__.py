"""Domain entities."""

from .cloze import (
    Batch,
    BlankCandidate,
    ColorToken,
    GenerationResult,
    RenderedCard,
    Segment,
    SourceSpan,
    TokenRun,
)

__all__ = [
    "Batch",
    "BlankCandidate",
    "ColorToken",
    "GenerationResult",
    "RenderedCard",
    "Segment",
    "SourceSpan",
    "TokenRun",
]
