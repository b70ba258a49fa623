"""Turn Pygments output into a per-line grid of colored tokens."""

from __future__ import annotations

from code_cloze.cloze.source_text import SourceText
from code_cloze.cloze.toolkit import DEFAULT_COLOR, LanguageToolkit
from code_cloze.domain.entities.cloze import ColorToken
from code_cloze.exceptions import ParseError
from code_cloze.utils.logging import get_logger

logger = get_logger(__name__)

TokenGrid = list[list[ColorToken]]


def plain_grid(source: SourceText, color: str = DEFAULT_COLOR) -> TokenGrid:
    """One uncolored token per non-empty line."""
    return [[ColorToken(line, color)] if line else [] for line in source.lines]


def highlight_lines(source: SourceText, toolkit: LanguageToolkit) -> TokenGrid:
    """Tokens for each source line; a line's tokens concatenate to the line.

    Tokens carry no offsets. Callers accumulate token lengths from
    ``source.line_starts`` to place them.
    """
    try:
        lexer = toolkit.lexer
    except ParseError as e:
        logger.warning("highlighting_unavailable", error=str(e))
        return plain_grid(source)

    grid: TokenGrid = [[]]
    for ttype, value in lexer.get_tokens(source.text):
        color = toolkit.color_for(ttype)
        for i, part in enumerate(value.split("\n")):
            if i > 0:
                grid.append([])
            if part:
                grid[-1].append(ColorToken(part, color))

    if len(grid) != source.line_count or any(
        "".join(t.text for t in row) != line
        for row, line in zip(grid, source.lines, strict=False)
    ):
        logger.warning(
            "highlight_grid_mismatch",
            grid_lines=len(grid),
            source_lines=source.line_count,
        )
        return plain_grid(source)
    return grid
