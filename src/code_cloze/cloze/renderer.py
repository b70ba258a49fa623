"""Render one batch of blanks as the ``Text`` field of a cloze note."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from code_cloze.cloze.highlighter import TokenGrid
from code_cloze.cloze.reconciler import CandidateIndex, escape_text, render_line
from code_cloze.cloze.scope_resolver import ScopeResolver
from code_cloze.cloze.source_text import SourceText
from code_cloze.domain.entities.cloze import Batch, BlankCandidate

CONTAINER_STYLE = (
    "background-color: #1e1e1e; color: #d4d4d4; padding: 20px; "
    "font-family: Consolas, 'Courier New', monospace; font-size: 14px; "
    "line-height: 1.5; border-radius: 5px; text-align: left;"
)
PRE_STYLE = "margin: 0; white-space: pre-wrap;"


@dataclass(frozen=True)
class CardHeader:
    """What the header block of a card shows."""

    title: str = ""
    deck_name: str = ""
    tags: tuple[str, ...] = field(default_factory=tuple)
    position: int = 1
    total: int = 1

    @property
    def display_title(self) -> str:
        if self.total <= 1:
            return self.title
        if self.title:
            return f"{self.title} ({self.position}/{self.total})"
        return f"Part {self.position}/{self.total}"

    def render(self) -> str:
        parts = ['<div class="code-cloze-header">']
        if self.display_title:
            parts.append(f'<div class="title">{escape_text(self.display_title)}</div>')
        if self.deck_name:
            parts.append(f'<div class="deck">{escape_text(self.deck_name)}</div>')
        if self.tags:
            tag_list = " ".join(f"#{escape_text(t)}" for t in self.tags)
            parts.append(f'<div class="tags">{tag_list}</div>')
        parts.append("</div>")
        return "".join(parts)


class CardRenderer:
    """Render cards for one chunk.

    Every card shows the chunk's code with the same coloring; only the
    batch decides which candidates are blanks. Rendering keeps no state
    between calls.
    """

    def __init__(
        self,
        source: SourceText,
        grid: TokenGrid,
        candidates: Sequence[BlankCandidate],
        resolver: ScopeResolver | None = None,
        context_lines: int | None = None,
    ):
        if len(grid) != source.line_count:
            raise ValueError("token grid does not match source lines")
        self._source = source
        self._grid = grid
        self._index = CandidateIndex(candidates)
        self._resolver = resolver
        self._context_lines = context_lines

    def start_line(self, batch: Batch) -> int | None:
        if batch.is_empty:
            return None
        return self._source.line_of(batch.candidates[0].start)

    def line_window(self, batch: Batch) -> tuple[int, int]:
        """Inclusive range of lines shown for ``batch``."""
        last_line = self._source.line_count - 1
        if self._context_lines is None or batch.is_empty:
            return 0, last_line
        first = self._source.line_of(batch.candidates[0].start)
        last = self._source.line_of(batch.candidates[-1].end - 1)
        return max(0, first - self._context_lines), last

    def render_body(self, batch: Batch) -> str:
        first, last = self.line_window(batch)
        lines = [
            render_line(
                self._grid[i], self._source.line_starts[i], self._index, batch.local_ids
            )
            for i in range(first, last + 1)
        ]
        return "\n".join(lines)

    def render(self, batch: Batch, header: CardHeader | None = None) -> str:
        header = header or CardHeader()
        parts = [f'<div class="code-cloze" style="{CONTAINER_STYLE}">', header.render()]

        line = self.start_line(batch)
        breadcrumb = (
            self._resolver.resolve(line)
            if self._resolver is not None and line is not None
            else None
        )
        if breadcrumb:
            parts.append(f'<div class="code-cloze-scope">{escape_text(breadcrumb)}</div>')

        parts.append(f'<pre style="{PRE_STYLE}">{self.render_body(batch)}</pre>')
        parts.append("</div>")
        return "\n".join(parts)
