"""Merge highlighter tokens with blank candidates.

The highlighter and the parser split the same text independently. For
each token we clip the candidates that intersect it to the token's own
coordinates and cut the token's text at those points. The source string
is only ever sliced, never rewritten, so offsets cannot drift.
"""

from __future__ import annotations

import html
from bisect import bisect_left, bisect_right
from collections.abc import Mapping, Sequence

from code_cloze.domain.entities.cloze import (
    BlankCandidate,
    ColorToken,
    Segment,
    TokenRun,
)


class CandidateIndex:
    """Sorted, non-overlapping candidates with range lookup."""

    def __init__(self, candidates: Sequence[BlankCandidate]):
        self._candidates = sorted(candidates, key=lambda c: c.start)
        self._starts = [c.start for c in self._candidates]
        # Ends are sorted too because candidates never overlap
        self._ends = [c.end for c in self._candidates]

    def __len__(self) -> int:
        return len(self._candidates)

    def overlapping(self, start: int, end: int) -> Sequence[BlankCandidate]:
        """Candidates with ``candidate.start < end and candidate.end > start``."""
        lo = bisect_right(self._ends, start)
        hi = bisect_left(self._starts, end)
        return self._candidates[lo:hi]


def reconcile_line(
    tokens: Sequence[ColorToken],
    line_start: int,
    index: CandidateIndex,
    active: Mapping[int, int],
) -> list[TokenRun]:
    """Split one line's tokens into plain and blank segments.

    Args:
        tokens: The line's highlighter tokens
        line_start: Absolute offset of the line's first character
        index: All candidates of the chunk
        active: global id -> local cloze number for blanks on this card

    Returns:
        One run per token, keeping the token's color
    """
    runs: list[TokenRun] = []
    tok_start = line_start
    for token in tokens:
        tok_end = tok_start + len(token.text)
        segments: list[Segment] = []
        cursor = 0

        for candidate in index.overlapping(tok_start, tok_end):
            local_id = active.get(candidate.global_id)
            if local_id is None:
                # Out-of-batch blanks stay visible as plain text
                continue
            local_start = max(candidate.start, tok_start) - tok_start
            local_end = min(candidate.end, tok_end) - tok_start
            if local_start > cursor:
                segments.append(Segment(token.text[cursor:local_start]))
            segments.append(Segment(token.text[local_start:local_end], local_id))
            cursor = local_end

        if cursor < len(token.text):
            segments.append(Segment(token.text[cursor:]))

        runs.append(TokenRun(token.color, tuple(segments)))
        tok_start = tok_end
    return runs


def escape_text(text: str) -> str:
    """HTML-escape text; braces become entities so code never forms cloze syntax."""
    return html.escape(text, quote=True).replace("{", "&#123;").replace("}", "&#125;")


def escape_cloze_text(text: str) -> str:
    """Escape blank content; ``:`` too, since ``::`` starts a cloze hint."""
    return escape_text(text).replace(":", "&#58;")


def render_segment(segment: Segment) -> str:
    if segment.cloze_id is None:
        return escape_text(segment.text)
    return f"{{{{c{segment.cloze_id}::{escape_cloze_text(segment.text)}}}}}"


def render_runs(runs: Sequence[TokenRun]) -> str:
    return "".join(
        f'<span style="color: {run.color}">'
        f"{''.join(render_segment(s) for s in run.segments)}</span>"
        for run in runs
    )


def render_line(
    tokens: Sequence[ColorToken],
    line_start: int,
    index: CandidateIndex,
    active: Mapping[int, int],
) -> str:
    return render_runs(reconcile_line(tokens, line_start, index, active))
