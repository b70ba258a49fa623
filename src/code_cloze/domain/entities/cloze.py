"""Domain entities for cloze synthesis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Half-open ``[start, end)`` character range into normalized source."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.start >= self.end:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")


@dataclass(frozen=True, slots=True)
class BlankCandidate:
    """A source range that becomes a cloze blank.

    The covered text is not stored; it is always sliced from the source.
    """

    span: SourceSpan
    global_id: int
    kind: str = ""

    @property
    def start(self) -> int:
        return self.span.start

    @property
    def end(self) -> int:
        return self.span.end

    def text(self, source: str) -> str:
        return source[self.span.start : self.span.end]


@dataclass(frozen=True, slots=True)
class ColorToken:
    """One highlighter token on a single line."""

    text: str
    color: str


@dataclass(frozen=True)
class Batch:
    """Consecutive candidates rendered active on one card.

    ``local_ids`` maps each candidate's global id to its 1-based position
    within this batch.
    """

    index: int
    candidates: tuple[BlankCandidate, ...]
    local_ids: dict[int, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "local_ids",
            {c.global_id: i for i, c in enumerate(self.candidates, start=1)},
        )

    def __len__(self) -> int:
        return len(self.candidates)

    @property
    def is_empty(self) -> bool:
        return not self.candidates

    def local_id(self, global_id: int) -> int | None:
        return self.local_ids.get(global_id)


@dataclass(frozen=True, slots=True)
class Segment:
    """Piece of a token: plain text, or an active blank when ``cloze_id`` is set."""

    text: str
    cloze_id: int | None = None

    @property
    def is_blank(self) -> bool:
        return self.cloze_id is not None


@dataclass(frozen=True, slots=True)
class TokenRun:
    """A token's segments, all drawn in the token's color."""

    color: str
    segments: tuple[Segment, ...]

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.segments)


@dataclass(frozen=True)
class RenderedCard:
    """Markup for one note plus where it came from."""

    title: str
    text: str
    blank_count: int
    chunk_index: int = 0
    batch_index: int = 0


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one synthesis run."""

    success: bool
    added_count: int | None = None
    total_cards: int | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Front-end shape with camelCase keys; absent values are omitted."""
        payload: dict[str, Any] = {"success": self.success}
        if self.added_count is not None:
            payload["addedCount"] = self.added_count
        if self.total_cards is not None:
            payload["totalCards"] = self.total_cards
        if self.message is not None:
            payload["message"] = self.message
        return payload
