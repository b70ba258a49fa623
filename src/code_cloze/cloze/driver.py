"""Orchestrate cloze synthesis and deliver the cards to Anki."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from code_cloze.anki.client import AnkiClient
from code_cloze.cloze.batcher import batch_candidates
from code_cloze.cloze.highlighter import highlight_lines
from code_cloze.cloze.renderer import CardHeader, CardRenderer
from code_cloze.cloze.scope_resolver import ScopeResolver
from code_cloze.cloze.source_text import SourceText, normalize_newlines, split_chunks
from code_cloze.cloze.span_extractor import extract_candidates, parse_source
from code_cloze.cloze.toolkit import LanguageToolkit
from code_cloze.config_loader import get_config
from code_cloze.config_settings import DEFAULT_NOTE_TYPE, Config
from code_cloze.domain.entities.cloze import Batch, GenerationResult, RenderedCard
from code_cloze.domain.interfaces.anki_client import IAnkiClient
from code_cloze.utils.logging import get_logger

logger = get_logger(__name__)

CONNECTION_ERROR_MESSAGE = (
    "Could not connect to AnkiConnect. "
    "Make sure Anki is running and AnkiConnect is installed."
)


class SynthesisState(str, Enum):
    """Lifecycle of a synthesis run."""

    INIT = "init"
    CONNECTED = "connected"
    MODEL_ENSURED = "model_ensured"
    DISPATCHING = "dispatching"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class SynthesisOptions:
    """Rendering and batching policy for a run."""

    max_blanks_per_card: int = 20
    max_lines_per_chunk: int | None = None
    context_lines: int | None = None
    breadcrumb_depth: int | None = None
    label_width: int = 40

    @classmethod
    def from_config(cls, config: Config) -> SynthesisOptions:
        return cls(
            max_blanks_per_card=config.max_blanks_per_card,
            max_lines_per_chunk=config.max_lines_per_chunk,
            context_lines=config.context_lines,
            breadcrumb_depth=config.breadcrumb_depth,
            label_width=config.label_width,
        )


def build_cards(
    source_text: str,
    toolkit: LanguageToolkit,
    options: SynthesisOptions | None = None,
    title: str = "",
    deck_name: str = "",
    tags: Sequence[str] = (),
) -> list[RenderedCard]:
    """Render every card for ``source_text`` without touching Anki."""
    options = options or SynthesisOptions()
    chunks = list(
        enumerate(split_chunks(normalize_newlines(source_text), options.max_lines_per_chunk))
    )
    # Whitespace-only chunks (e.g. after a trailing newline) would be empty cards
    chunks = [(i, c) for i, c in chunks if c.strip()] or chunks[:1]

    planned: list[tuple[int, CardRenderer, Batch]] = []
    for chunk_index, chunk in chunks:
        source = SourceText(chunk)
        tree = parse_source(source, toolkit)
        candidates = extract_candidates(tree, source)
        grid = highlight_lines(source, toolkit)
        resolver = ScopeResolver(
            tree,
            source,
            depth=options.breadcrumb_depth,
            label_width=options.label_width,
        )
        renderer = CardRenderer(
            source, grid, candidates, resolver, context_lines=options.context_lines
        )
        batches = batch_candidates(candidates, options.max_blanks_per_card)
        if not batches:
            # Nothing to blank: fall back to a single plain card
            logger.warning("no_blank_candidates", chunk=chunk_index)
            batches = [Batch(index=0, candidates=())]
        logger.debug(
            "chunk_planned",
            chunk=chunk_index,
            lines=source.line_count,
            candidates=len(candidates),
            batches=len(batches),
        )
        planned.extend((chunk_index, renderer, b) for b in batches)

    total = len(planned)
    cards: list[RenderedCard] = []
    for position, (chunk_index, renderer, batch) in enumerate(planned, start=1):
        header = CardHeader(
            title=title,
            deck_name=deck_name,
            tags=tuple(tags),
            position=position,
            total=total,
        )
        cards.append(
            RenderedCard(
                title=header.display_title,
                text=renderer.render(batch, header),
                blank_count=len(batch),
                chunk_index=chunk_index,
                batch_index=batch.index,
            )
        )
    return cards


class SynthesisDriver:
    """Run one source file through synthesis and submit the cards.

    The backend is probed before any parsing work. Deck and note type
    setup finish before the first note is sent, and notes are sent one
    at a time in card order.
    """

    def __init__(
        self,
        client: IAnkiClient,
        toolkit: LanguageToolkit,
        options: SynthesisOptions | None = None,
        note_type: str = DEFAULT_NOTE_TYPE,
    ):
        self.client = client
        self.toolkit = toolkit
        self.options = options or SynthesisOptions()
        self.note_type = note_type
        self.state = SynthesisState.INIT

    def _transition(self, state: SynthesisState) -> None:
        logger.debug("synthesis_state", previous=self.state.value, state=state.value)
        self.state = state

    def run(
        self,
        source_text: str,
        title: str,
        deck_name: str,
        tags: Sequence[str],
    ) -> GenerationResult:
        self.state = SynthesisState.INIT
        logger.info("generation_started", title=title, deck=deck_name, tags=list(tags))

        version = self.client.check_connection()
        if version is None:
            self._transition(SynthesisState.FAILED)
            logger.error("generation_failed", error=CONNECTION_ERROR_MESSAGE)
            return GenerationResult(success=False, message=CONNECTION_ERROR_MESSAGE)
        self._transition(SynthesisState.CONNECTED)

        if not self.client.ensure_deck(deck_name):
            logger.warning("deck_setup_failed", deck=deck_name)
        if not self.client.ensure_note_type(self.note_type):
            logger.warning("note_type_setup_failed", model=self.note_type)
        self._transition(SynthesisState.MODEL_ENSURED)

        cards = build_cards(
            source_text,
            self.toolkit,
            self.options,
            title=title,
            deck_name=deck_name,
            tags=tags,
        )

        self._transition(SynthesisState.DISPATCHING)
        added_count = 0
        for card in cards:
            note_id = self.client.add_note(
                deck_name, self.note_type, card.text, list(tags)
            )
            if note_id is None:
                logger.warning(
                    "card_submission_failed",
                    card=card.title,
                    chunk=card.chunk_index,
                    batch=card.batch_index,
                )
                continue
            added_count += 1

        self._transition(SynthesisState.DONE)
        logger.info(
            "generation_completed", added_count=added_count, total_cards=len(cards)
        )
        return GenerationResult(
            success=True, added_count=added_count, total_cards=len(cards)
        )


def generate_cards(
    source_text: str,
    title: str = "",
    deck_name: str | None = None,
    tags: Sequence[str] | None = None,
    *,
    client: IAnkiClient | None = None,
    config: Config | None = None,
    toolkit: LanguageToolkit | None = None,
) -> GenerationResult:
    """Turn ``source_text`` into cloze notes in Anki.

    Always returns a result; backend failures are reported through it.

    Args:
        source_text: Source code to convert
        title: Card title shown in the header
        deck_name: Target deck (configured deck when empty)
        tags: Note tags (configured default tags when empty)
        client: Anki client to use (one is built from config when omitted)
        config: Settings (the process-wide config when omitted)
        toolkit: Parser/lexer handle (one is built from config when omitted)
    """
    config = config or get_config()
    deck = deck_name or config.anki_deck_name
    tag_list = [t for t in (tags or []) if t] or list(config.default_tags)

    owns_client = client is None
    anki_client: IAnkiClient = client or AnkiClient.from_config(config)
    driver = SynthesisDriver(
        anki_client,
        toolkit or LanguageToolkit(config.language, config.highlight_style),
        SynthesisOptions.from_config(config),
        note_type=config.anki_note_type,
    )
    try:
        return driver.run(source_text, title, deck, tag_list)
    except Exception as e:
        logger.exception("generation_failed", error=str(e), error_type=type(e).__name__)
        return GenerationResult(success=False, message=f"Card generation failed: {e}")
    finally:
        if owns_client:
            anki_client.close()


def update_note_type(client: IAnkiClient, model_name: str = DEFAULT_NOTE_TYPE) -> bool:
    """Push the current template and styling without generating cards."""
    if client.check_connection() is None:
        logger.error(
            "note_type_update_failed", model=model_name, error=CONNECTION_ERROR_MESSAGE
        )
        return False
    return client.ensure_note_type(model_name)
