"""Cloze synthesis engine.

Turns source code into cloze cards: blank spans come from a tree-sitter
parse, colors from Pygments, and the two are reconciled token by token.
"""

from code_cloze.cloze.batcher import batch_candidates
from code_cloze.cloze.driver import (
    CONNECTION_ERROR_MESSAGE,
    SynthesisDriver,
    SynthesisOptions,
    SynthesisState,
    build_cards,
    generate_cards,
    update_note_type,
)
from code_cloze.cloze.highlighter import highlight_lines
from code_cloze.cloze.reconciler import CandidateIndex, reconcile_line, render_line
from code_cloze.cloze.renderer import CardHeader, CardRenderer
from code_cloze.cloze.scope_resolver import ScopeResolver
from code_cloze.cloze.source_text import SourceText
from code_cloze.cloze.span_extractor import extract_candidates, parse_source
from code_cloze.cloze.toolkit import LanguageToolkit

__all__ = [
    "CONNECTION_ERROR_MESSAGE",
    "CandidateIndex",
    "CardHeader",
    "CardRenderer",
    "LanguageToolkit",
    "ScopeResolver",
    "SourceText",
    "SynthesisDriver",
    "SynthesisOptions",
    "SynthesisState",
    "batch_candidates",
    "build_cards",
    "extract_candidates",
    "generate_cards",
    "highlight_lines",
    "parse_source",
    "reconcile_line",
    "render_line",
    "update_note_type",
]
