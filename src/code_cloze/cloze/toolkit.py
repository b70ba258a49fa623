"""Parser and lexer handle shared by the synthesis components."""

from __future__ import annotations

import threading
from typing import Any

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.style import StyleMeta
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound
from tree_sitter import Parser, Tree
from tree_sitter_language_pack import get_parser

from code_cloze.cloze.source_text import SourceText
from code_cloze.exceptions import ParseError
from code_cloze.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_COLOR = "#d4d4d4"

# tree-sitter grammar name -> Pygments lexer alias
_LEXER_ALIASES = {
    "typescript": "typescript",
    "tsx": "typescript",
    "javascript": "javascript",
}


class LanguageToolkit:
    """Owns the tree-sitter parser, Pygments lexer and color style for one language.

    The parser and lexer are created on first use, at most once, and
    reused for every chunk the toolkit processes.
    """

    def __init__(self, language: str = "typescript", style: str = "monokai"):
        self.language = language
        self.style_name = style
        self._init_lock = threading.Lock()
        self._parse_lock = threading.Lock()
        self._parser: Parser | None = None
        self._lexer: Lexer | None = None
        self._style: StyleMeta | None = None
        self._colors: dict[Any, str] = {}

    @property
    def parser(self) -> Parser:
        if self._parser is None:
            with self._init_lock:
                if self._parser is None:
                    try:
                        self._parser = get_parser(self.language)  # type: ignore[arg-type]
                    except Exception as e:
                        msg = f"No tree-sitter grammar for {self.language!r}"
                        raise ParseError(msg, context={"language": self.language}) from e
                    logger.debug("parser_initialized", language=self.language)
        return self._parser

    @property
    def lexer(self) -> Lexer:
        if self._lexer is None:
            with self._init_lock:
                if self._lexer is None:
                    alias = _LEXER_ALIASES.get(self.language, self.language)
                    try:
                        # Keep leading/trailing newlines so tokens line up with the source
                        self._lexer = get_lexer_by_name(
                            alias, stripnl=False, stripall=False, ensurenl=False
                        )
                    except ClassNotFound as e:
                        msg = f"No Pygments lexer for {self.language!r}"
                        raise ParseError(msg, context={"language": self.language}) from e
                    logger.debug("lexer_initialized", lexer=alias)
        return self._lexer

    @property
    def style(self) -> StyleMeta:
        if self._style is None:
            with self._init_lock:
                if self._style is None:
                    self._style = get_style_by_name(self.style_name)
        return self._style

    def parse(self, source: SourceText) -> Tree:
        """Parse a chunk; tree-sitter marks bad syntax with ERROR nodes instead of failing."""
        parser = self.parser
        with self._parse_lock:
            return parser.parse(source.data)

    def color_for(self, ttype: Any) -> str:
        """Foreground color for a token type, inherited from its nearest styled parent."""
        cached = self._colors.get(ttype)
        if cached is not None:
            return cached

        style = self.style
        lookup: Any = ttype
        while not style.styles_token(lookup) and lookup.parent is not None:
            lookup = lookup.parent
        color = ""
        if style.styles_token(lookup):
            color = style.style_for_token(lookup).get("color") or ""
        resolved = f"#{color}" if color else DEFAULT_COLOR
        self._colors[ttype] = resolved
        return resolved
