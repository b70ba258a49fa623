"""Tests for per-line syntax highlighting."""

from code_cloze.cloze.highlighter import highlight_lines, plain_grid
from code_cloze.cloze.source_text import SourceText
from code_cloze.cloze.toolkit import DEFAULT_COLOR, LanguageToolkit

SAMPLE = (
    "\n"
    "/* a block comment\n"
    "   over two lines */\n"
    "const greeting = `hi\n"
    "there`;\n"
    "\n"
    "if (a && b) {\n"
    "\tconsole.log('x');\n"
    "}\n"
)


class TestHighlightLines:
    """Token grid shape and coloring."""

    def test_tokens_concatenate_to_lines(self, toolkit) -> None:
        source = SourceText(SAMPLE)
        grid = highlight_lines(source, toolkit)

        assert len(grid) == source.line_count
        for row, line in zip(grid, source.lines):
            assert "".join(t.text for t in row) == line

    def test_tokens_never_contain_newlines(self, toolkit) -> None:
        grid = highlight_lines(SourceText(SAMPLE), toolkit)

        assert all("\n" not in t.text for row in grid for t in row)

    def test_colors_are_hex(self, toolkit) -> None:
        grid = highlight_lines(SourceText("const x = 'a';"), toolkit)

        colors = {t.color for row in grid for t in row}
        assert colors
        assert all(c.startswith("#") and len(c) == 7 for c in colors)
        # A keyword and a string do not share a color
        assert len(colors) > 1

    def test_empty_source(self, toolkit) -> None:
        assert highlight_lines(SourceText(""), toolkit) == [[]]

    def test_unknown_lexer_falls_back_to_plain(self) -> None:
        toolkit = LanguageToolkit("no-such-language")
        source = SourceText("a\nb")

        assert highlight_lines(source, toolkit) == plain_grid(source)


class TestPlainGrid:
    def test_one_token_per_line(self) -> None:
        grid = plain_grid(SourceText("ab\n\ncd"))

        assert [[t.text for t in row] for row in grid] == [["ab"], [], ["cd"]]
        assert all(t.color == DEFAULT_COLOR for row in grid for t in row)
