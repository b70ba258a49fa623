"""Normalized source text with line and offset bookkeeping.

Every span in the engine is a ``str`` index into :attr:`SourceText.text`.
Tree-sitter reports UTF-8 byte offsets, so they are converted here.
"""

from __future__ import annotations

from bisect import bisect_right

_BOM = "\ufeff"


def normalize_newlines(text: str) -> str:
    """Unify line endings to ``\\n`` and drop a leading byte order mark."""
    if text.startswith(_BOM):
        text = text[len(_BOM) :]
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_chunks(text: str, max_lines: int | None) -> list[str]:
    """Split normalized text into consecutive chunks of at most ``max_lines`` lines."""
    if max_lines is None:
        return [text]
    if max_lines < 1:
        raise ValueError("max_lines must be at least 1")
    lines = text.split("\n")
    return [
        "\n".join(lines[i : i + max_lines]) for i in range(0, len(lines), max_lines)
    ]


class SourceText:
    """Immutable view of one chunk of source code."""

    def __init__(self, text: str):
        self.text = normalize_newlines(text)
        self.data = self.text.encode("utf-8", errors="surrogatepass")
        self.lines = self.text.split("\n")

        starts = [0]
        for line in self.lines[:-1]:
            starts.append(starts[-1] + len(line) + 1)
        self.line_starts = starts

        # Offset tables are only needed once a character is wider than a byte
        self._byte_to_char: list[int] | None = None
        self._char_to_byte: list[int] | None = None
        if len(self.data) != len(self.text):
            byte_to_char: list[int] = []
            char_to_byte = [0]
            for i, ch in enumerate(self.text):
                width = len(ch.encode("utf-8", errors="surrogatepass"))
                byte_to_char.extend([i] * width)
                char_to_byte.append(char_to_byte[-1] + width)
            byte_to_char.append(len(self.text))
            self._byte_to_char = byte_to_char
            self._char_to_byte = char_to_byte

    def __len__(self) -> int:
        return len(self.text)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def char_offset(self, byte_offset: int) -> int:
        if self._byte_to_char is None:
            return byte_offset
        return self._byte_to_char[byte_offset]

    def byte_offset(self, char_offset: int) -> int:
        if self._char_to_byte is None:
            return char_offset
        return self._char_to_byte[char_offset]

    def line_of(self, offset: int) -> int:
        """Index of the line containing character ``offset``."""
        return bisect_right(self.line_starts, offset) - 1

    def slice_bytes(self, start_byte: int, end_byte: int) -> str:
        return self.data[start_byte:end_byte].decode("utf-8", errors="replace")
