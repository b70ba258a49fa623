"""Derive a "current scope" breadcrumb for a source line."""

from __future__ import annotations

from tree_sitter import Node, Tree

from code_cloze.cloze.source_text import SourceText
from code_cloze.utils.logging import get_logger

logger = get_logger(__name__)

SCOPE_KINDS = frozenset(
    {
        "class_declaration",
        "abstract_class_declaration",
        "class",
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "method_definition",
        "interface_declaration",
    }
)

BREADCRUMB_SEPARATOR = " > "


class ScopeResolver:
    """Find the named structures enclosing a line.

    Resolution is cosmetic: any failure yields no breadcrumb instead of
    an error.
    """

    def __init__(
        self,
        tree: Tree | None,
        source: SourceText,
        depth: int | None = None,
        label_width: int = 40,
    ):
        if depth is not None and depth < 1:
            raise ValueError("depth must be at least 1 when set")
        self._tree = tree
        self._source = source
        self._depth = depth
        self._label_width = label_width

    def _label(self, node: Node) -> str:
        name = node.child_by_field_name("name")
        if name is not None:
            return self._source.slice_bytes(name.start_byte, name.end_byte)
        first_line = (
            self._source.slice_bytes(node.start_byte, node.end_byte)
            .split("\n", 1)[0]
            .strip()
        )
        if len(first_line) > self._label_width:
            return first_line[: self._label_width - 3].rstrip() + "..."
        return first_line

    def labels(self, line: int) -> list[str]:
        """Scope labels for ``line``, outermost first."""
        if self._tree is None or not 0 <= line < self._source.line_count:
            return []
        try:
            offset = self._source.byte_offset(self._source.line_starts[line])
            node: Node | None = self._tree.root_node.descendant_for_byte_range(
                offset, offset
            )
            chain: list[str] = []
            while node is not None:
                if node.is_named and node.type in SCOPE_KINDS:
                    chain.append(self._label(node))
                node = node.parent
        except Exception as e:
            logger.debug("scope_resolution_failed", line=line, error=str(e))
            return []

        chain.reverse()
        if self._depth is not None:
            chain = chain[-self._depth :]
        return chain

    def resolve(self, line: int) -> str | None:
        """Breadcrumb such as ``"Greeter > greet"``, or None at top level."""
        labels = self.labels(line)
        if not labels:
            return None
        return BREADCRUMB_SEPARATOR.join(labels)
