"""Pick the source ranges that become cloze blanks.

Candidates are identifiers, string/number/boolean literals, the operator of
a comparison, logical, modulo or compound-assignment expression, and the
``!`` of a logical negation. Nothing inside an import statement is blanked,
so every card keeps the same imports as context.
"""

from __future__ import annotations

from tree_sitter import Node, Tree

from code_cloze.cloze.source_text import SourceText
from code_cloze.cloze.toolkit import LanguageToolkit
from code_cloze.domain.entities.cloze import BlankCandidate, SourceSpan
from code_cloze.utils.logging import get_logger

logger = get_logger(__name__)

IDENTIFIER_KINDS = frozenset(
    {
        "identifier",
        "property_identifier",
        "type_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "private_property_identifier",
        "statement_identifier",
    }
)

LITERAL_KINDS = frozenset({"string", "number", "true", "false"})

CRITICAL_OPERATORS = frozenset(
    {"&&", "||", "??", "==", "===", "!=", "!==", "<", ">", "<=", ">=", "%"}
)

# Every operator of these expressions is critical
COMPOUND_ASSIGNMENT_KINDS = frozenset({"augmented_assignment_expression"})

IMPORT_KINDS = frozenset({"import_statement"})


def _operator_child(node: Node) -> Node | None:
    """Operator token of ``node`` when it should be blanked."""
    if node.type == "binary_expression":
        operator = node.child_by_field_name("operator")
        if operator is not None and operator.type in CRITICAL_OPERATORS:
            return operator
    elif node.type in COMPOUND_ASSIGNMENT_KINDS:
        return node.child_by_field_name("operator")
    elif node.type == "unary_expression":
        operator = node.child_by_field_name("operator")
        if operator is not None and operator.type == "!":
            return operator
    return None


def _collect_nodes(root: Node) -> list[Node]:
    found: list[Node] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in IMPORT_KINDS:
            continue
        # Keywords such as the `string` type share names with literal kinds
        if node.is_named and (
            node.type in IDENTIFIER_KINDS or node.type in LITERAL_KINDS
        ):
            found.append(node)
            # Quotes and fragments of a string are never separate blanks
            continue
        operator = _operator_child(node)
        if operator is not None:
            found.append(operator)
        stack.extend(reversed(node.children))
    return found


def extract_candidates(tree: Tree | None, source: SourceText) -> list[BlankCandidate]:
    """Blank candidates ordered by start offset, numbered from 1."""
    if tree is None:
        return []

    raw: list[tuple[int, int, str]] = []
    for node in _collect_nodes(tree.root_node):
        start = source.char_offset(node.start_byte)
        end = source.char_offset(node.end_byte)
        # Error recovery inserts zero-width MISSING nodes
        if end > start:
            raw.append((start, end, node.type))

    # Traversal order is not trusted; ids follow source order
    raw.sort(key=lambda item: (item[0], item[1]))

    candidates: list[BlankCandidate] = []
    last_end = 0
    for start, end, kind in raw:
        if start < last_end:
            logger.debug("overlapping_candidate_dropped", start=start, end=end, kind=kind)
            continue
        candidates.append(
            BlankCandidate(
                span=SourceSpan(start, end),
                global_id=len(candidates) + 1,
                kind=kind,
            )
        )
        last_end = end

    logger.debug("candidates_extracted", count=len(candidates))
    return candidates


def parse_source(source: SourceText, toolkit: LanguageToolkit) -> Tree | None:
    """Parse a chunk as a fragment; returns None if no tree could be built."""
    try:
        tree = toolkit.parse(source)
    except Exception as e:
        logger.warning(
            "span_extraction_failed",
            language=toolkit.language,
            error=str(e),
            error_type=type(e).__name__,
        )
        return None
    if tree.root_node.has_error:
        logger.warning("source_has_syntax_errors", language=toolkit.language)
    return tree
