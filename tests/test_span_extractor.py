"""Tests for blank candidate extraction from the parse tree."""

from code_cloze.cloze.source_text import SourceText
from code_cloze.cloze.span_extractor import extract_candidates, parse_source


def candidate_texts(code: str, toolkit) -> list[str]:
    source = SourceText(code)
    tree = parse_source(source, toolkit)
    return [c.text(source.text) for c in extract_candidates(tree, source)]


class TestExtractCandidates:
    """Which nodes become blanks."""

    def test_declaration(self, toolkit) -> None:
        assert candidate_texts("const x = 1;", toolkit) == ["x", "1"]

    def test_imports_are_excluded(self, toolkit) -> None:
        code = "import { a } from 'm';\na();"
        source = SourceText(code)
        candidates = extract_candidates(parse_source(source, toolkit), source)

        assert [c.text(code) for c in candidates] == ["a"]
        assert source.line_of(candidates[0].start) == 1

    def test_import_and_call_on_one_line(self, toolkit) -> None:
        code = "import {a} from 'm'; a();"
        source = SourceText(code)
        candidates = extract_candidates(parse_source(source, toolkit), source)

        assert [c.text(code) for c in candidates] == ["a"]
        assert candidates[0].start == 21

    def test_critical_operators(self, toolkit) -> None:
        texts = candidate_texts("if (a && !b) { x %= 2; }", toolkit)

        assert texts == ["a", "&&", "!", "b", "x", "%=", "2"]

    def test_comparison_operators(self, toolkit) -> None:
        assert candidate_texts("ok = a === b;", toolkit) == ["ok", "a", "===", "b"]
        assert candidate_texts("ok = a <= b;", toolkit) == ["ok", "a", "<=", "b"]

    def test_arithmetic_operators_are_not_blanked(self, toolkit) -> None:
        assert candidate_texts("let y = a + b * c;", toolkit) == ["y", "a", "b", "c"]

    def test_string_literal_is_one_blank(self, toolkit) -> None:
        assert candidate_texts('const s = "hi there";', toolkit) == ["s", '"hi there"']

    def test_booleans(self, toolkit) -> None:
        assert candidate_texts("let ok = true;", toolkit) == ["ok", "true"]

    def test_member_access(self, toolkit) -> None:
        assert candidate_texts("console.log(x);", toolkit) == ["console", "log", "x"]

    def test_type_keywords_are_not_blanked(self, toolkit) -> None:
        texts = candidate_texts("let n: number = 1;", toolkit)

        assert texts == ["n", "1"]

    def test_template_substitution(self, toolkit) -> None:
        assert candidate_texts("const t = `v=${v}`;", toolkit) == ["t", "v"]

    def test_non_ascii_offsets(self, toolkit) -> None:
        texts = candidate_texts('const s = "héllo"; const n = 1;', toolkit)

        assert texts == ["s", '"héllo"', "n", "1"]


class TestCandidateInvariants:
    """Ordering, numbering and disjointness."""

    def test_ids_follow_source_order(self, toolkit, class_source) -> None:
        source = SourceText(class_source)
        candidates = extract_candidates(parse_source(source, toolkit), source)

        assert [c.global_id for c in candidates] == list(range(1, len(candidates) + 1))
        starts = [c.start for c in candidates]
        assert starts == sorted(starts)

    def test_candidates_do_not_overlap(self, toolkit, class_source) -> None:
        source = SourceText(class_source)
        candidates = extract_candidates(parse_source(source, toolkit), source)

        for left, right in zip(candidates, candidates[1:]):
            assert left.end <= right.start

    def test_spans_are_inside_source(self, toolkit, class_source) -> None:
        source = SourceText(class_source)
        candidates = extract_candidates(parse_source(source, toolkit), source)

        assert candidates
        assert all(0 <= c.start < c.end <= len(source) for c in candidates)

    def test_no_tree_yields_no_candidates(self) -> None:
        assert extract_candidates(None, SourceText("const x = 1;")) == []

    def test_empty_source(self, toolkit) -> None:
        assert candidate_texts("", toolkit) == []

    def test_syntax_errors_still_produce_candidates(self, toolkit) -> None:
        texts = candidate_texts("const x = ;\nlet y = 2;", toolkit)

        assert "y" in texts
        assert "2" in texts
