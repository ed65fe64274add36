"""
Tests for the replacement engine and its occurrence policy.
"""

import pytest

from fuzzyedit import apply_edit, replace_once_or_all
from fuzzyedit.core import engine
from fuzzyedit.core.config import EditSettings
from fuzzyedit.core.engine import build_pipeline
from fuzzyedit.core.errors import InvalidInputError, NotFoundOrAmbiguousError


class TestInputValidation:
    def test_empty_old_text(self):
        with pytest.raises(InvalidInputError, match="must not be empty"):
            apply_edit("document", "", "x")

    def test_identity_edit(self):
        with pytest.raises(InvalidInputError, match="must be different"):
            apply_edit("document", "doc", "doc")

    def test_identity_edit_rejected_even_when_text_is_absent(self):
        with pytest.raises(InvalidInputError):
            apply_edit("document", "missing", "missing")

    def test_validation_runs_before_matching(self):
        with pytest.raises(InvalidInputError):
            apply_edit("", "", "x", replace_all=True)

    def test_error_types(self):
        assert InvalidInputError.error_type == "invalid_input"
        assert NotFoundOrAmbiguousError.error_type == "not_found_or_ambiguous"


class TestExactMatching:
    def test_end_to_end_single(self):
        result = apply_edit("A\nB\nC\n", "B", "X")
        assert result.content == "A\nX\nC\n"
        assert result.matches == 1
        assert result.strategy == "simple"

    def test_unique_match_ignores_replace_all(self):
        doc = "alpha\nbeta\ngamma"
        once = apply_edit(doc, "beta", "BETA")
        every = apply_edit(doc, "beta", "BETA", replace_all=True)
        assert once.content == every.content == "alpha\nBETA\ngamma"
        assert once.matches == every.matches == 1

    def test_deletion(self):
        result = apply_edit("keep\ndrop\nkeep2", "drop\n", "")
        assert result.content == "keep\nkeep2"

    def test_whitespace_drift_keeps_surrounding_indentation(self):
        doc = "function f() {\n  return x;  \n}\n"
        result = apply_edit(doc, "return x;", "return y;")
        assert result.content == "function f() {\n  return y;  \n}\n"
        assert result.matches == 1

    def test_replace_once_or_all_tuple(self):
        assert replace_once_or_all("A\nB\nC\n", "B", "X") == ("A\nX\nC\n", 1)


class TestOccurrencePolicy:
    def test_ambiguous_without_replace_all(self):
        with pytest.raises(NotFoundOrAmbiguousError):
            apply_edit("x = 1\nx = 1\n", "x = 1", "x = 2")

    def test_not_found(self):
        with pytest.raises(NotFoundOrAmbiguousError, match="not found"):
            apply_edit("alpha\nbeta", "delta", "epsilon")

    def test_replace_all_end_to_end(self):
        result = apply_edit("foo foo foo", "foo", "bar", replace_all=True)
        assert result.content == "bar bar bar"
        assert result.matches == 3

    def test_replace_all_counts_every_occurrence(self):
        doc = "a\nTODO\nb\nTODO\nc TODO"
        result = apply_edit(doc, "TODO", "DONE", replace_all=True)
        assert result.matches == 3
        assert "TODO" not in result.content
        assert result.content == "a\nDONE\nb\nDONE\nc DONE"

    def test_overlapping_occurrences_are_ambiguous(self):
        with pytest.raises(NotFoundOrAmbiguousError):
            apply_edit("aaaa", "aaa", "b")

    def test_replace_all_uses_non_overlapping_count(self):
        result = apply_edit("aaaa", "aa", "b", replace_all=True)
        assert result.content == "bb"
        assert result.matches == 2

    def test_replace_all_with_fuzzy_candidate(self):
        doc = "a  b\nc\na  b\n"
        result = apply_edit(doc, "a b", "z", replace_all=True)
        assert result.content == "z\nc\nz\n"
        assert result.matches == 2
        assert result.strategy == "whitespace_normalized"

    def test_ambiguous_fuzzy_candidates_fail(self):
        doc = "  x = 1\n  x = 1\n"
        with pytest.raises(NotFoundOrAmbiguousError):
            apply_edit(doc, "\tx = 1", "x = 2")


class TestFuzzyStrategies:
    def test_line_trimmed(self):
        doc = "def f():\n    return x\n"
        result = apply_edit(doc, "  def f():\n  return x", "def g():\n    return y")
        assert result.content == "def g():\n    return y\n"
        assert result.strategy == "line_trimmed"

    def test_line_trimmed_preserves_other_lines(self):
        doc = "function f() {\n  return x;  \n}\n"
        result = apply_edit(doc, "   return x;", "  return y;")
        assert result.content == "function f() {\n  return y;\n}\n"
        assert result.strategy == "line_trimmed"

    def test_trailing_newline_line_replaced_without_blank_line(self):
        result = apply_edit("a\n  foo  \nb\n", "foo\n", "bar\n")
        assert result.content == "a\nbar\nb\n"
        assert result.strategy == "line_trimmed"

    def test_trailing_newline_block_replaced_without_blank_line(self):
        doc = "x\nstart\nmid\nend\ny\n"
        result = apply_edit(doc, "start\nmiddle\nend\n", "start\nNEW\nend\n")
        assert result.content == "x\nstart\nNEW\nend\ny\n"
        assert result.strategy == "block_anchor"

    def test_reindented_block(self):
        # Line trimming already absorbs a uniform indent shift, so the
        # indentation-flexible strategy is covered in test_replacers.py.
        doc = "class A:\n    def run(self):\n        return 1\n"
        result = apply_edit(doc, "def run(self):\n    return 1", "    def run(self):\n        return 2")
        assert result.content == "class A:\n    def run(self):\n        return 2\n"
        assert result.strategy == "line_trimmed"

    def test_block_anchor_single_candidate(self):
        doc = "def alpha():\n    x = compute(1)\n    return x\n\ndef beta():\n    pass\n"
        result = apply_edit(
            doc,
            "def alpha():\n    y = something_else(2)\n    return x",
            "def alpha():\n    return 0",
        )
        assert result.content == "def alpha():\n    return 0\n\ndef beta():\n    pass\n"
        assert result.strategy == "block_anchor"

    def test_block_anchor_picks_best_candidate(self):
        doc = "start\naaaa\nend\nstart\nbbbb\nend"
        result = apply_edit(doc, "start\nbbbc\nend", "REPLACED")
        assert result.content == "start\naaaa\nend\nREPLACED"
        assert result.strategy == "block_anchor"

    def test_block_anchor_below_threshold_fails(self):
        doc = "start\naaaa\nend\nstart\nbbbb\nend"
        with pytest.raises(NotFoundOrAmbiguousError):
            apply_edit(doc, "start\nzzzz\nend", "REPLACED")

    def test_lone_anchor_block_accepted_regardless_of_interior(self):
        # Matching first/last lines are enough when only one block has them.
        doc = "begin\ncompletely\ndifferent\ninterior\nfinish\n"
        result = apply_edit(doc, "begin\nxyz\nfinish", "gone")
        assert result.content == "gone\n"
        assert result.strategy == "block_anchor"

    def test_whitespace_normalized_line(self):
        doc = "x  =   compute( a,  b )\nprint(x)\n"
        result = apply_edit(doc, "x = compute( a, b )", "x = compute(a, b)")
        assert result.content == "x = compute(a, b)\nprint(x)\n"
        assert result.strategy == "whitespace_normalized"

    def test_whitespace_normalized_fragment(self):
        result = apply_edit("result = foo(a,   b) + 1", "foo(a, b)", "bar")
        assert result.content == "result = bar + 1"

    def test_escape_normalized(self):
        doc = "line1\nline2\n"
        result = apply_edit(doc, "line1\\nline2", "merged")
        assert result.content == "merged\n"
        assert result.strategy == "escape_normalized"

    def test_escape_normalized_quotes(self):
        doc = 'say("hello")\n'
        result = apply_edit(doc, 'say(\\"hello\\")', 'say("bye")')
        assert result.content == 'say("bye")\n'


class TestModes:
    def test_exact_mode_skips_fuzzy_strategies(self):
        with pytest.raises(NotFoundOrAmbiguousError):
            apply_edit("    return  x\n", "return x", "return y", mode="exact")

    def test_auto_mode_finds_fuzzy_match(self):
        result = apply_edit("    return  x\n", "return x", "return y", mode="auto")
        assert result.content == "return y\n"

    def test_exact_mode_still_matches_verbatim(self):
        result = apply_edit("a b c", "b", "B", mode="exact")
        assert result.content == "a B c"

    def test_mode_from_settings(self):
        settings = EditSettings(mode="exact")
        with pytest.raises(NotFoundOrAmbiguousError):
            apply_edit("    return  x\n", "return x", "return y", settings=settings)

    def test_explicit_mode_overrides_settings(self):
        settings = EditSettings(mode="exact")
        result = apply_edit("    return  x\n", "return x", "return y", mode="auto", settings=settings)
        assert result.matches == 1

    def test_settings_thresholds(self):
        doc = "start\naaaa\nend\nstart\nbbbb\nend"
        settings = EditSettings(multiple_candidates_threshold=0.0)
        result = apply_edit(doc, "start\nzzzz\nend", "X", settings=settings)
        assert result.content == "X\nstart\nbbbb\nend"


class TestPipelineConsumption:
    def test_build_pipeline_modes(self):
        assert [name for name, _ in build_pipeline("exact")] == ["simple"]
        assert len(build_pipeline("auto")) == 6

    def test_later_strategies_not_started_after_success(self, monkeypatch):
        started = []

        def first(content, find):
            started.append("first")
            yield find

        def second(content, find):
            started.append("second")
            yield find

        monkeypatch.setattr(engine, "PIPELINE", (("first", first), ("second", second)))
        result = apply_edit("abc", "b", "x")
        assert result.strategy == "first"
        assert started == ["first"]

    def test_candidates_consumed_lazily(self, monkeypatch):
        consumed = []

        def replacer(content, find):
            for candidate in ("missing", "b", "never"):
                consumed.append(candidate)
                yield candidate

        monkeypatch.setattr(engine, "PIPELINE", (("only", replacer),))
        apply_edit("abc", "zzz", "x")
        assert consumed == ["missing", "b"]

    def test_empty_candidates_skipped(self, monkeypatch):
        def replacer(content, find):
            yield ""

        monkeypatch.setattr(engine, "PIPELINE", (("only", replacer),))
        with pytest.raises(NotFoundOrAmbiguousError):
            apply_edit("", "x", "y")

    def test_stateless_between_calls(self):
        first = apply_edit("A\nB\nC\n", "B", "X")
        second = apply_edit("A\nB\nC\n", "B", "X")
        assert first == second
