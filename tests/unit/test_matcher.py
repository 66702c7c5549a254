"""
Unit tests for the line matcher.

Tests span ordering, non-overlapping resumption, case sensitivity,
and line numbering of scan_lines.
"""

import pytest

from textfinder.engine.matcher import find_matches, scan_lines


def spans_of(line, target, case_sensitive=True):
    return [span.as_tuple() for span in find_matches(line, target, case_sensitive)]


class TestFindMatches:
    """Test cases for find_matches."""

    def test_single_match(self):
        """Test one occurrence in the middle of a line."""
        assert spans_of("the quick foo fox", "foo") == [(10, 13)]

    def test_multiple_matches_sorted(self):
        """Test several occurrences come back in ascending order."""
        assert spans_of("foo bar foo baz foo", "foo") == [(0, 3), (8, 11), (16, 19)]

    def test_overlapping_candidates_collapse(self):
        """Test scanning resumes after the end of each occurrence."""
        assert spans_of("aaa", "aa") == [(0, 2)]
        assert spans_of("aaaa", "aa") == [(0, 2), (2, 4)]
        assert spans_of("abababa", "aba") == [(0, 3), (4, 7)]

    def test_no_match(self):
        """Test lines without the target yield no spans."""
        assert find_matches("nothing here", "foo") == []

    def test_empty_inputs(self):
        """Test empty line or empty target yields no spans."""
        assert find_matches("", "foo") == []
        assert find_matches("foo", "") == []

    def test_whole_line_match(self):
        """Test a target equal to the line."""
        assert spans_of("foo", "foo") == [(0, 3)]

    def test_target_longer_than_line(self):
        """Test a target longer than the line never matches."""
        assert find_matches("fo", "foo") == []

    def test_case_sensitive_by_default(self):
        """Test matching respects letter case by default."""
        assert spans_of("FOO foo", "foo") == [(4, 7)]

    def test_case_insensitive(self):
        """Test case-insensitive matching reports offsets into the original line."""
        assert spans_of("FOO foo Foo", "foo", case_sensitive=False) == [(0, 3), (4, 7), (8, 11)]

    def test_target_is_literal(self):
        """Test pattern metacharacters in the target are matched literally."""
        assert spans_of("a.c abc a.c", "a.c") == [(0, 3), (8, 11)]
        assert spans_of("x(1+2)*3", "(1+2)*", case_sensitive=False) == [(1, 7)]

    @pytest.mark.parametrize("line,target", [
        ("mississippi", "ss"),
        ("aaaaaaa", "aaa"),
        ("return 1; return 1;", "return 1"),
    ])
    def test_spans_invariants(self, line, target):
        """Test spans are sorted, disjoint, and inside the line."""
        spans = find_matches(line, target)
        previous_end = 0
        for span in spans:
            assert previous_end <= span.start < span.end <= len(line)
            assert line[span.start:span.end] == target
            previous_end = span.end


class TestScanLines:
    """Test cases for scan_lines."""

    def test_line_numbers_are_one_based(self):
        """Test only matching lines are returned with 1-based numbers."""
        lines = ["alpha\n", "beta\n", "the quick foo fox\n", "gamma"]
        results = list(scan_lines(lines, "foo"))

        assert len(results) == 1
        assert results[0].line_number == 3
        assert results[0].text == "the quick foo fox"
        assert [s.as_tuple() for s in results[0].spans] == [(10, 13)]

    def test_terminators_stripped(self):
        """Test line terminators are not part of the reported text."""
        results = list(scan_lines(["foo\r\n", "foo\n"], "foo"))
        assert [r.text for r in results] == ["foo", "foo"]

    def test_ascending_order(self):
        """Test results follow input order."""
        results = list(scan_lines(["x foo", "none", "foo foo"], "foo"))
        assert [r.line_number for r in results] == [1, 3]
        assert results[1].get_match_count() == 2

    def test_no_matches(self):
        """Test an input without the target yields nothing."""
        assert list(scan_lines(["a", "b"], "foo")) == []
