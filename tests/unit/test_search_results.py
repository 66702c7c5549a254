"""
Unit tests for search results data models.

Tests the MatchSpan, LineResult, FileResult, and SearchSummary classes
to ensure proper validation, functionality, and data integrity.
"""

import pytest
from pydantic import ValidationError

from textfinder.models.search_config import SearchConfiguration
from textfinder.models.search_results import (
    MatchSpan, LineResult, FileResult, SearchSummary
)


def make_line(number=1, text="the quick foo fox", spans=((10, 13),)):
    return LineResult(
        line_number=number,
        text=text,
        spans=[MatchSpan(start=s, end=e) for s, e in spans]
    )


class TestMatchSpan:
    """Test cases for MatchSpan class."""

    def test_basic_creation(self):
        """Test span creation and helpers."""
        span = MatchSpan(start=2, end=5)
        assert span.length == 3
        assert span.as_tuple() == (2, 5)

    def test_empty_span_rejected(self):
        """Test that start must be below end."""
        with pytest.raises(ValidationError):
            MatchSpan(start=3, end=3)
        with pytest.raises(ValidationError):
            MatchSpan(start=4, end=2)

    def test_negative_start_rejected(self):
        """Test that negative offsets are rejected."""
        with pytest.raises(ValidationError):
            MatchSpan(start=-1, end=2)

    def test_frozen(self):
        """Test spans cannot be modified."""
        span = MatchSpan(start=0, end=1)
        with pytest.raises(ValidationError):
            span.start = 5


class TestLineResult:
    """Test cases for LineResult class."""

    def test_basic_creation(self):
        """Test line result with a single span."""
        line = make_line()
        assert line.line_number == 1
        assert line.get_match_count() == 1
        assert line.get_matched_segments() == ["foo"]

    def test_requires_spans(self):
        """Test a line result cannot exist without spans."""
        with pytest.raises(ValidationError):
            LineResult(line_number=1, text="foo", spans=[])

    def test_line_number_one_based(self):
        """Test line numbers start at 1."""
        with pytest.raises(ValidationError):
            make_line(number=0)

    def test_overlapping_spans_rejected(self):
        """Test spans must not overlap."""
        with pytest.raises(ValidationError):
            make_line(text="aaaa", spans=((0, 2), (1, 3)))

    def test_unsorted_spans_rejected(self):
        """Test spans must be ascending."""
        with pytest.raises(ValidationError):
            make_line(text="foo foo", spans=((4, 7), (0, 3)))

    def test_span_beyond_line_rejected(self):
        """Test spans must stay inside the text."""
        with pytest.raises(ValidationError):
            make_line(text="foo", spans=((0, 4),))

    def test_adjacent_spans_allowed(self):
        """Test touching spans are not overlapping."""
        line = make_line(text="aaaa", spans=((0, 2), (2, 4)))
        assert line.get_match_count() == 2

    def test_highlighted_text(self):
        """Test highlighting wraps every match and keeps the rest verbatim."""
        line = make_line(text="foo and foo!", spans=((0, 3), (8, 11)))
        assert line.get_highlighted_text() == "**foo** and **foo**!"
        assert line.get_highlighted_text("[", "]") == "[foo] and [foo]!"

    def test_to_dict(self):
        """Test dictionary conversion."""
        data = make_line().to_dict()
        assert data['line_number'] == 1
        assert data['spans'] == [(10, 13)]
        assert data['highlighted_text'] == "the quick **foo** fox"


class TestFileResult:
    """Test cases for FileResult class."""

    def test_basic_creation(self):
        """Test file result with path helpers."""
        result = FileResult(path="/data/notes/a.txt", lines=[make_line(3)])
        assert result.file_name == "a.txt"
        assert result.directory == "/data/notes"
        assert result.get_line_numbers() == [3]
        assert result.get_match_count() == 1

    def test_requires_lines(self):
        """Test a file result needs at least one line."""
        with pytest.raises(ValidationError):
            FileResult(path="/data/a.txt", lines=[])

    def test_lines_must_ascend(self):
        """Test line order is enforced."""
        with pytest.raises(ValidationError):
            FileResult(path="/data/a.txt", lines=[make_line(5), make_line(2)])
        with pytest.raises(ValidationError):
            FileResult(path="/data/a.txt", lines=[make_line(2), make_line(2)])

    def test_match_count_across_lines(self):
        """Test match count sums every line."""
        result = FileResult(path="/data/a.txt", lines=[
            make_line(1, "foo foo", ((0, 3), (4, 7))),
            make_line(4),
        ])
        assert result.get_match_count() == 3

    def test_string_representation(self):
        """Test __str__ output."""
        result = FileResult(path="/data/a.txt", lines=[make_line(3)])
        assert str(result) == "a.txt | Lines: 1 | Matches: 1"

    def test_to_dict(self):
        """Test dictionary conversion."""
        data = FileResult(path="/data/a.txt", lines=[make_line(3)]).to_dict()
        assert data['file_name'] == "a.txt"
        assert data['match_count'] == 1
        assert data['lines'][0]['line_number'] == 3


class TestSearchSummary:
    """Test cases for SearchSummary class."""

    def test_defaults(self):
        """Test an empty summary."""
        summary = SearchSummary()
        assert summary.get_match_count() == 0
        assert summary.has_errors() is False
        assert summary.cancelled is False

    def test_results_lookup(self):
        """Test result lookup and sorted paths."""
        summary = SearchSummary(results=[
            FileResult(path="/b.txt", lines=[make_line()]),
            FileResult(path="/a.txt", lines=[make_line()]),
        ])
        assert summary.get_paths() == ["/a.txt", "/b.txt"]
        assert summary.get_result("/a.txt").path == "/a.txt"
        assert summary.get_result("/missing.txt") is None

    def test_string_representation(self):
        """Test __str__ includes counters and flags."""
        summary = SearchSummary(files_scanned=7, execution_time=1.5,
                                errors=["boom"], cancelled=True)
        text = str(summary)
        assert "Found 0 files" in text
        assert "Scanned 7 files" in text
        assert "Took 1.50s" in text
        assert "Cancelled" in text
        assert "Errors: 1" in text

    def test_to_dict(self):
        """Test dictionary conversion including the configuration."""
        configuration = SearchConfiguration(root_path="/data", target_text="foo", extensions=".txt")
        summary = SearchSummary(configuration=configuration,
                                results=[FileResult(path="/data/a.txt", lines=[make_line()])])
        data = summary.to_dict()
        assert data['configuration']['extensions'] == ['.txt']
        assert data['match_count'] == 1
        assert isinstance(data['timestamp'], str)
