"""
Search results data models for textfinder.

This module defines the structures carried by found events: match spans within a
line, matching lines, and the per-file result, plus the summary of a whole search.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .search_config import SearchConfiguration


class MatchSpan(BaseModel):
    """
    Half-open [start, end) offset range of one occurrence within a line.

    Attributes:
        start: Offset of the first matched character
        end: Offset one past the last matched character
    """

    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=0, description="Offset of the first matched character")
    end: int = Field(..., gt=0, description="Offset one past the last matched character")

    @model_validator(mode='after')
    def validate_span(self):
        """A span must cover at least one character."""
        if self.end <= self.start:
            raise ValueError("Span end must be greater than span start")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)


class LineResult(BaseModel):
    """
    A line that contains at least one occurrence of the target text.

    Attributes:
        line_number: Line number within the file (1-based)
        text: Full line text without the line terminator
        spans: Ordered, non-overlapping match spans within the text
    """

    line_number: int = Field(..., ge=1, description="Line number (1-based)")
    text: str = Field(..., description="Full line text")
    spans: List[MatchSpan] = Field(..., min_length=1, description="Ordered match spans")

    @model_validator(mode='after')
    def validate_spans(self):
        """Spans must be sorted, disjoint, and inside the line."""
        previous_end = 0
        for span in self.spans:
            if span.start < previous_end:
                raise ValueError("Spans must be sorted by start and must not overlap")
            if span.end > len(self.text):
                raise ValueError("Span end exceeds line length")
            previous_end = span.end
        return self

    def get_match_count(self) -> int:
        """Get the number of occurrences on this line."""
        return len(self.spans)

    def get_matched_segments(self) -> List[str]:
        """Get the matched substrings in order."""
        return [self.text[span.start:span.end] for span in self.spans]

    def get_highlighted_text(self, highlight_start: str = "**", highlight_end: str = "**") -> str:
        """Get the line with every match wrapped in the given markers."""
        parts = []
        last = 0
        for span in self.spans:
            parts.append(self.text[last:span.start])
            parts.append(f"{highlight_start}{self.text[span.start:span.end]}{highlight_end}")
            last = span.end
        parts.append(self.text[last:])
        return "".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the line result to dictionary representation."""
        return {
            'line_number': self.line_number,
            'text': self.text,
            'spans': [span.as_tuple() for span in self.spans],
            'highlighted_text': self.get_highlighted_text(),
        }


class FileResult(BaseModel):
    """
    A file with at least one matching line.

    Attributes:
        path: Path of the file as discovered during traversal
        lines: Matching lines in ascending line order
    """

    path: str = Field(..., min_length=1, description="Path of the matching file")
    lines: List[LineResult] = Field(..., min_length=1, description="Matching lines in file order")

    @model_validator(mode='after')
    def validate_lines(self):
        """Line numbers must be strictly ascending."""
        previous = 0
        for line in self.lines:
            if line.line_number <= previous:
                raise ValueError("Line results must be in strictly ascending line order")
            previous = line.line_number
        return self

    @property
    def file_name(self) -> str:
        return Path(self.path).name

    @property
    def directory(self) -> str:
        return str(Path(self.path).parent)

    def get_line_numbers(self) -> List[int]:
        """Get the numbers of all matching lines."""
        return [line.line_number for line in self.lines]

    def get_match_count(self) -> int:
        """Get the total number of occurrences in the file."""
        return sum(line.get_match_count() for line in self.lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert file result to dictionary representation."""
        return {
            'path': self.path,
            'file_name': self.file_name,
            'directory': self.directory,
            'match_count': self.get_match_count(),
            'lines': [line.to_dict() for line in self.lines],
        }

    def __str__(self) -> str:
        """String representation of the file result."""
        return f"{self.file_name} | Lines: {len(self.lines)} | Matches: {self.get_match_count()}"


class SearchSummary(BaseModel):
    """
    Everything observed during one search, gathered from its events.

    Attributes:
        configuration: The configuration the search ran with
        results: Files that contained the target text
        errors: Error messages reported during the search
        files_scanned: Number of files opened for scanning
        directories_visited: Number of directory progress events
        execution_time: Seconds between start and completion
        cancelled: Whether the search was stopped before exhausting the tree
        timestamp: When the search was started
    """

    configuration: Optional[SearchConfiguration] = Field(None, description="The configuration the search ran with")
    results: List[FileResult] = Field(default_factory=list, description="Files with matches")
    errors: List[str] = Field(default_factory=list, description="Reported error messages")
    files_scanned: int = Field(0, ge=0, description="Number of files scanned")
    directories_visited: int = Field(0, ge=0, description="Number of directories reported")
    execution_time: float = Field(0.0, ge=0.0, description="Elapsed seconds")
    cancelled: bool = Field(False, description="Whether the search was stopped early")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the search started")

    def get_match_count(self) -> int:
        """Get the number of matching files."""
        return len(self.results)

    def get_paths(self) -> List[str]:
        """Get matching file paths sorted alphabetically."""
        return sorted(result.path for result in self.results)

    def get_result(self, path: str) -> Optional[FileResult]:
        """Look up the result for a given path."""
        for result in self.results:
            if result.path == path:
                return result
        return None

    def has_errors(self) -> bool:
        """Check if any errors occurred during the search."""
        return len(self.errors) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert the summary to dictionary representation."""
        return {
            'configuration': self.configuration.to_dict() if self.configuration else None,
            'results': [result.to_dict() for result in self.results],
            'errors': list(self.errors),
            'files_scanned': self.files_scanned,
            'directories_visited': self.directories_visited,
            'execution_time': self.execution_time,
            'cancelled': self.cancelled,
            'timestamp': self.timestamp.isoformat(),
            'match_count': self.get_match_count(),
        }

    def __str__(self) -> str:
        """String representation of the summary."""
        parts = [f"Found {self.get_match_count()} files"]
        parts.append(f"Scanned {self.files_scanned} files")
        parts.append(f"Took {self.execution_time:.2f}s")
        if self.cancelled:
            parts.append("Cancelled")
        if self.has_errors():
            parts.append(f"Errors: {len(self.errors)}")
        return " | ".join(parts)
