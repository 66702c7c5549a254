"""
Per-line substring matching.

Matching is literal: the target is never interpreted as a pattern. Occurrences
are reported left to right, and scanning resumes after the end of each
occurrence, so overlapping candidates collapse to the leftmost set
("aa" in "aaa" yields only [0, 2)).
"""

import re
from functools import lru_cache
from typing import Iterable, Iterator, List

from ..models.search_results import LineResult, MatchSpan


@lru_cache(maxsize=32)
def _compile_ignore_case(target: str) -> re.Pattern:
    # Escaped, so the regex engine only supplies case folding and the offsets
    # stay relative to the original line.
    return re.compile(re.escape(target), re.IGNORECASE)


def find_matches(line: str, target: str, case_sensitive: bool = True) -> List[MatchSpan]:
    """
    Find every non-overlapping occurrence of ``target`` in ``line``.

    Args:
        line: Text of one line, without its terminator
        target: Literal text to look for
        case_sensitive: Whether letter case must match exactly

    Returns:
        Spans sorted by start; empty if there is no occurrence or target is empty
    """
    if not target or not line:
        return []

    if not case_sensitive:
        return [MatchSpan(start=m.start(), end=m.end())
                for m in _compile_ignore_case(target).finditer(line)]

    spans = []
    width = len(target)
    start = line.find(target)
    while start >= 0:
        spans.append(MatchSpan(start=start, end=start + width))
        start = line.find(target, start + width)
    return spans


def scan_lines(lines: Iterable[str], target: str, case_sensitive: bool = True) -> Iterator[LineResult]:
    """
    Run ``find_matches`` over a sequence of lines.

    Line terminators are stripped before matching. Only lines with at least one
    span are yielded, numbered from 1 in input order.
    """
    for line_number, raw in enumerate(lines, 1):
        text = raw.rstrip('\r\n')
        spans = find_matches(text, target, case_sensitive)
        if spans:
            yield LineResult(line_number=line_number, text=text, spans=spans)
