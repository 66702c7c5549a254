"""
Search engine components for textfinder.

This package contains the pending-work frontier, the line matcher, the
traversal workers, and the engine facade that wires them together.
"""

from .frontier import Frontier
from .matcher import find_matches, scan_lines
from .listener import SearchListener, CallbackListener, CollectingListener
from .search_engine import SearchEngine, search

__all__ = [
    'Frontier',
    'find_matches',
    'scan_lines',
    'SearchListener',
    'CallbackListener',
    'CollectingListener',
    'SearchEngine',
    'search',
]
