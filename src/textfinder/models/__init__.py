"""
Data models for textfinder.

This module contains all the core data structures used throughout the system.
"""

from .engine_state import EngineState
from .search_config import SearchConfiguration
from .search_results import MatchSpan, LineResult, FileResult, SearchSummary
from .settings import EngineSettings

__all__ = [
    'EngineState',
    'SearchConfiguration',
    'MatchSpan',
    'LineResult',
    'FileResult',
    'SearchSummary',
    'EngineSettings',
]
