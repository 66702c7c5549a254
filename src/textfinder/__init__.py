"""
textfinder - Core Package

A concurrent engine that locates files containing a target text string,
reporting per-line match locations, live progress, and supporting cancellation.
"""

from .engine import (
    SearchEngine,
    SearchListener,
    CallbackListener,
    CollectingListener,
    search,
)
from .errors import (
    TextFinderError,
    SearchInProgressError,
    EngineDisposedError,
    ConfigurationError,
)
from .models import (
    SearchConfiguration,
    EngineSettings,
    EngineState,
    MatchSpan,
    LineResult,
    FileResult,
    SearchSummary,
)

__version__ = "0.1.0"
__author__ = "textfinder Team"

__all__ = [
    'SearchEngine',
    'SearchListener',
    'CallbackListener',
    'CollectingListener',
    'search',
    'TextFinderError',
    'SearchInProgressError',
    'EngineDisposedError',
    'ConfigurationError',
    'SearchConfiguration',
    'EngineSettings',
    'EngineState',
    'MatchSpan',
    'LineResult',
    'FileResult',
    'SearchSummary',
]
