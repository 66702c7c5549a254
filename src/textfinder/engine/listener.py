"""
Listener interfaces for search events.

The engine delivers every event from a single dispatcher thread, so listener
methods are never called concurrently for one engine and need no locking.
"""

import logging
import time
from typing import Callable, List, Optional

from ..models.search_config import SearchConfiguration
from ..models.search_results import FileResult, LineResult, SearchSummary


logger = logging.getLogger(__name__)


class SearchListener:
    """
    Base listener with one method per event channel. All methods are no-ops;
    subclasses override the channels they care about.
    """

    def on_progress(self, path: str, is_file: bool) -> None:
        """A directory was reached or a file was opened for scanning."""

    def on_found(self, path: str, lines: List[LineResult]) -> None:
        """A file contained the target text; ``lines`` are in file order."""

    def on_error(self, message: str) -> None:
        """Something could not be searched. The search continues."""

    def on_complete(self) -> None:
        """The search ended. Called exactly once per start."""


class CallbackListener(SearchListener):
    """Listener that forwards each channel to an optional plain callable."""

    def __init__(self,
                 on_progress: Optional[Callable[[str, bool], None]] = None,
                 on_found: Optional[Callable[[str, List[LineResult]], None]] = None,
                 on_error: Optional[Callable[[str], None]] = None,
                 on_complete: Optional[Callable[[], None]] = None):
        self._on_progress = on_progress
        self._on_found = on_found
        self._on_error = on_error
        self._on_complete = on_complete

    def on_progress(self, path: str, is_file: bool) -> None:
        if self._on_progress:
            self._on_progress(path, is_file)

    def on_found(self, path: str, lines: List[LineResult]) -> None:
        if self._on_found:
            self._on_found(path, lines)

    def on_error(self, message: str) -> None:
        if self._on_error:
            self._on_error(message)

    def on_complete(self) -> None:
        if self._on_complete:
            self._on_complete()


class CollectingListener(SearchListener):
    """
    Listener that accumulates every event into a ``SearchSummary``.

    Counts scanned files and visited directories from progress events and
    measures elapsed time from construction (or the last ``reset``) until
    completion.
    """

    def __init__(self, configuration: Optional[SearchConfiguration] = None):
        self.reset(configuration)

    def reset(self, configuration: Optional[SearchConfiguration] = None) -> None:
        """Start a fresh summary, e.g. before reusing the listener for another search."""
        self.summary = SearchSummary(configuration=configuration)
        self.completions = 0
        self._started = time.monotonic()

    def on_progress(self, path: str, is_file: bool) -> None:
        if is_file:
            self.summary.files_scanned += 1
        else:
            self.summary.directories_visited += 1

    def on_found(self, path: str, lines: List[LineResult]) -> None:
        self.summary.results.append(FileResult(path=path, lines=lines))

    def on_error(self, message: str) -> None:
        self.summary.errors.append(message)

    def on_complete(self) -> None:
        self.completions += 1
        self.summary.execution_time = time.monotonic() - self._started
        logger.debug(f"Collected summary: {self.summary}")
