"""
Traversal workers for the search engine.

A ``SearchRun`` holds the state shared by all workers of one search: the
frontier of directories still to expand, the outstanding-work counter, the
cancellation flag, and the queue feeding the event dispatcher. Frontier and
counters are only touched while holding ``SearchRun.condition``.

Each ``SearchWorker`` pops a directory, enumerates its immediate entries,
pushes subdirectories back onto the frontier, and scans eligible files inline.
The search is exhausted when the outstanding counter reaches zero, which can
only be observed together with an empty frontier because both change under the
same lock.
"""

import os
import queue
import stat
import threading
import logging
from enum import Enum
from typing import Optional, Tuple

from .frontier import Frontier
from .matcher import scan_lines
from ..models.search_config import SearchConfiguration
from ..models.search_results import FileResult
from ..models.settings import EngineSettings


logger = logging.getLogger(__name__)

HIDDEN_PREFIX = '.'


class SearchEvent(Enum):
    """Event channels, valued by the listener method that receives them."""
    PROGRESS = "on_progress"
    FOUND = "on_found"
    ERROR = "on_error"
    COMPLETE = "on_complete"


def is_hidden(entry: os.DirEntry) -> bool:
    """Check the hidden marker, and on Windows the hidden file attribute."""
    if entry.name.startswith(HIDDEN_PREFIX):
        return True
    if os.name == 'nt':
        attributes = getattr(entry.stat(follow_symlinks=False), 'st_file_attributes', 0)
        return bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)
    return False


class SearchRun:
    """
    Shared state of one search.

    Attributes:
        configuration: The immutable search parameters
        settings: Engine settings in effect for this run
        frontier: Directories waiting to be expanded
        condition: Lock guarding frontier, outstanding and live_workers
        outstanding: Directories pushed but not yet fully processed
        live_workers: Workers that have not exited their loop yet
        cancelled: Cooperative cancellation flag
        events: Queue drained by the engine's dispatcher thread
        completed: Set once the completion event has been delivered
    """

    def __init__(self, configuration: SearchConfiguration, settings: EngineSettings):
        self.configuration = configuration
        self.settings = settings
        self.frontier: Frontier[str] = Frontier(settings.frontier_capacity)
        self.condition = threading.Condition()
        self.outstanding = 0
        self.live_workers = 0
        self.cancelled = threading.Event()
        self.events: "queue.Queue[Tuple[SearchEvent, tuple]]" = queue.Queue()
        self.completed = threading.Event()
        self.muted = False

    def seed(self, root: str, worker_count: int) -> None:
        """Queue the root directory and register the workers about to start."""
        with self.condition:
            self.frontier.clear()
            self.frontier.push(root)
            self.outstanding = 1
            self.live_workers = worker_count

    def cancel(self) -> None:
        """Ask every worker to stop and wake the ones waiting for work."""
        self.cancelled.set()
        with self.condition:
            self.condition.notify_all()

    @property
    def is_cancelled(self) -> bool:
        return self.cancelled.is_set()

    def next_directory(self) -> Optional[str]:
        """
        Block until a directory is available.

        Returns None when the search is exhausted or cancelled.
        """
        with self.condition:
            while True:
                if self.cancelled.is_set():
                    return None
                directory, ok = self.frontier.try_pop()
                if ok:
                    return directory
                if self.outstanding == 0:
                    return None
                # a sibling is still expanding and may push more work
                self.condition.wait()

    def push_directory(self, directory: str) -> None:
        with self.condition:
            self.frontier.push(directory)
            self.outstanding += 1
            self.condition.notify()

    def finish_directory(self) -> None:
        with self.condition:
            self.outstanding -= 1
            if self.outstanding == 0:
                self.condition.notify_all()

    def worker_exited(self) -> None:
        """Deregister a worker; the last one out posts the completion event."""
        with self.condition:
            self.live_workers -= 1
            last = self.live_workers == 0
        if last:
            self.post(SearchEvent.COMPLETE)

    def post(self, event: SearchEvent, *args) -> None:
        self.events.put((event, args))

    def report_progress(self, path: str, is_file: bool) -> None:
        if not self.is_cancelled:
            self.post(SearchEvent.PROGRESS, path, is_file)

    def report_found(self, result: FileResult) -> None:
        if not self.is_cancelled:
            self.post(SearchEvent.FOUND, result.path, result.lines)

    def report_error(self, message: str) -> None:
        self.post(SearchEvent.ERROR, message)


class SearchWorker:
    """One traversal loop; a pool of these shares a single ``SearchRun``."""

    def __init__(self, run: SearchRun):
        self.run = run
        self.configuration = run.configuration
        self.settings = run.settings

    def __call__(self) -> None:
        try:
            while True:
                directory = self.run.next_directory()
                if directory is None:
                    break
                try:
                    self.expand_directory(directory)
                except Exception as e:
                    logger.exception(f"Unexpected error while searching {directory}")
                    self.run.report_error(f"Unexpected error while searching {directory}: {e}")
                finally:
                    self.run.finish_directory()
        finally:
            self.run.worker_exited()

    def expand_directory(self, directory: str) -> None:
        """Visit the immediate entries of one directory."""
        try:
            entries = os.scandir(directory)
        except OSError as e:
            logger.warning(f"Cannot open directory {directory}: {e}")
            self.run.report_error(f"Cannot open directory {directory}: {e}")
            return

        with entries:
            try:
                for entry in entries:
                    if self.run.is_cancelled:
                        return
                    try:
                        self.visit_entry(entry)
                    except OSError as e:
                        logger.warning(f"Cannot access {entry.path}: {e}")
                        self.run.report_error(f"Cannot access {entry.path}: {e}")
                    except Exception as e:
                        logger.exception(f"Unexpected error while searching {entry.path}")
                        self.run.report_error(f"Unexpected error while searching {entry.path}: {e}")
            except OSError as e:
                logger.warning(f"Error listing directory {directory}: {e}")
                self.run.report_error(f"Error listing directory {directory}: {e}")

    def visit_entry(self, entry: os.DirEntry) -> None:
        if not self.configuration.include_hidden and is_hidden(entry):
            logger.debug(f"Skipping hidden entry: {entry.path}")
            return

        # Directory symlinks are not followed, so link cycles cannot occur.
        if entry.is_dir(follow_symlinks=False):
            if self.configuration.recursive:
                self.run.push_directory(entry.path)
            self.run.report_progress(entry.path, False)
            return

        if not entry.is_file():
            return

        if not self.configuration.allows_extension(entry.name):
            return

        limit = self.settings.max_bytes_per_file
        if limit is not None and entry.stat().st_size > limit:
            logger.debug(f"Skipping large file: {entry.path}")
            return

        self.scan_file(entry.path)

    def scan_file(self, path: str) -> None:
        """Stream a file line by line and report a found event if anything matched."""
        config = self.configuration
        try:
            with open(path, 'r', encoding=self.settings.encoding,
                      errors=self.settings.encoding_errors) as handle:
                self.run.report_progress(path, True)
                lines = list(scan_lines(handle, config.target_text, config.case_sensitive))
        except (OSError, UnicodeError) as e:
            logger.warning(f"Error reading {path}: {e}")
            self.run.report_error(f"Error reading {path}: {e}")
            return

        if lines:
            self.run.report_found(FileResult(path=path, lines=lines))
